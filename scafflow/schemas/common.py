"""Field types shared by request schemas"""

from typing import Annotated
from pydantic import Field

# Numeric(15, 2) holds 13 integer digits; a variance (a - b) must fit as well
MONEY_LIMIT = 5 * 10 ** 12

# Finite currency amount that fits the money columns
Money = Annotated[float, Field(allow_inf_nan=False, gt=-MONEY_LIMIT, lt=MONEY_LIMIT)]
