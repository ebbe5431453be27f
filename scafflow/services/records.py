"""Conversion between request payloads, ORM rows and typed records"""

import enum
import logging
from typing import Any, Dict, Mapping, Type, TypeVar, Union
from pydantic import BaseModel, ValidationError

from scafflow.exceptions import InvalidInput, IntegrityViolation

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _field_errors(exc: ValidationError) -> list:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "body",
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


def validate_payload(
    schema: Type[SchemaT], payload: Union[Mapping[str, Any], BaseModel]
) -> SchemaT:
    """
    Validate an incoming payload against an entity schema.

    Args:
        schema: Pydantic schema for the operation
        payload: Raw mapping or an already-parsed model

    Returns:
        Validated schema instance

    Raises:
        InvalidInput: If required fields are missing or have the wrong type
    """
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise InvalidInput(f"Invalid {schema.__name__} payload", errors=_field_errors(e))


def column_values(data: BaseModel, **dump_options: Any) -> Dict[str, Any]:
    """Dump a validated schema to column values, storing enums by value"""
    return {
        field: value.value if isinstance(value, enum.Enum) else value
        for field, value in data.model_dump(**dump_options).items()
    }


def to_record(schema: Type[SchemaT], row: Any, **extra: Any) -> SchemaT:
    """
    Build a typed record from a storage row.

    Raises:
        IntegrityViolation: If the row is missing required fields
    """
    try:
        record = schema.model_validate(row)
    except ValidationError as e:
        logger.error(f"Malformed {schema.__name__} row {getattr(row, 'id', None)}: {e}")
        raise IntegrityViolation(f"Stored row does not satisfy {schema.__name__}")
    if extra:
        record = record.model_copy(update=extra)
    return record
