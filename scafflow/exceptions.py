"""
Typed exceptions for the project data-access layer.

Every failure carries a machine-readable ``code`` so callers can tell
"not logged in", "not allowed", "doesn't exist" and "bad input" apart
without parsing messages. The API layer maps each class to an HTTP status.

    ScafflowError
    +-- Unauthenticated      401  no or invalid credential
    +-- Forbidden            403  identity resolved, access denied
    +-- NotFound             404  referenced project or record absent
    +-- InvalidInput         400  missing required field or wrong type
    +-- Conflict             409  unique value already taken
    +-- IntegrityViolation   500  stored data breaks a core invariant
"""

from typing import Any, Dict, List, Optional


class ScafflowError(Exception):
    """Base exception for all domain errors."""

    code: str = "SCAFFLOW_ERROR"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class Unauthenticated(ScafflowError):
    """No identity could be established for the caller."""

    code: str = "UNAUTHENTICATED"

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail)


class Forbidden(ScafflowError):
    """The caller is known but may not perform this action."""

    code: str = "FORBIDDEN"

    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(detail)


class NotFound(ScafflowError):
    """A referenced project or record does not exist."""

    code: str = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Any):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} with id {resource_id} not found")


class InvalidInput(ScafflowError):
    """Payload is missing required fields or carries values of the wrong type."""

    code: str = "INVALID_INPUT"

    def __init__(
        self,
        detail: str = "Validation failed",
        errors: Optional[List[Dict[str, str]]] = None,
    ):
        self.errors = errors or []
        super().__init__(detail)


class Conflict(ScafflowError):
    """A unique value is already taken."""

    code: str = "CONFLICT"


class IntegrityViolation(ScafflowError):
    """Stored state breaks an invariant the core relies on; not user-correctable."""

    code: str = "INTEGRITY_VIOLATION"
