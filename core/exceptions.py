"""
Application error taxonomy.

Services and storage raise these; main.py turns them into HTTP responses
with a {"detail": message} body.
"""

from starlette import status


class StorefrontError(Exception):
    """Base class for all errors the API knows how to report."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Malformed client input. The message lists every failing field.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        self.errors = list(errors or [])
        if message is None and self.errors:
            message = "Validation error: " + "; ".join(self.errors)
        super().__init__(message)


class NotFoundError(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConstraintViolation(StorefrontError):
    """A store-level uniqueness or integrity rule was broken."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Constraint violation"


class PersistenceError(StorefrontError):
    """
    Unexpected store failure. The message is what the client sees, so it
    never carries driver or SQL detail.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage failure"


# Location prefixes FastAPI adds that mean nothing to the client
_LOCATION_PREFIXES = ("body", "path", "query")


def describe_validation_errors(errors) -> list[str]:
    """
    Turn pydantic error dicts into "field: message" strings.

    Messages raised from our own field validators are used as written,
    without pydantic's "Value error, " prefix.
    """
    described = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _LOCATION_PREFIXES:
            location = location[1:]

        message = error.get("msg", "Invalid value")
        original = (error.get("ctx") or {}).get("error")
        if isinstance(original, ValueError):
            message = str(original)

        field = ".".join(location)
        described.append(f"{field}: {message}" if field else message)
    return described
