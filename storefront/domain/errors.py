# storefront/domain/errors.py
from typing import Any


class StorefrontError(Exception):
    """Base for errors raised by services and rendered by the API layer."""

    status_code = 500
    kind = "InternalError"

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.kind, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(StorefrontError):
    status_code = 400
    kind = "ValidationError"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, details={field: [message]})


class UnauthenticatedError(StorefrontError):
    status_code = 401
    kind = "UnauthenticatedError"


class ForbiddenError(StorefrontError):
    status_code = 403
    kind = "ForbiddenError"


class NotFoundError(StorefrontError):
    status_code = 404
    kind = "NotFoundError"


class ConflictError(StorefrontError):
    status_code = 409
    kind = "ConflictError"


class UpstreamAssetError(StorefrontError):
    """Image upload or delete against object storage failed."""

    status_code = 500
    kind = "UpstreamAssetError"


class InternalError(StorefrontError):
    status_code = 500
    kind = "InternalError"


def field_details(errors) -> dict:
    """Group pydantic error entries by field name: {"price": ["..."]}."""
    details: dict[str, list[str]] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "__root__"
        details.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return details
