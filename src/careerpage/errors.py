"""Domain error taxonomy shared by services and routers."""

from __future__ import annotations

from typing import Any


class CareerPageError(Exception):
    """
    Base class for every error surfaced at the action boundary.

    Attributes:
        message: Human-readable error message
        details: Optional structured detail (field errors, ids, ...)
        status_code: HTTP status used when the error reaches the API layer
    """

    status_code: int = 400

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Serialize as the ``{error, details?}`` action result."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(CareerPageError):
    """Input failed a shape or constraint check before any write happened."""

    status_code = 422

    def __init__(
        self,
        message: str = "Invalid data",
        fields: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, {"fields": fields} if fields else None)
        self.fields = fields or {}


class DuplicateSlugError(CareerPageError):
    """The store rejected a slug because it is already taken."""

    status_code = 409

    def __init__(self, slug: str, entity: str = "Company") -> None:
        super().__init__(f"{entity} with this slug already exists", {"slug": slug})
        self.slug = slug


class StoreError(CareerPageError):
    """Generic persistence failure; the operation is not retried."""

    status_code = 500


class NotFoundError(CareerPageError):
    """Referenced entity does not exist (or is not visible to the caller)."""

    status_code = 404

    def __init__(self, resource: str, identifier: Any = None) -> None:
        if identifier is None:
            message = f"{resource} not found"
        else:
            message = f"{resource} with id {identifier} not found"
        super().__init__(message)
        self.resource = resource


class AuthError(CareerPageError):
    """No authenticated principal was supplied."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)
