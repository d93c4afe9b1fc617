"""
Domain errors raised by the catalog services.

Each error carries the HTTP status it is surfaced with; the handlers in
``catalog.main`` turn them into the error envelope.
"""

from typing import Any, Dict, List, Optional


class CatalogError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status(self) -> str:
        return "fail" if self.status_code < 500 else "error"


class NotFoundError(CatalogError):
    """No document matched the given id or slug."""

    status_code = 404


class ValidationFailure(CatalogError):
    """A schema or uniqueness constraint was violated on create/update."""

    status_code = 422

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.details = details or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailure":
        return cls(f"Invalid {field}: {message}", [{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationFailure":
        details = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return cls("Validation failed", details)


class CategoryCycleError(CatalogError):
    """The parent/child relation contains a cycle."""

    status_code = 500

    def __init__(self, category_id: str):
        super().__init__(f"Cycle detected in category tree at {category_id}")
        self.category_id = category_id


class MediaStoreError(CatalogError):
    """The media store failed to save or delete an asset."""

    status_code = 502
