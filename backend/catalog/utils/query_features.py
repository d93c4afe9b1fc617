"""
Sorting, field projection and pagination for list endpoints.
"""

from typing import Iterable, Optional, Set

from sqlalchemy.orm import Query

from catalog.exceptions import ValidationFailure
from catalog.schemas.category import Pagination


def _split(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class QueryFeatures:
    """
    Chainable helpers applied to a SQLAlchemy query:

        features = QueryFeatures(query, Category, sort="-name", page=2, limit=10)
        features.sort().limit_fields(allowed).paginate(total)
        items = features.query.all()

    ``sort`` is a comma-separated list of column names, each optionally
    prefixed with ``-`` for descending order. ``fields`` is a comma-separated
    projection applied when results are serialized.
    """

    DEFAULT_SORT = "-created_at"

    def __init__(
        self,
        query: Query,
        model,
        sort: Optional[str] = None,
        fields: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ):
        self.query = query
        self.model = model
        self._sort = sort
        self._fields = fields
        self.page = page
        self.limit = limit
        self.fields: Optional[Set[str]] = None
        self.pagination: Optional[Pagination] = None

    def sort(self) -> "QueryFeatures":
        columns = self.model.__table__.columns
        order_by = []
        for key in _split(self._sort) or _split(self.DEFAULT_SORT):
            descending = key.startswith("-")
            name = key.lstrip("-")
            if name not in columns:
                raise ValidationFailure.for_field("sort", f"Cannot sort by '{name}'")
            column = getattr(self.model, name)
            order_by.append(column.desc() if descending else column.asc())

        # Stable order for rows sharing the same sort values
        order_by.append(self.model.id.asc())
        self.query = self.query.order_by(*order_by)
        return self

    def limit_fields(self, allowed: Iterable[str]) -> "QueryFeatures":
        requested = _split(self._fields)
        if not requested:
            return self

        allowed = set(allowed)
        unknown = [name for name in requested if name not in allowed]
        if unknown:
            raise ValidationFailure.for_field(
                "fields", f"Unknown fields: {', '.join(unknown)}"
            )
        self.fields = set(requested) | {"id"}
        return self

    def paginate(self, total: int) -> "QueryFeatures":
        pages = (total + self.limit - 1) // self.limit
        self.query = self.query.offset((self.page - 1) * self.limit).limit(self.limit)
        self.pagination = Pagination(
            total=total,
            page=self.page,
            limit=self.limit,
            pages=pages,
            has_next=self.page < pages,
            has_prev=self.page > 1
        )
        return self
