from typing import Any, Mapping, Optional, Sequence, Type
from django.db.models import F, Model, QuerySet

from cookbook.exceptions import NotFoundError


class DBAccessor:
    """Generic data accessor to wrap basic queryset operations."""

    resource = "row"

    def __init__(self, model: Type[Model]) -> None:
        self.model = model

    def list(
        self,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[str] = (),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> QuerySet:
        """Return a filtered/sliced queryset."""
        qs: QuerySet = self.model.objects.filter(**(filters or {}))
        qs = self._apply_ordering(qs, order_by)
        qs = self._apply_slice(qs, offset=offset, limit=limit)
        return qs

    def _apply_ordering(self, qs: QuerySet, order_by: Sequence[str]) -> QuerySet:
        return qs.order_by(*order_by) if order_by else qs

    def _apply_slice(
        self, qs: QuerySet, *, offset: int = 0, limit: Optional[int] = None
    ) -> QuerySet:
        if not (offset or limit is not None):
            return qs
        start = max(0, int(offset))
        end = None if limit is None else start + max(0, int(limit))
        return qs[start:end]

    def get(self, **lookup: Any) -> Model:
        """Fetch a single object matching the lookup or raise NotFoundError."""
        return self._get(self.model.objects.all(), lookup)

    def get_for_update(self, **lookup: Any) -> Model:
        """Fetch and row-lock a single object; must run inside a transaction."""
        return self._get(self.model.objects.select_for_update(), lookup)

    def _get(self, qs: QuerySet, lookup: Mapping[str, Any]) -> Model:
        try:
            return qs.get(**lookup)
        except self.model.DoesNotExist:
            raise NotFoundError(self.resource, _lookup_id(lookup)) from None

    def exists(self, **lookup: Any) -> bool:
        """Return True if any object matches the lookup."""
        return self.model.objects.filter(**lookup).exists()

    def create(self, **data: Any) -> Model:
        """Create and return a new object."""
        return self.model.objects.create(**data)

    def update(self, lookup: Mapping[str, Any], **data: Any) -> int:
        """Update objects matching lookup; return count updated."""
        return self.model.objects.filter(**lookup).update(**data)

    def adjust(self, lookup: Mapping[str, Any], **deltas: int) -> int:
        """Add signed deltas to integer columns in one UPDATE; return count updated."""
        changes = {field: F(field) + delta for field, delta in deltas.items() if delta}
        if not changes:
            return 0
        return self.model.objects.filter(**lookup).update(**changes)

    def delete(self, **lookup: Any) -> int:
        """Delete objects matching lookup; return count of rows of this model deleted."""
        _, per_model = self.model.objects.filter(**lookup).delete()
        return per_model.get(self.model._meta.label, 0)


def _lookup_id(lookup: Mapping[str, Any]) -> Any:
    for key in ("id", "pk"):
        if key in lookup:
            return lookup[key]
    return dict(lookup)
