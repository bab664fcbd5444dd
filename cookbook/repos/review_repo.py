"""Repository helpers for reviews."""

from typing import Optional, Sequence, Tuple

from django.db.models import Count, QuerySet, Sum

from cookbook.db_accessor import DBAccessor
from cookbook.models import Review


class ReviewRepo(DBAccessor):
    """Repository for Review queries."""
    resource = "review"

    def __init__(self) -> None:
        """Initialise with the Review model."""
        super().__init__(Review)

    def get_by_id(self, review_id: int) -> Review:
        """Return a review by id."""
        return self.get(id=review_id)

    def get_with_author(self, review_id: int) -> Review:
        """Return a review by id with its author loaded."""
        return self._get(self.model.objects.select_related("author"), {"id": review_id})

    def rating_stats(self, recipe_id: int) -> Tuple[int, int]:
        """Return (count, sum of ratings) over the recipe's current reviews."""
        stats = self.model.objects.filter(recipe_id=recipe_id).aggregate(
            count=Count("id"), total=Sum("rating")
        )
        return stats["count"] or 0, stats["total"] or 0

    def list_for_recipe(
        self,
        recipe_id: int,
        *,
        order_by: Sequence[str] = ("-modified_at", "-id"),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> QuerySet:
        """Return reviews on a recipe with ordering and paging."""
        return self.list(
            filters={"recipe_id": recipe_id},
            order_by=order_by,
            limit=limit,
            offset=offset,
        )
