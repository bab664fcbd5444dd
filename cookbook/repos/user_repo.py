"""Repository helpers for user lookups."""

from typing import Optional

from django.db.models import ExpressionWrapper, F, FloatField
from django.db.models.functions import Cast

from cookbook.db_accessor import DBAccessor
from cookbook.models.user import User


class UserRepo(DBAccessor):
    """Repository for basic user queries."""
    resource = "user"

    def __init__(self) -> None:
        """Initialise with the User model."""
        super().__init__(User)

    def get_by_id(self, user_id: int) -> User:
        """Return a user by id."""
        return self.get(id=user_id)

    def lock_by_id(self, user_id: int) -> User:
        """Return a user by id, holding a row lock until the transaction ends."""
        return self.get_for_update(id=user_id)

    def top_follow_ratio(self) -> Optional[User]:
        """Return the active user with the highest follower/following ratio.

        Users following nobody are skipped. Ties go to the lowest id. The
        ratio is exposed as `follow_ratio` on the returned row.
        """
        ratio = ExpressionWrapper(
            Cast("follower_count", FloatField()) / F("following_count"),
            output_field=FloatField(),
        )
        return (
            self.model.objects.filter(deleted=False, following_count__gt=0)
            .annotate(follow_ratio=ratio)
            .order_by("-follow_ratio", "id")
            .first()
        )
