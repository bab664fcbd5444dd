"""Repository for two-column relation tables (follow edges, review likes)."""

import logging
from typing import List

from django.db import IntegrityError, transaction
from django.db.models import Model

from cookbook.db_accessor import DBAccessor
from cookbook.models import FollowEdge, ReviewLike

logger = logging.getLogger(__name__)


class EdgeRepo(DBAccessor):
    """Edge table keyed by a (subject, object) pair under a unique constraint."""

    def __init__(self, model, *, subject_field: str, object_field: str) -> None:
        """Bind the edge model and the names of its two key columns."""
        super().__init__(model)
        self.subject_field = subject_field
        self.object_field = object_field
        self.resource = model._meta.model_name

    def _key(self, subject_id: int, object_id: int) -> dict:
        return {
            f"{self.subject_field}_id": subject_id,
            f"{self.object_field}_id": object_id,
        }

    def has_edge(self, subject_id: int, object_id: int) -> bool:
        """Return True if the edge is present."""
        return self.exists(**self._key(subject_id, object_id))

    def insert(self, subject_id: int, object_id: int) -> bool:
        """Insert the edge; return False when a concurrent insert already created it.

        The insert runs in its own savepoint so a unique violation leaves the
        outer transaction usable.
        """
        try:
            with transaction.atomic():
                self.create(**self._key(subject_id, object_id))
        except IntegrityError:
            if not self.has_edge(subject_id, object_id):
                raise
            logger.info(
                "Edge %s(%s, %s) already present; treating insert as converged",
                self.resource, subject_id, object_id,
            )
            return False
        return True

    def remove(self, subject_id: int, object_id: int) -> bool:
        """Delete the edge; return False when there was nothing to delete."""
        return self.delete(**self._key(subject_id, object_id)) > 0

    def object_ids(self, subject_id: int) -> List[int]:
        """Return object ids linked from subject_id."""
        column = f"{self.object_field}_id"
        return list(
            self.model.objects.filter(**{f"{self.subject_field}_id": subject_id})
            .order_by(column)
            .values_list(column, flat=True)
        )

    def subject_ids(self, object_id: int) -> List[int]:
        """Return subject ids linking to object_id."""
        column = f"{self.subject_field}_id"
        return list(
            self.model.objects.filter(**{f"{self.object_field}_id": object_id})
            .order_by(column)
            .values_list(column, flat=True)
        )


def follow_edges() -> EdgeRepo:
    """Edge repo for follower → followee."""
    return EdgeRepo(FollowEdge, subject_field="follower", object_field="followee")


def like_edges() -> EdgeRepo:
    """Edge repo for liker → review."""
    return EdgeRepo(ReviewLike, subject_field="liker", object_field="review")
