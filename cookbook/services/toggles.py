"""Idempotent add/remove of relation edges with their denormalized counters.

One implementation serves both relations in the system. A relation is
described by an `EdgeSpec`: which edge table to use, how to load and vet the
object of the edge, and which counters move when an edge appears or
disappears.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable

from django.db import transaction

from cookbook.exceptions import ValidationError
from cookbook.repos.edge_repo import EdgeRepo, follow_edges, like_edges
from cookbook.repos.review_repo import ReviewRepo
from cookbook.repos.user_repo import UserRepo

logger = logging.getLogger(__name__)


class ToggleResult(enum.Enum):
    """State of the edge after a toggle."""
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class EdgeSpec:
    """Relation-specific behaviour plugged into ToggleRelation.

    load_target(object_id) -> row, raising NotFoundError.
    owner_of(row) -> user id that may never be the subject of an edge to row.
    check_eligible(row) raises ValidationError when a new edge may not point at row.
    on_added / on_removed(subject_id, object_id, row) move the counters by one.
    """
    name: str
    edges: EdgeRepo
    load_target: Callable[[int], Any]
    owner_of: Callable[[Any], int]
    check_eligible: Callable[[Any], None]
    on_added: Callable[[int, int, Any], None]
    on_removed: Callable[[int, int, Any], None]
    same_id_space: bool = False


class ToggleRelation:
    """Toggle, add or remove one edge of the relation described by `spec`.

    Concurrent callers converge: a duplicate insert that loses the race on the
    unique constraint counts as "already there" and leaves counters alone; a
    delete that finds nothing to delete does the same.
    """

    def __init__(self, spec):
        self.spec = spec

    def _vet(self, subject_id, object_id):
        if self.spec.same_id_space and subject_id == object_id:
            raise ValidationError(f"Cannot {self.spec.name} yourself")
        target = self.spec.load_target(object_id)
        if self.spec.owner_of(target) == subject_id:
            raise ValidationError(f"Cannot {self.spec.name} your own content")
        return target

    def _insert(self, subject_id, object_id, target):
        self.spec.check_eligible(target)
        inserted = self.spec.edges.insert(subject_id, object_id)
        if inserted:
            self.spec.on_added(subject_id, object_id, target)
        return inserted

    def _remove(self, subject_id, object_id, target):
        removed = self.spec.edges.remove(subject_id, object_id)
        if removed:
            self.spec.on_removed(subject_id, object_id, target)
        return removed

    @transaction.atomic
    def toggle(self, subject_id, object_id):
        """Flip the edge and return the resulting state."""
        target = self._vet(subject_id, object_id)
        if self.spec.edges.has_edge(subject_id, object_id):
            self._remove(subject_id, object_id, target)
            result = ToggleResult.REMOVED
        else:
            self._insert(subject_id, object_id, target)
            result = ToggleResult.ADDED
        logger.info("%s %s -> %s: %s", self.spec.name, subject_id, object_id, result.value)
        return result

    @transaction.atomic
    def add(self, subject_id, object_id):
        """Ensure the edge exists; return True if this call created it."""
        target = self._vet(subject_id, object_id)
        if self.spec.edges.has_edge(subject_id, object_id):
            return False
        return self._insert(subject_id, object_id, target)

    @transaction.atomic
    def remove(self, subject_id, object_id):
        """Ensure the edge is absent; return True if this call deleted it."""
        target = self._vet(subject_id, object_id)
        return self._remove(subject_id, object_id, target)


def follow_relation(user_repo=None):
    """ToggleRelation for follower → followee edges."""
    users = user_repo or UserRepo()

    def check_eligible(followee):
        if followee.deleted:
            raise ValidationError("Cannot follow an inactive user")

    def shift(follower_id, followee_id, delta):
        # fixed id order keeps lock acquisition consistent across callers
        for user_id, field in sorted(
            [(follower_id, "following_count"), (followee_id, "follower_count")]
        ):
            users.adjust({"id": user_id}, **{field: delta})

    return ToggleRelation(EdgeSpec(
        name="follow",
        edges=follow_edges(),
        load_target=users.get_by_id,
        owner_of=lambda followee: followee.id,
        check_eligible=check_eligible,
        on_added=lambda subject_id, object_id, _row: shift(subject_id, object_id, 1),
        on_removed=lambda subject_id, object_id, _row: shift(subject_id, object_id, -1),
        same_id_space=True,
    ))


def like_relation(review_repo=None):
    """ToggleRelation for liker → review edges."""
    reviews = review_repo or ReviewRepo()

    def check_eligible(review):
        if review.author.deleted:
            raise ValidationError("Cannot like a review by an inactive user")

    return ToggleRelation(EdgeSpec(
        name="like",
        edges=like_edges(),
        load_target=reviews.get_with_author,
        owner_of=lambda review: review.author_id,
        check_eligible=check_eligible,
        on_added=lambda _liker_id, review_id, _row: reviews.adjust({"id": review_id}, like_count=1),
        on_removed=lambda _liker_id, review_id, _row: reviews.adjust({"id": review_id}, like_count=-1),
    ))
