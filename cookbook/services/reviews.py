"""Review mutations and the recipe aggregate they keep current."""

import logging

from django.db import transaction
from django.utils import timezone

from cookbook.exceptions import NotFoundError, storage_errors
from cookbook.models import Review
from cookbook.repos.recipe_repo import RecipeRepo
from cookbook.repos.review_repo import ReviewRepo
from cookbook.serializers import ReviewInputSerializer, ReviewListSerializer, positive_id, validated
from cookbook.services.aggregates import AggregateMaintainer
from cookbook.services.auth import AuthGate
from cookbook.services.ids import IdAllocator

logger = logging.getLogger(__name__)

REVIEW_SCOPE = "reviews"

REVIEW_ORDERINGS = {
    ReviewListSerializer.SORT_DATE_DESC: ("-modified_at", "-id"),
    ReviewListSerializer.SORT_LIKES_DESC: ("-like_count", "-modified_at", "-id"),
}


class ReviewService:
    """Add, edit, delete and list reviews.

    Every mutation recomputes the recipe's rating and review count before
    its transaction commits, so readers never see a review without its
    effect on the aggregate or the other way round.
    """

    def __init__(
        self,
        recipe_repo=None,
        review_repo=None,
        auth_gate=None,
        aggregates=None,
        id_allocator=None,
        clock=timezone.now,
    ):
        self.recipe_repo = recipe_repo or RecipeRepo()
        self.review_repo = review_repo or ReviewRepo()
        self.auth_gate = auth_gate or AuthGate()
        self.aggregates = aggregates or AggregateMaintainer(self.recipe_repo, self.review_repo)
        self.id_allocator = id_allocator or IdAllocator()
        self.clock = clock

    def _review_on_recipe(self, recipe_id, review_id):
        self.recipe_repo.lock_by_id(recipe_id)
        review = self.review_repo.get_by_id(review_id)
        if review.recipe_id != recipe_id:
            raise NotFoundError("review", review_id)
        return review

    @storage_errors
    @transaction.atomic
    def add_review(self, credential, recipe_id, rating, text):
        """Post a review by the caller and return its id."""
        positive_id(recipe_id, "recipe_id")
        data = validated(ReviewInputSerializer, {"rating": rating, "text": text})
        author = self.auth_gate.authenticate(credential)
        self.recipe_repo.lock_by_id(recipe_id)

        now = self.clock()
        review_id = self.id_allocator.next_id(REVIEW_SCOPE, Review)
        self.review_repo.create(
            id=review_id,
            recipe_id=recipe_id,
            author=author,
            rating=data["rating"],
            text=data["text"],
            submitted_at=now,
            modified_at=now,
        )
        aggregate = self.aggregates.refresh_recipe_aggregate(recipe_id)
        logger.info(
            "User %s reviewed recipe %s (review %s); rating now %s over %s",
            author.id, recipe_id, review_id, aggregate.rating, aggregate.count,
        )
        return review_id

    @storage_errors
    @transaction.atomic
    def edit_review(self, credential, recipe_id, review_id, rating, text):
        """Replace rating and text of the caller's review."""
        positive_id(recipe_id, "recipe_id")
        positive_id(review_id, "review_id")
        data = validated(ReviewInputSerializer, {"rating": rating, "text": text})
        caller = self.auth_gate.authenticate(credential)
        review = self._review_on_recipe(recipe_id, review_id)
        self.auth_gate.authorize(caller.id, review.author_id)

        self.review_repo.update(
            {"id": review_id},
            rating=data["rating"],
            text=data["text"],
            modified_at=self.clock(),
        )
        if data["rating"] != review.rating:
            self.aggregates.refresh_recipe_aggregate(recipe_id)
        logger.info("User %s edited review %s", caller.id, review_id)

    @storage_errors
    @transaction.atomic
    def delete_review(self, credential, recipe_id, review_id):
        """Delete the caller's review together with its likes."""
        positive_id(recipe_id, "recipe_id")
        positive_id(review_id, "review_id")
        caller = self.auth_gate.authenticate(credential)
        review = self._review_on_recipe(recipe_id, review_id)
        self.auth_gate.authorize(caller.id, review.author_id)

        self.review_repo.delete(id=review_id)
        self.aggregates.refresh_recipe_aggregate(recipe_id)
        logger.info("User %s deleted review %s", caller.id, review_id)

    @storage_errors
    def refresh_recipe_aggregate(self, recipe_id):
        """Recompute and return a recipe's rating and review count."""
        positive_id(recipe_id, "recipe_id")
        return self.aggregates.refresh_recipe_aggregate(recipe_id)

    def list_by_recipe(self, recipe_id, page=1, size=20, sort=ReviewListSerializer.SORT_DATE_DESC):
        """Return one page of a recipe's reviews."""
        positive_id(recipe_id, "recipe_id")
        query = validated(ReviewListSerializer, {"page": page, "size": size, "sort": sort})
        self.recipe_repo.get_by_id(recipe_id)
        return list(
            self.review_repo.list_for_recipe(
                recipe_id,
                order_by=REVIEW_ORDERINGS[query["sort"]],
                limit=query["size"],
                offset=(query["page"] - 1) * query["size"],
            )
        )
