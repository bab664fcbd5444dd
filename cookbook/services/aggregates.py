"""Recompute a recipe's derived rating fields from its reviews."""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from django.db import transaction

from cookbook.repos.recipe_repo import RecipeRepo
from cookbook.repos.review_repo import ReviewRepo

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class RecipeAggregate:
    """Rating and review count as stored on the recipe row."""
    rating: Optional[Decimal]
    count: int


def average_rating(count, total):
    """Return the half-up rounded mean rating, or None for no reviews."""
    if not count:
        return None
    return (Decimal(total) / Decimal(count)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class AggregateMaintainer:
    """Keep `aggregated_rating` and `review_count` equal to their source reviews.

    Called in the same transaction as every review insert, rating edit and
    delete. The recipe row is locked first, so concurrent review mutations on
    one recipe recompute one after another and the last commit sees every
    review committed before it.
    """

    def __init__(self, recipe_repo=None, review_repo=None):
        self.recipe_repo = recipe_repo or RecipeRepo()
        self.review_repo = review_repo or ReviewRepo()

    @transaction.atomic
    def refresh_recipe_aggregate(self, recipe_id):
        """Recompute, store and return the recipe's aggregate; NotFoundError if missing."""
        self.recipe_repo.lock_by_id(recipe_id)
        count, total = self.review_repo.rating_stats(recipe_id)
        rating = average_rating(count, total)
        self.recipe_repo.write_aggregate(recipe_id, rating, count)
        logger.debug("Recipe %s aggregate refreshed: rating=%s count=%s", recipe_id, rating, count)
        return RecipeAggregate(rating=rating, count=count)
