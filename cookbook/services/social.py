"""Follow and like operations, and the feed built from follow edges."""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from django.db import transaction

from cookbook.exceptions import storage_errors
from cookbook.repos.recipe_repo import RecipeRepo
from cookbook.repos.review_repo import ReviewRepo
from cookbook.repos.user_repo import UserRepo
from cookbook.serializers import positive_id
from cookbook.services.auth import AuthGate
from cookbook.services.toggles import ToggleResult, follow_relation, like_relation

logger = logging.getLogger(__name__)

FEED_MAX_SIZE = 200


@dataclass(frozen=True)
class FeedItem:
    recipe_id: int
    name: str
    author_id: int
    author_name: str
    date_published: Optional[datetime]
    aggregated_rating: Optional[Decimal]
    review_count: int


@dataclass(frozen=True)
class FeedPage:
    """One page of a feed plus the size of the whole feed."""
    items: List[FeedItem]
    page: int
    size: int
    total: int


class SocialService:
    """Toggle follow edges between users and like edges on reviews."""

    def __init__(
        self,
        user_repo=None,
        review_repo=None,
        recipe_repo=None,
        auth_gate=None,
        follows=None,
        likes=None,
    ):
        self.user_repo = user_repo or UserRepo()
        self.recipe_repo = recipe_repo or RecipeRepo()
        self.review_repo = review_repo or ReviewRepo()
        self.auth_gate = auth_gate or AuthGate(self.user_repo)
        self.follows = follows or follow_relation(self.user_repo)
        self.likes = likes or like_relation(self.review_repo)

    @storage_errors
    @transaction.atomic
    def toggle_follow(self, credential, followee_id):
        """Follow or unfollow; return True when the caller now follows followee_id."""
        positive_id(followee_id, "followee_id")
        caller = self.auth_gate.authenticate(credential)
        return self.follows.toggle(caller.id, followee_id) is ToggleResult.ADDED

    @storage_errors
    @transaction.atomic
    def toggle_like(self, credential, review_id):
        """Like or unlike; return True when the caller now likes the review."""
        positive_id(review_id, "review_id")
        caller = self.auth_gate.authenticate(credential)
        return self.likes.toggle(caller.id, review_id) is ToggleResult.ADDED

    @storage_errors
    @transaction.atomic
    def like_review(self, credential, review_id):
        """Make sure the caller likes the review; return its like count."""
        positive_id(review_id, "review_id")
        caller = self.auth_gate.authenticate(credential)
        self.likes.add(caller.id, review_id)
        return self.review_repo.get_by_id(review_id).like_count

    @storage_errors
    @transaction.atomic
    def unlike_review(self, credential, review_id):
        """Make sure the caller does not like the review; return its like count."""
        positive_id(review_id, "review_id")
        caller = self.auth_gate.authenticate(credential)
        self.likes.remove(caller.id, review_id)
        return self.review_repo.get_by_id(review_id).like_count

    @storage_errors
    def feed(self, credential, page=1, size=20, category=None):
        """Recipes by the authors the caller follows, newest first.

        Out-of-range paging is clamped rather than rejected: page to at least
        1, size to 1..200. A blank category means every category.
        """
        caller = self.auth_gate.authenticate(credential)
        page = max(1, page)
        size = max(1, min(FEED_MAX_SIZE, size))
        category = category.strip() if category else None

        total, recipes = self.recipe_repo.followed_feed(
            caller.id, category=category, limit=size, offset=(page - 1) * size
        )
        items = [
            FeedItem(
                recipe_id=recipe.id,
                name=recipe.name,
                author_id=recipe.author_id,
                author_name=recipe.author.name,
                date_published=recipe.date_published,
                aggregated_rating=recipe.aggregated_rating,
                review_count=recipe.review_count,
            )
            for recipe in recipes
        ]
        logger.debug("Feed for user %s: page %s of %s items", caller.id, page, total)
        return FeedPage(items=items, page=page, size=size, total=total)
