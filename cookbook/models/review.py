"""Model for a user's rated review of a recipe."""

from django.db import models
from .recipe import Recipe
from .user import User


class Review(models.Model):
    """User-authored review with a 1-5 rating."""
    id = models.BigIntegerField(primary_key=True)

    # FK → recipe.id, immutable once written
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name="reviews",
        db_column="recipe_id",
    )

    # FK → user.id, immutable once written
    author = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="reviews",
        db_column="author_id",
    )

    rating = models.PositiveSmallIntegerField()
    text = models.TextField()
    submitted_at = models.DateTimeField()
    modified_at = models.DateTimeField()

    # derived from like_edges rows
    like_count = models.PositiveIntegerField(default=0)

    class Meta:
        """Rating range and lookup indexes for reviews."""
        db_table = "reviews"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1, rating__lte=5),
                name="chk_review_rating_range",
            ),
        ]
        indexes = [
            models.Index(fields=["recipe"], name="reviews_recipe_idx"),
            models.Index(fields=["author"], name="reviews_author_idx"),
        ]

    def __str__(self):
        """Readable identifier for admin/debugging."""
        return f"Review {self.id} by {self.author_id} on {self.recipe_id}"
