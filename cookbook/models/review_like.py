"""Model representing a user's like on a review."""

from django.conf import settings
from django.db import models
from .review import Review


class ReviewLike(models.Model):
    """User like on a review. Likers never own the review they like."""
    review = models.ForeignKey(
        Review,
        on_delete=models.CASCADE,
        db_column="review_id",
        related_name="likes",
    )

    liker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        db_column="liker_id",
        related_name="review_likes",
    )

    class Meta:
        """Enforce one like per review/user pair."""
        db_table = "like_edges"
        constraints = [
            models.UniqueConstraint(fields=["review", "liker"], name="uniq_review_like_review_liker"),
        ]
        indexes = [
            models.Index(fields=["liker"], name="like_edges_liker_idx"),
        ]

    def __str__(self):
        """Readable representation for admin/debugging."""
        return f"{self.liker_id} → {self.review_id}"
