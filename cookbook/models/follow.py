"""Model representing follower→followee relationships."""

from __future__ import annotations
from django.conf import settings
from django.db import models
from django.db.models import Q, F


class FollowEdge(models.Model):
    """Follow relationship where follower subscribes to followee."""
    follower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="following_edges",  # user.following_edges -> rows this user created (outbound)
        db_column="follower_id",
    )
    followee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="follower_edges",   # user.follower_edges -> rows pointing at this user (inbound)
        db_column="followee_id",
    )

    class Meta:
        """DB metadata and constraints for follow relationships."""
        db_table = "follow_edges"
        constraints = [
            models.UniqueConstraint(fields=["follower", "followee"], name="uniq_follow_edge_follower_followee"),
            models.CheckConstraint(condition=~Q(follower=F("followee")), name="chk_follow_edge_not_self"),
        ]
        indexes = [
            models.Index(fields=["follower"], name="follow_edges_follower_idx"),
            models.Index(fields=["followee"], name="follow_edges_followee_idx"),
        ]

    def __str__(self) -> str:
        """Readable representation for admin/debugging."""
        return f"FollowEdge(follower={self.follower_id}, followee={self.followee_id})"
