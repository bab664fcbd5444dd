"""Per-scope counter rows backing IdAllocator."""

from django.db import models


class IdSequence(models.Model):
    """Last identifier handed out for one logical table."""
    scope = models.CharField(max_length=64, primary_key=True)
    last_value = models.BigIntegerField(default=0)

    class Meta:
        db_table = "id_sequences"

    def __str__(self):
        return f"IdSequence({self.scope}={self.last_value})"
