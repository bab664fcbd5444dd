"""Model for the ingredient lines of a recipe."""

from django.db import models
from .recipe import Recipe


class Ingredient(models.Model):
    """One ingredient part of a recipe; unique per recipe."""
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name="ingredients",
        db_column="recipe_id",
    )
    part = models.CharField(max_length=500)

    class Meta:
        """Enforce one row per recipe/ingredient pair."""
        db_table = "ingredients"
        constraints = [
            models.UniqueConstraint(fields=["recipe", "part"], name="uniq_ingredient_recipe_part"),
        ]

    def __str__(self):
        """Readable representation for admin/debugging."""
        return f"{self.recipe_id}: {self.part}"
