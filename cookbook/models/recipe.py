"""
Recipe model

A recipe belongs to exactly one author and carries two derived fields:

- `review_count` is the number of reviews pointing at the recipe.
- `aggregated_rating` is the average review rating rounded half-up to two
  decimals, or NULL while the recipe has no reviews.

Both are rewritten only by AggregateMaintainer, in the same transaction as
the review mutation that changed them. Durations are stored as ISO-8601
strings (e.g. "PT1H30M").
"""

from django.db import models
from .user import User


class Recipe(models.Model):
    """A recipe published by a user."""
    id = models.BigIntegerField(primary_key=True)

    author = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="recipes",
        db_column="author_id",
    )

    name = models.CharField(max_length=500)
    description = models.TextField(blank=True, null=True)
    category = models.CharField(max_length=255, blank=True, null=True)

    cook_time = models.CharField(max_length=50, blank=True, null=True)
    prep_time = models.CharField(max_length=50, blank=True, null=True)
    total_time = models.CharField(max_length=50, blank=True, null=True)
    date_published = models.DateTimeField(null=True, blank=True)

    # nutrition, NULL when unknown
    calories = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    fat_content = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    saturated_fat_content = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    cholesterol_content = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    sodium_content = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    carbohydrate_content = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    fiber_content = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    sugar_content = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    protein_content = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    servings = models.CharField(max_length=100, blank=True, null=True)
    recipe_yield = models.CharField(max_length=100, blank=True, null=True)

    aggregated_rating = models.DecimalField(max_digits=3, decimal_places=2, null=True, blank=True)
    review_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "recipes"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(aggregated_rating__isnull=True)
                | models.Q(aggregated_rating__gte=0, aggregated_rating__lte=5),
                name="chk_recipe_rating_range",
            ),
        ]
        indexes = [
            models.Index(fields=["author"], name="recipes_author_idx"),
            models.Index(fields=["category"], name="recipes_category_idx"),
        ]

    def __str__(self):
        return self.name
