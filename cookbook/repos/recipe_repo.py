"""Repository helpers for recipes and their ingredients."""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from cookbook.db_accessor import DBAccessor
from cookbook.models import Ingredient, Recipe, Review, ReviewLike


class RecipeRepo(DBAccessor):
    """Repository for Recipe rows and the rows that cascade from them."""
    resource = "recipe"

    def __init__(self) -> None:
        """Initialise with the Recipe model."""
        super().__init__(Recipe)

    def get_by_id(self, recipe_id: int) -> Recipe:
        """Return a recipe by id."""
        return self.get(id=recipe_id)

    def lock_by_id(self, recipe_id: int) -> Recipe:
        """Return a recipe by id with its row locked."""
        return self.get_for_update(id=recipe_id)

    def write_aggregate(self, recipe_id: int, rating: Optional[Decimal], count: int) -> int:
        """Store rating and review count together in one UPDATE."""
        return self.update({"id": recipe_id}, aggregated_rating=rating, review_count=count)

    def add_ingredients(self, recipe: Recipe, parts: Iterable[str]) -> int:
        """Insert ingredient parts once each, keeping first-seen order."""
        unique_parts = list(dict.fromkeys(p for p in parts if p))
        Ingredient.objects.bulk_create(Ingredient(recipe=recipe, part=p) for p in unique_parts)
        return len(unique_parts)

    def ingredient_parts(self, recipe_id: int):
        """Return ingredient parts for a recipe, alphabetical."""
        return list(
            Ingredient.objects.filter(recipe_id=recipe_id)
            .order_by("part")
            .values_list("part", flat=True)
        )

    def delete_cascade(self, recipe_id: int) -> Dict[str, int]:
        """Delete a recipe's likes, reviews, ingredients and the recipe itself, in that order."""
        likes, _ = ReviewLike.objects.filter(review__recipe_id=recipe_id).delete()
        reviews, _ = Review.objects.filter(recipe_id=recipe_id).delete()
        ingredients, _ = Ingredient.objects.filter(recipe_id=recipe_id).delete()
        recipes = self.delete(id=recipe_id)
        return {
            "likes": likes,
            "reviews": reviews,
            "ingredients": ingredients,
            "recipes": recipes,
        }

    def followed_feed(
        self, follower_id: int, *, category: Optional[str] = None, limit: int, offset: int = 0
    ) -> Tuple[int, List[Recipe]]:
        """Return (total, page) of recipes by authors follower_id follows, newest first."""
        filters = {"author__follower_edges__follower_id": follower_id}
        if category:
            filters["category"] = category
        qs = self.model.objects.filter(**filters)
        page = self._apply_ordering(qs.select_related("author"), ("-date_published", "-id"))
        page = self._apply_slice(page, offset=offset, limit=limit)
        return qs.count(), list(page)
