"""Recipe creation, timing edits and cascading deletion."""

import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone
from django.utils.duration import duration_iso_string
from rest_framework import serializers

from cookbook.exceptions import ValidationError, storage_errors
from cookbook.models import Recipe
from cookbook.repos.recipe_repo import RecipeRepo
from cookbook.serializers import (
    MAX_DURATION,
    RecipeInputSerializer,
    RecipeTimesSerializer,
    parse_iso_duration,
    positive_id,
    validated,
)
from cookbook.services.auth import AuthGate
from cookbook.services.ids import IdAllocator

logger = logging.getLogger(__name__)

RECIPE_SCOPE = "recipes"


class RecipeService:
    """Author-owned recipe operations."""

    def __init__(self, recipe_repo=None, auth_gate=None, id_allocator=None, clock=timezone.now):
        self.recipe_repo = recipe_repo or RecipeRepo()
        self.auth_gate = auth_gate or AuthGate()
        self.id_allocator = id_allocator or IdAllocator()
        self.clock = clock

    @storage_errors
    @transaction.atomic
    def create_recipe(self, credential, data):
        """Create a recipe authored by the caller and return its id.

        Duplicate and empty ingredient parts are dropped. Rating fields start
        empty.
        """
        fields = dict(validated(RecipeInputSerializer, data or {}))
        author = self.auth_gate.authenticate(credential)

        parts = fields.pop("ingredients")
        fields["total_time"] = _total_time(fields.get("cook_time"), fields.get("prep_time"))
        if fields.get("date_published") is None:
            fields["date_published"] = self.clock()

        recipe_id = self.id_allocator.next_id(RECIPE_SCOPE, Recipe)
        recipe = self.recipe_repo.create(
            id=recipe_id,
            author=author,
            aggregated_rating=None,
            review_count=0,
            **fields,
        )
        count = self.recipe_repo.add_ingredients(recipe, parts)
        logger.info("User %s created recipe %s with %s ingredients", author.id, recipe_id, count)
        return recipe_id

    @storage_errors
    @transaction.atomic
    def delete_recipe(self, credential, recipe_id):
        """Delete the caller's recipe with its reviews, ingredients and likes."""
        positive_id(recipe_id, "recipe_id")
        caller = self.auth_gate.authenticate(credential)
        recipe = self.recipe_repo.lock_by_id(recipe_id)
        self.auth_gate.authorize(caller.id, recipe.author_id)

        removed = self.recipe_repo.delete_cascade(recipe_id)
        logger.info(
            "User %s deleted recipe %s (%s reviews, %s likes)",
            caller.id, recipe_id, removed["reviews"], removed["likes"],
        )

    @storage_errors
    @transaction.atomic
    def update_times(self, credential, recipe_id, cook_time=None, prep_time=None):
        """Replace cook and/or prep time and recompute total time.

        Durations are ISO-8601 strings; a value left as None keeps the stored
        one.
        """
        positive_id(recipe_id, "recipe_id")
        durations = validated(RecipeTimesSerializer, {"cook_time": cook_time, "prep_time": prep_time})
        caller = self.auth_gate.authenticate(credential)
        recipe = self.recipe_repo.lock_by_id(recipe_id)
        self.auth_gate.authorize(caller.id, recipe.author_id)

        if durations.get("cook_time") is None and durations.get("prep_time") is None:
            return
        cook = cook_time if cook_time is not None else recipe.cook_time
        prep = prep_time if prep_time is not None else recipe.prep_time
        self.recipe_repo.update(
            {"id": recipe_id},
            cook_time=cook,
            prep_time=prep,
            total_time=_total_time(cook, prep),
        )
        logger.info("User %s updated times of recipe %s", caller.id, recipe_id)

    def get_recipe(self, recipe_id):
        """Return a recipe; NotFoundError if the id is unknown."""
        positive_id(recipe_id, "recipe_id")
        return self.recipe_repo.get_by_id(recipe_id)

    def get_ingredients(self, recipe_id):
        """Return a recipe's ingredient parts, alphabetical."""
        self.get_recipe(recipe_id)
        return self.recipe_repo.ingredient_parts(recipe_id)


def _total_time(cook_time, prep_time):
    if cook_time is None and prep_time is None:
        return None
    try:
        total = sum(
            (parse_iso_duration(value) for value in (cook_time, prep_time) if value is not None),
            timedelta(),
        )
    except serializers.ValidationError as exc:
        raise ValidationError(" ".join(str(d) for d in exc.detail)) from None
    if total > MAX_DURATION:
        raise ValidationError("Total time overflow")
    return duration_iso_string(total)
