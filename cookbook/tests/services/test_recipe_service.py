from decimal import Decimal

from django.test import TestCase

from cookbook.exceptions import AuthError, NotFoundError, PermissionDeniedError, ValidationError
from cookbook.models import Ingredient, Recipe, Review, ReviewLike
from cookbook.services.auth import AuthInfo
from cookbook.services.recipes import RecipeService
from cookbook.tests.helpers import credential, make_recipe, make_review, make_user


class RecipeServiceTestCase(TestCase):

    def setUp(self):
        self.service = RecipeService()
        self.chef = make_user()

    def test_create_recipe(self):
        recipe_id = self.service.create_recipe(credential(self.chef), {
            "name": "Pancakes",
            "category": "Breakfast",
            "cook_time": "PT10M",
            "prep_time": "PT5M",
            "calories": 350.456,
            "fat_content": 0,
            "ingredients": ["flour", "milk", "eggs", "milk", ""],
        })
        recipe = Recipe.objects.get(id=recipe_id)
        self.assertEqual(recipe.author_id, self.chef.id)
        self.assertEqual(recipe.total_time, "P0DT00H15M00S")
        self.assertEqual(recipe.calories, Decimal("350.46"))
        self.assertIsNone(recipe.fat_content)
        self.assertIsNone(recipe.aggregated_rating)
        self.assertEqual(recipe.review_count, 0)
        self.assertIsNotNone(recipe.date_published)
        self.assertEqual(self.service.get_ingredients(recipe_id), ["eggs", "flour", "milk"])

    def test_create_recipe_rejects_bad_input(self):
        cases = {
            "no name": {"ingredients": ["salt"]},
            "blank name": {"name": "   "},
            "bad duration": {"name": "Soup", "cook_time": "10 minutes"},
            "negative duration": {"name": "Soup", "cook_time": "-PT10M"},
            "calories out of range": {"name": "Soup", "calories": 1e30},
            "calories past column width": {"name": "Soup", "calories": 1e9},
        }
        for label, data in cases.items():
            with self.subTest(label):
                with self.assertRaises(ValidationError):
                    self.service.create_recipe(credential(self.chef), data)
        self.assertFalse(Recipe.objects.exists())

    def test_create_recipe_requires_auth(self):
        with self.assertRaises(AuthError):
            self.service.create_recipe(AuthInfo(self.chef.id, "nope"), {"name": "Soup"})
        self.assertFalse(Recipe.objects.exists())

    def test_delete_recipe_cascades(self):
        recipe = make_recipe(author=self.chef)
        Ingredient.objects.create(recipe=recipe, part="salt")
        review = make_review(recipe=recipe)
        ReviewLike.objects.create(review=review, liker=make_user())

        self.service.delete_recipe(credential(self.chef), recipe.id)

        self.assertFalse(Recipe.objects.exists())
        self.assertFalse(Review.objects.exists())
        self.assertFalse(Ingredient.objects.exists())
        self.assertFalse(ReviewLike.objects.exists())

    def test_delete_recipe_ownership(self):
        recipe = make_recipe(author=self.chef)
        intruder = make_user()
        with self.assertRaises(PermissionDeniedError):
            self.service.delete_recipe(credential(intruder), recipe.id)
        self.assertTrue(Recipe.objects.filter(id=recipe.id).exists())

    def test_missing_recipe_reported_before_ownership(self):
        intruder = make_user()
        with self.assertRaises(NotFoundError):
            self.service.delete_recipe(credential(intruder), 999999)

    def test_update_times(self):
        recipe = make_recipe(author=self.chef, cook_time="PT1H", prep_time="PT30M")
        self.service.update_times(credential(self.chef), recipe.id, prep_time="PT45M")
        recipe.refresh_from_db()
        self.assertEqual(recipe.cook_time, "PT1H")
        self.assertEqual(recipe.prep_time, "PT45M")
        self.assertEqual(recipe.total_time, "P0DT01H45M00S")

    def test_update_times_rejects_negative(self):
        recipe = make_recipe(author=self.chef, cook_time="PT1H")
        with self.assertRaises(ValidationError):
            self.service.update_times(credential(self.chef), recipe.id, cook_time="-PT1H")
        recipe.refresh_from_db()
        self.assertEqual(recipe.cook_time, "PT1H")

    def test_update_times_ownership(self):
        recipe = make_recipe(author=self.chef)
        with self.assertRaises(PermissionDeniedError):
            self.service.update_times(credential(make_user()), recipe.id, cook_time="PT1M")

    def test_get_recipe(self):
        recipe = make_recipe(author=self.chef)
        self.assertEqual(self.service.get_recipe(recipe.id).name, recipe.name)
        with self.assertRaises(NotFoundError):
            self.service.get_recipe(999999)
