from django.test import TestCase

from cookbook.models import IdSequence, Recipe, User
from cookbook.services.ids import IdAllocator
from cookbook.tests.helpers import make_recipe, make_user


class IdAllocatorTestCase(TestCase):

    def setUp(self):
        self.allocator = IdAllocator()

    def test_ids_increase_per_scope(self):
        first = self.allocator.next_id("users", User)
        second = self.allocator.next_id("users", User)
        self.assertEqual(second, first + 1)
        self.assertEqual(IdSequence.objects.get(scope="users").last_value, second)

    def test_scopes_are_independent(self):
        self.allocator.next_id("users", User)
        self.allocator.next_id("users", User)
        self.assertEqual(self.allocator.next_id("recipes", Recipe), 1)

    def test_skips_past_externally_supplied_ids(self):
        make_user(id=500)
        self.assertEqual(self.allocator.next_id("users", User), 501)

    def test_never_reuses_ids_after_delete(self):
        recipe = make_recipe()
        Recipe.objects.filter(id=recipe.id).delete()
        self.assertGreater(self.allocator.next_id("recipes", Recipe), recipe.id)
