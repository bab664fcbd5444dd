from django.test import TestCase

from cookbook.db_accessor import DBAccessor
from cookbook.exceptions import NotFoundError
from cookbook.models import User
from cookbook.tests.helpers import make_user


class DBAccessorTests(TestCase):
    def setUp(self):
        self.accessor = DBAccessor(User)
        self.users = [make_user(name=f"user{i}") for i in range(3)]

    def test_list_orders_and_slices(self):
        qs = self.accessor.list(order_by=["-id"], limit=2, offset=1)
        self.assertEqual([u.id for u in qs], [self.users[1].id, self.users[0].id])

    def test_get_missing_raises_not_found(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.accessor.get(id=999999)
        self.assertEqual(ctx.exception.resource_id, 999999)
        self.assertEqual(ctx.exception.code, "not_found")

    def test_update_returns_count(self):
        count = self.accessor.update({"id": self.users[0].id}, name="renamed")
        self.assertEqual(count, 1)
        self.assertEqual(User.objects.get(id=self.users[0].id).name, "renamed")

    def test_adjust_applies_signed_deltas(self):
        lookup = {"id": self.users[0].id}
        self.accessor.adjust(lookup, follower_count=3, following_count=1)
        self.accessor.adjust(lookup, follower_count=-1)
        user = User.objects.get(**lookup)
        self.assertEqual(user.follower_count, 2)
        self.assertEqual(user.following_count, 1)

    def test_adjust_with_zero_deltas_is_noop(self):
        self.assertEqual(self.accessor.adjust({"id": self.users[0].id}, follower_count=0), 0)

    def test_delete_returns_rows_of_model(self):
        self.assertEqual(self.accessor.delete(id=self.users[2].id), 1)
        self.assertFalse(self.accessor.exists(id=self.users[2].id))
        self.assertEqual(self.accessor.delete(id=self.users[2].id), 0)
