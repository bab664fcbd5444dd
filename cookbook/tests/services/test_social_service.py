from datetime import timedelta
from unittest import mock

from django.test import TestCase
from django.utils import timezone

from cookbook.exceptions import AuthError, NotFoundError, ValidationError
from cookbook.models import FollowEdge, ReviewLike, User
from cookbook.repos.edge_repo import EdgeRepo
from cookbook.services.auth import AuthInfo
from cookbook.services.social import SocialService
from cookbook.tests.helpers import credential, make_recipe, make_review, make_user


class SocialServiceTestCase(TestCase):

    def setUp(self):
        self.service = SocialService()
        self.alice = make_user()
        self.bob = make_user()
        self.review = make_review(recipe=make_recipe(), author=self.bob)

    def test_toggle_follow(self):
        self.assertTrue(self.service.toggle_follow(credential(self.alice), self.bob.id))
        self.assertEqual(User.objects.get(id=self.bob.id).follower_count, 1)
        self.assertFalse(self.service.toggle_follow(credential(self.alice), self.bob.id))
        self.assertFalse(FollowEdge.objects.exists())
        self.assertEqual(User.objects.get(id=self.bob.id).follower_count, 0)

    def test_toggle_follow_requires_auth(self):
        with self.assertRaises(AuthError):
            self.service.toggle_follow(AuthInfo(self.alice.id, "bad"), self.bob.id)
        self.assertFalse(FollowEdge.objects.exists())

    def test_toggle_follow_validates_target_id(self):
        with self.assertRaises(ValidationError):
            self.service.toggle_follow(credential(self.alice), 0)

    def test_deleted_caller_cannot_act(self):
        User.objects.filter(id=self.alice.id).update(deleted=True)
        with self.assertRaises(AuthError):
            self.service.toggle_like(credential(self.alice), self.review.id)

    def test_toggle_like(self):
        self.assertTrue(self.service.toggle_like(credential(self.alice), self.review.id))
        self.assertFalse(self.service.toggle_like(credential(self.alice), self.review.id))
        self.assertFalse(ReviewLike.objects.exists())

    def test_like_and_unlike_return_count(self):
        cara = make_user()
        self.assertEqual(self.service.like_review(credential(self.alice), self.review.id), 1)
        self.assertEqual(self.service.like_review(credential(self.alice), self.review.id), 1)
        self.assertEqual(self.service.like_review(credential(cara), self.review.id), 2)
        self.assertEqual(self.service.unlike_review(credential(self.alice), self.review.id), 1)
        self.assertEqual(self.service.unlike_review(credential(self.alice), self.review.id), 1)

    def test_like_own_review_rejected(self):
        with self.assertRaises(ValidationError):
            self.service.like_review(credential(self.bob), self.review.id)

    def test_like_unknown_review(self):
        with self.assertRaises(NotFoundError):
            self.service.toggle_like(credential(self.alice), 999999)

    def test_racing_like_review_counts_once(self):
        self.service.like_review(credential(self.alice), self.review.id)
        with mock.patch.object(EdgeRepo, "has_edge", side_effect=[False, True]):
            self.assertEqual(self.service.like_review(credential(self.alice), self.review.id), 1)
        self.assertEqual(ReviewLike.objects.filter(review=self.review).count(), 1)

    def test_same_caller_toggles_alternate(self):
        results = [self.service.toggle_follow(credential(self.alice), self.bob.id) for _ in range(3)]
        self.assertEqual(results, [True, False, True])
        self.assertEqual(FollowEdge.objects.count(), 1)
        self.assertEqual(User.objects.get(id=self.bob.id).follower_count, 1)


class FeedTestCase(TestCase):

    def setUp(self):
        self.service = SocialService()
        self.reader = make_user()
        self.chef = make_user(name="Chef")
        self.baker = make_user()
        self.stranger = make_user()
        FollowEdge.objects.create(follower=self.reader, followee=self.chef)
        FollowEdge.objects.create(follower=self.reader, followee=self.baker)
        now = timezone.now()
        self.soup = make_recipe(author=self.chef, category="Soup", date_published=now - timedelta(days=2))
        self.cake = make_recipe(author=self.baker, category="Dessert", date_published=now - timedelta(days=1))
        self.stew = make_recipe(author=self.chef, category="Soup", date_published=now)
        make_recipe(author=self.stranger, date_published=now)

    def test_feed_lists_followed_authors_newest_first(self):
        feed = self.service.feed(credential(self.reader))
        self.assertEqual(feed.total, 3)
        self.assertEqual([i.recipe_id for i in feed.items], [self.stew.id, self.cake.id, self.soup.id])
        self.assertEqual(feed.items[0].author_name, "Chef")
        self.assertIsNone(feed.items[0].aggregated_rating)

    def test_feed_category_filter(self):
        feed = self.service.feed(credential(self.reader), category=" Soup ")
        self.assertEqual([i.recipe_id for i in feed.items], [self.stew.id, self.soup.id])
        self.assertEqual(feed.total, 2)

    def test_feed_paging_is_clamped(self):
        feed = self.service.feed(credential(self.reader), page=0, size=0)
        self.assertEqual((feed.page, feed.size, feed.total), (1, 1, 3))
        self.assertEqual([i.recipe_id for i in feed.items], [self.stew.id])
        self.assertEqual(self.service.feed(credential(self.reader), size=500).size, 200)
        self.assertEqual(self.service.feed(credential(self.reader), page=9).items, [])

    def test_feed_empty_without_follows(self):
        feed = self.service.feed(credential(self.stranger))
        self.assertEqual((feed.items, feed.total), ([], 0))

    def test_feed_requires_auth(self):
        with self.assertRaises(AuthError):
            self.service.feed(AuthInfo(self.reader.id, "bad"))
