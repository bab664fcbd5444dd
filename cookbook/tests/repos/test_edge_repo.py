from unittest import mock

from django.db import IntegrityError
from django.test import TestCase

from cookbook.models import FollowEdge
from cookbook.repos.edge_repo import EdgeRepo, follow_edges, like_edges
from cookbook.tests.helpers import make_recipe, make_review, make_user


class EdgeRepoTests(TestCase):
    def setUp(self):
        self.repo = follow_edges()
        self.alice = make_user()
        self.bob = make_user()
        self.cara = make_user()

    def test_insert_and_has_edge(self):
        self.assertFalse(self.repo.has_edge(self.alice.id, self.bob.id))
        self.assertTrue(self.repo.insert(self.alice.id, self.bob.id))
        self.assertTrue(self.repo.has_edge(self.alice.id, self.bob.id))
        self.assertFalse(self.repo.has_edge(self.bob.id, self.alice.id))

    def test_duplicate_insert_converges(self):
        self.repo.insert(self.alice.id, self.bob.id)
        self.assertFalse(self.repo.insert(self.alice.id, self.bob.id))
        self.assertEqual(FollowEdge.objects.count(), 1)
        # outer transaction still usable after the absorbed violation
        self.assertTrue(self.repo.insert(self.alice.id, self.cara.id))

    def test_insert_reraises_unrelated_integrity_error(self):
        with self.assertRaises(IntegrityError):
            self.repo.insert(self.alice.id, self.alice.id)

    def test_insert_reraises_when_edge_absent_after_failure(self):
        with mock.patch.object(EdgeRepo, "create", side_effect=IntegrityError("boom")):
            with self.assertRaises(IntegrityError):
                self.repo.insert(self.alice.id, self.bob.id)

    def test_remove_reports_whether_row_existed(self):
        self.repo.insert(self.alice.id, self.bob.id)
        self.assertTrue(self.repo.remove(self.alice.id, self.bob.id))
        self.assertFalse(self.repo.remove(self.alice.id, self.bob.id))

    def test_object_ids_sorted(self):
        self.repo.insert(self.alice.id, self.cara.id)
        self.repo.insert(self.alice.id, self.bob.id)
        self.assertEqual(self.repo.object_ids(self.alice.id), sorted([self.bob.id, self.cara.id]))

    def test_subject_ids_sorted(self):
        self.repo.insert(self.cara.id, self.bob.id)
        self.repo.insert(self.alice.id, self.bob.id)
        self.assertEqual(self.repo.subject_ids(self.bob.id), sorted([self.alice.id, self.cara.id]))
        self.assertEqual(self.repo.subject_ids(self.alice.id), [])

    def test_like_edges_keyed_by_liker_and_review(self):
        likes = like_edges()
        review = make_review(recipe=make_recipe())
        self.assertTrue(likes.insert(self.alice.id, review.id))
        self.assertTrue(likes.has_edge(self.alice.id, review.id))
        self.assertEqual(likes.object_ids(self.alice.id), [review.id])
