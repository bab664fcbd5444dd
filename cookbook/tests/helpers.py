from django.utils import timezone
from faker import Faker

from cookbook.models import Recipe, Review, User
from cookbook.services.auth import AuthInfo
from cookbook.services.ids import IdAllocator

fake = Faker()

DEFAULT_PASSWORD = "Password123"


def make_user(**kwargs):
    user_id = kwargs.pop("id", None) or IdAllocator().next_id("users", User)
    return User.objects.create_user(
        user_id,
        kwargs.pop("name", fake.name()),
        password=kwargs.pop("password", DEFAULT_PASSWORD),
        gender=kwargs.pop("gender", User.GENDER_FEMALE),
        age=kwargs.pop("age", fake.random_int(min=18, max=80)),
        **kwargs,
    )


def credential(user, password=DEFAULT_PASSWORD):
    """AuthInfo for a user made by make_user."""
    return AuthInfo(user_id=user.id, password=password)


def make_recipe(*, author=None, **extra):
    """
    creates and returns a recipe with no reviews.
    """
    if author is None:
        author = make_user()
    return Recipe.objects.create(
        id=extra.pop("id", None) or IdAllocator().next_id("recipes", Recipe),
        author=author,
        name=extra.pop("name", fake.sentence(nb_words=3)),
        description=extra.pop("description", fake.paragraph()),
        category=extra.pop("category", "Dessert"),
        date_published=extra.pop("date_published", timezone.now()),
        **extra,
    )


def make_review(*, recipe, author=None, rating=4, **extra):
    """Insert a review row directly; aggregates are not refreshed."""
    if author is None:
        author = make_user()
    now = timezone.now()
    return Review.objects.create(
        id=extra.pop("id", None) or IdAllocator().next_id("reviews", Review),
        recipe=recipe,
        author=author,
        rating=rating,
        text=extra.pop("text", fake.sentence()),
        submitted_at=extra.pop("submitted_at", now),
        modified_at=extra.pop("modified_at", now),
        **extra,
    )
