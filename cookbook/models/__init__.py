from .user import User
from .recipe import Recipe
from .ingredient import Ingredient
from .review import Review
from .follow import FollowEdge
from .review_like import ReviewLike
from .id_sequence import IdSequence

__all__ = [
    "User",
    "Recipe",
    "Ingredient",
    "Review",
    "FollowEdge",
    "ReviewLike",
    "IdSequence",
]
