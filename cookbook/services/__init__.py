from .auth import AuthGate, AuthInfo
from .aggregates import AggregateMaintainer, RecipeAggregate
from .ids import IdAllocator
from .toggles import ToggleRelation, ToggleResult, follow_relation, like_relation
from .users import UserService
from .social import SocialService
from .recipes import RecipeService
from .reviews import ReviewService

__all__ = [
    "AuthGate",
    "AuthInfo",
    "AggregateMaintainer",
    "RecipeAggregate",
    "IdAllocator",
    "ToggleRelation",
    "ToggleResult",
    "follow_relation",
    "like_relation",
    "UserService",
    "SocialService",
    "RecipeService",
    "ReviewService",
]
