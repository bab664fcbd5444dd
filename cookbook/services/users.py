"""Account lifecycle: registration, login, profile edits and soft deletion."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from cookbook.exceptions import ValidationError, storage_errors
from cookbook.models import User
from cookbook.repos.edge_repo import follow_edges
from cookbook.repos.user_repo import UserRepo
from cookbook.serializers import ProfileUpdateSerializer, RegisterSerializer, positive_id, validated
from cookbook.services.auth import AuthGate
from cookbook.services.ids import IdAllocator

logger = logging.getLogger(__name__)

USER_SCOPE = "users"


@dataclass(frozen=True)
class FollowRatio:
    user_id: int
    name: str
    ratio: float


@dataclass(frozen=True)
class UserProfile:
    """Public view of a user with their follow relations."""
    id: int
    name: str
    gender: Optional[str]
    age: Optional[int]
    deleted: bool
    follower_count: int
    following_count: int
    follower_ids: List[int] = field(default_factory=list)
    following_ids: List[int] = field(default_factory=list)


def age_on(birthday, today):
    """Whole years between birthday and today."""
    years = today.year - birthday.year
    if (today.month, today.day) < (birthday.month, birthday.day):
        years -= 1
    return years


class UserService:
    """Create, authenticate, edit and deactivate users."""

    def __init__(self, user_repo=None, edge_repo=None, auth_gate=None, id_allocator=None, clock=timezone.now):
        self.user_repo = user_repo or UserRepo()
        self.edge_repo = edge_repo or follow_edges()
        self.auth_gate = auth_gate or AuthGate(self.user_repo)
        self.id_allocator = id_allocator or IdAllocator()
        self.clock = clock

    @storage_errors
    @transaction.atomic
    def register(self, name, gender, password, birthday=None, age=None):
        """Create an active user and return its new id.

        Either `birthday` (ISO date) or `age` is required; an explicit age wins.
        """
        data = validated(RegisterSerializer, {
            "name": name,
            "gender": gender,
            "birthday": birthday,
            "age": age,
            "password": password,
        })
        if data.get("age") is None:
            data["age"] = age_on(data["birthday"], timezone.localdate(self.clock()))
            if data["age"] <= 0:
                raise ValidationError("birthday: Age must be positive")

        user_id = self.id_allocator.next_id(USER_SCOPE, User)
        User.objects.create_user(
            user_id,
            data["name"],
            password=data["password"],
            gender=data["gender"],
            age=data["age"],
        )
        logger.info("Registered user %s", user_id)
        return user_id

    @storage_errors
    def login(self, credential):
        """Return the caller's id if the credential is valid."""
        user = self.auth_gate.authenticate(credential)
        logger.info("User %s logged in", user.id)
        return user.id

    @storage_errors
    @transaction.atomic
    def update_profile(self, credential, gender=None, age=None):
        """Change gender and/or age of the caller; omitted values stay as they are."""
        data = validated(ProfileUpdateSerializer, {"gender": gender, "age": age})
        user = self.auth_gate.authenticate(credential)

        changes = {k: v for k, v in data.items() if v is not None}
        if not changes:
            return
        self.user_repo.update({"id": user.id}, **changes)
        logger.info("User %s updated profile fields %s", user.id, sorted(changes))

    @storage_errors
    @transaction.atomic
    def delete_account(self, credential, user_id):
        """Soft-delete the caller's own account.

        Always returns True: an inactive account fails authentication, so it
        never gets here a second time. Follow and like edges, recipes and
        reviews of the account are kept.
        """
        positive_id(user_id, "user_id")
        caller = self.auth_gate.authenticate(credential)
        target = self.user_repo.lock_by_id(user_id)
        self.auth_gate.authorize(caller.id, target.id)

        self.user_repo.update({"id": target.id}, deleted=True)
        logger.info("User %s deactivated", target.id)
        return True

    def get_user(self, user_id):
        """Return a UserProfile; NotFoundError if the id is unknown."""
        positive_id(user_id, "user_id")
        user = self.user_repo.get_by_id(user_id)
        return UserProfile(
            id=user.id,
            name=user.name,
            gender=user.gender,
            age=user.age,
            deleted=user.deleted,
            follower_count=user.follower_count,
            following_count=user.following_count,
            follower_ids=self.edge_repo.subject_ids(user.id),
            following_ids=self.edge_repo.object_ids(user.id),
        )

    def highest_follow_ratio(self):
        """Return the active user with the most followers per followed user, or None."""
        user = self.user_repo.top_follow_ratio()
        if user is None:
            return None
        return FollowRatio(user_id=user.id, name=user.name, ratio=user.follow_ratio)
