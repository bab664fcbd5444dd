"""Custom user model holding identity, soft-delete flag and follow counters."""

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """Manager creating users with hashed passwords."""

    def create_user(self, user_id, name, password=None, **extra_fields):
        """Create and save a user with the given user_id, name and password."""
        if not user_id or user_id <= 0:
            raise ValueError("Users must have a positive id")
        user = self.model(id=user_id, name=name, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user


class User(AbstractBaseUser):
    """Platform user. Never hard-deleted; `deleted` marks an inactive account."""
    GENDER_MALE = "Male"
    GENDER_FEMALE = "Female"

    GENDERS = [
        (GENDER_MALE, "Male"),
        (GENDER_FEMALE, "Female"),
    ]

    id = models.BigIntegerField(primary_key=True)
    name = models.CharField(max_length=255)
    gender = models.CharField(max_length=10, choices=GENDERS, null=True, blank=True)
    age = models.PositiveIntegerField(null=True, blank=True)
    deleted = models.BooleanField(default=False)

    # derived from follow_edges rows
    follower_count = models.PositiveIntegerField(default=0)
    following_count = models.PositiveIntegerField(default=0)

    USERNAME_FIELD = "id"
    REQUIRED_FIELDS = ["name"]

    objects = UserManager()

    class Meta:
        """Table name and ordering for users."""
        db_table = "users"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(id__gt=0), name="chk_user_id_positive"),
        ]

    @property
    def is_active(self):
        """Soft-deleted accounts are inactive."""
        return not self.deleted

    def __str__(self):
        """Readable representation for admin/debugging."""
        return f"User({self.id}, {self.name})"
