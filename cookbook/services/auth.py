"""Identity and ownership checks shared by every mutating service."""

import logging
from dataclasses import dataclass

from django.db import transaction

from cookbook.exceptions import AuthError, NotFoundError, PermissionDeniedError, ValidationError
from cookbook.repos.user_repo import UserRepo
from cookbook.serializers import positive_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthInfo:
    """Credential presented by the caller of a service operation."""
    user_id: int
    password: str

    def __repr__(self):
        return f"AuthInfo(user_id={self.user_id!r})"


class AuthGate:
    """Validate the acting user and their ownership of target rows.

    Checks are read-only but take a row lock on the acting user so that a
    soft-delete committed concurrently cannot slip between the check and the
    mutation that follows it in the same transaction.
    """

    def __init__(self, user_repo=None):
        self.user_repo = user_repo or UserRepo()

    @transaction.atomic
    def authenticate(self, credential):
        """Return the active user matching the credential or raise AuthError."""
        try:
            positive_id(getattr(credential, "user_id", None), "user_id")
        except ValidationError:
            logger.warning("Rejected credential with invalid user id: %r", credential)
            raise AuthError("Invalid user id") from None
        if not credential.password or not credential.password.strip():
            logger.warning("Password missing for user %s", credential.user_id)
            raise AuthError("Password is required")

        try:
            user = self.user_repo.lock_by_id(credential.user_id)
        except NotFoundError:
            logger.warning("User %s not found", credential.user_id)
            raise AuthError("Unknown user") from None

        if user.deleted:
            logger.warning("User %s is inactive", credential.user_id)
            raise AuthError("Inactive user")
        if not user.check_password(credential.password):
            logger.warning("Invalid password for user %s", credential.user_id)
            raise AuthError("Invalid credentials")
        return user

    def authorize(self, caller_id, owner_id):
        """Raise PermissionDeniedError unless the caller owns the row."""
        if caller_id != owner_id:
            logger.warning("User %s is not the owner (owner is %s)", caller_id, owner_id)
            raise PermissionDeniedError("Caller is not the owner of this resource")
