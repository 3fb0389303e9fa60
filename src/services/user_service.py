"""User service — creation and partial update of user records.

Routes call these functions; the repository only stores what it is given.
"""

import logging
import uuid

from domain.model.errors import NotFoundError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def new_user_id() -> str:
    """Generate a collision-resistant user ID (128 random bits, hex)."""
    return uuid.uuid4().hex


def create_user(repo: UserRepository, name: str, email: str) -> User:
    """Create and store a new user with a server-assigned ID."""
    user = User(id=new_user_id(), name=name, email=email)
    repo.insert(user)
    logger.info("User created", extra={"userId": user.id})
    return user


def update_user(
    repo: UserRepository,
    user_id: str,
    name: str | None = None,
    email: str | None = None,
) -> User:
    """Apply a partial update. Fields left as None keep their stored value.

    Raises NotFoundError if no user has the given ID.
    """
    partial = {k: v for k, v in (('name', name), ('email', email)) if v is not None}
    user = repo.update(user_id, partial)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    logger.info("User updated", extra={"userId": user_id, "fields": sorted(partial)})
    return user


def delete_user(repo: UserRepository, user_id: str) -> None:
    """Remove a user. Raises NotFoundError if no user has the given ID."""
    if not repo.delete(user_id):
        raise NotFoundError(f"User {user_id} not found")
    logger.info("User deleted", extra={"userId": user_id})
