from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def insert(self, user: User) -> None:
        """Store a user under its ID, replacing any existing record with that ID."""
        ...

    def get(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def list(self) -> list[User]:
        """Return all users."""
        ...

    def update(self, user_id: str, partial: dict) -> User | None:
        """Apply the given fields to a user. Return the updated User or None if not found."""
        ...

    def delete(self, user_id: str) -> bool:
        """Remove a user. Return True if a record was present."""
        ...
