"""In-memory implementation of UserRepository.

Records live for the lifetime of the process; nothing is persisted.
"""

import threading
from dataclasses import replace

from domain.model.user import User

# Fields a partial update may touch; the ID is immutable
UPDATABLE_FIELDS = ('name', 'email')


class InMemoryUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def insert(self, user: User) -> None:
        with self._lock:
            self.store[user.id] = replace(user)

    def update(self, user_id: str, partial: dict) -> User | None:
        with self._lock:
            user = self.store.get(user_id)
            if user is None:
                return None
            for field in UPDATABLE_FIELDS:
                if partial.get(field) is not None:
                    setattr(user, field, partial[field])
            return replace(user)

    def delete(self, user_id: str) -> bool:
        with self._lock:
            return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get(self, user_id: str) -> User | None:
        with self._lock:
            user = self.store.get(user_id)
            return replace(user) if user else None

    def list(self) -> list[User]:
        with self._lock:
            return [replace(u) for u in self.store.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self.store)
