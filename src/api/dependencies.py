from adapter.memory.user_repository import InMemoryUserRepository
from port.user_repository import UserRepository

# Process-wide store: created empty at startup, discarded at shutdown
_user_repo = InMemoryUserRepository()


def get_user_repo() -> UserRepository:
    return _user_repo
