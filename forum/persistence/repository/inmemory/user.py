"""In-memory user repository for testing."""

from typing import Optional

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_names(self, names: list[str]) -> list[User]:
        """Find users by handle, case-insensitively."""
        lowered = {name.lower() for name in names}
        return [u for u in self._users.values() if u.name.lower() in lowered]

    async def save(self, user: User) -> User:
        """Save a user."""
        self._users[user.id] = user
        return user
