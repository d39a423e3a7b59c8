# Repository pattern: repositories compose an EntityStore bound to the caller's session

from accounts.db.repositories.base_repository import EntityStore
from accounts.db.repositories.user_repository import UserRepository

__all__ = ["EntityStore", "UserRepository"]
