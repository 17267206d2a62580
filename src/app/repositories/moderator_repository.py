from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Moderator


class IModeratorRepository(ABC):
    """Moderator repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Optional[Moderator]:
        """Get the admin_users row for a user, if any"""
        pass

    @abstractmethod
    async def create(self, moderator: Moderator) -> Moderator:
        """Register a moderator"""
        pass
