from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.moderator_repository import IModeratorRepository
from src.domain.entities import Moderator


class ModeratorRepository(IModeratorRepository):
    """Moderator repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: str) -> Optional[Moderator]:
        stmt = select(Moderator).where(Moderator.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, moderator: Moderator) -> Moderator:
        self.session.add(moderator)
        await self.session.flush()
        await self.session.refresh(moderator)
        return moderator
