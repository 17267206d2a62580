"""
Verify Moderator Access Use Case
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ModeratorRole


class VerifyModeratorAccessUseCase:
    """
    Use case for gating the moderation console.

    Business Rules:
    - True iff the user has an admin_users row with a moderator role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[bool]:
        async with self.uow:
            moderator = await self.uow.moderators.get_by_user_id(user_id)
            return Return.ok(moderator is not None and moderator.role in set(ModeratorRole))
