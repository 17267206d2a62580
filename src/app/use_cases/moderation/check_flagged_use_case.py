"""
Check Flagged Use Case

Answers whether a client, token or IP address is currently flagged.
"""

from datetime import datetime
from typing import List, Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.moderation.dtos import CheckFlaggedResponse, ModerationFlagView
from src.domain.base import utc_now


class CheckFlaggedUseCase:
    """
    Use case for active-flag lookups.

    Business Rules:
    - A flag is active iff not manually resolved and
      (expires_at is null or now < expires_at)
    - Expiry is evaluated at read time; nothing sweeps expired flags
    - get_active_flags uses the first supplied of client, token, IP;
      none supplied returns an empty list
    - is_flagged matches any supplied dimension; none supplied is False
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def is_flagged(
        self,
        client_id: Optional[str] = None,
        token_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> bool:
        async with self.uow:
            return await self.uow.moderation_flags.exists_active(
                now or utc_now(),
                client_id=client_id,
                token_id=token_id,
                ip_address=ip_address,
            )

    async def get_active_flags(
        self,
        client_id: Optional[str] = None,
        token_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[ModerationFlagView]:
        if not (client_id or token_id or ip_address):
            return []

        async with self.uow:
            return await self._active_flag_views(
                now or utc_now(), client_id, token_id, ip_address
            )

    async def execute(
        self,
        client_id: Optional[str] = None,
        token_id: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[CheckFlaggedResponse]:
        """Both lookups evaluated against the same instant."""
        now = utc_now()

        async with self.uow:
            flagged = await self.uow.moderation_flags.exists_active(
                now, client_id=client_id, token_id=token_id, ip_address=ip_address
            )
            views = []
            if client_id or token_id or ip_address:
                views = await self._active_flag_views(now, client_id, token_id, ip_address)

            return Return.ok(CheckFlaggedResponse(is_flagged=flagged, active_flags=views))

    async def _active_flag_views(
        self,
        now: datetime,
        client_id: Optional[str],
        token_id: Optional[str],
        ip_address: Optional[str],
    ) -> List[ModerationFlagView]:
        # Runs inside the caller's unit of work; rows expire once it rolls back.
        flags = await self.uow.moderation_flags.get_active(
            now, client_id=client_id, token_id=token_id, ip_address=ip_address
        )
        return [ModerationFlagView.from_entity(flag, now) for flag in flags]
