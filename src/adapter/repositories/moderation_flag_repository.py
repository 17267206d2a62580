from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, case, func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.moderation_flag_repository import IModerationFlagRepository
from src.domain.entities import SEVERITY_RANK, ModerationFlag, ModerationSeverity

RANK_TO_SEVERITY = {rank: severity for severity, rank in SEVERITY_RANK.items()}


def active_at(now: datetime):
    """Flag is active iff not manually deactivated and not yet expired."""
    return and_(
        ModerationFlag.is_active == True,
        or_(ModerationFlag.expires_at.is_(None), ModerationFlag.expires_at > now),
    )


def severity_rank():
    return case(
        *[(ModerationFlag.severity == severity, rank) for severity, rank in SEVERITY_RANK.items()],
        else_=0,
    )


class ModerationFlagRepository(IModerationFlagRepository):
    """ModerationFlag repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, flag: ModerationFlag) -> ModerationFlag:
        self.session.add(flag)
        await self.session.flush()
        await self.session.refresh(flag)
        return flag

    async def get_by_id(self, flag_id: UUID) -> Optional[ModerationFlag]:
        stmt = select(ModerationFlag).where(ModerationFlag.flag_id == flag_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update(self, flag: ModerationFlag) -> ModerationFlag:
        self.session.add(flag)
        await self.session.flush()
        await self.session.refresh(flag)
        return flag

    async def get_active(
        self,
        now: datetime,
        client_id: Optional[str] = None,
        token_id: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> List[ModerationFlag]:
        if client_id:
            dimension = ModerationFlag.client_id == client_id
        elif token_id:
            dimension = ModerationFlag.token_id == token_id
        elif ip_address:
            dimension = ModerationFlag.ip_address == ip_address
        else:
            return []

        stmt = (
            select(ModerationFlag)
            .where(dimension, active_at(now))
            .order_by(severity_rank().desc(), ModerationFlag.flagged_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def exists_active(
        self,
        now: datetime,
        client_id: Optional[str] = None,
        token_id: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> bool:
        dimensions = []
        if client_id:
            dimensions.append(ModerationFlag.client_id == client_id)
        if token_id:
            dimensions.append(ModerationFlag.token_id == token_id)
        if ip_address:
            dimensions.append(ModerationFlag.ip_address == ip_address)
        if not dimensions:
            return False

        stmt = (
            select(ModerationFlag.flag_id)
            .where(or_(*dimensions), active_at(now))
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def count_active(self, now: datetime) -> int:
        stmt = select(func.count()).select_from(ModerationFlag).where(active_at(now))
        return (await self.session.exec(stmt)).one()

    async def count_resolved_since(self, since: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(ModerationFlag)
            .where(ModerationFlag.resolved_at >= since)
        )
        return (await self.session.exec(stmt)).one()

    async def top_flagged_clients(
        self, since: datetime, limit: int = 10
    ) -> List[Tuple[str, int, ModerationSeverity]]:
        return await self._top_flagged(ModerationFlag.client_id, since, limit)

    async def top_flagged_ips(
        self, since: datetime, limit: int = 10
    ) -> List[Tuple[str, int, ModerationSeverity]]:
        return await self._top_flagged(ModerationFlag.ip_address, since, limit)

    async def _top_flagged(
        self, column, since: datetime, limit: int
    ) -> List[Tuple[str, int, ModerationSeverity]]:
        flag_count = func.count(ModerationFlag.flag_id).label("flag_count")
        max_rank = func.max(severity_rank()).label("max_rank")
        stmt = (
            select(column, flag_count, max_rank)
            .where(column.is_not(None), ModerationFlag.flagged_at >= since)
            .group_by(column)
            .order_by(flag_count.desc(), column)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return [
            (identifier, count, RANK_TO_SEVERITY.get(rank, ModerationSeverity.low))
            for identifier, count, rank in result.all()
        ]
