from datetime import datetime
from typing import List, Tuple

from sqlalchemy import String, cast, func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_log_repository import IAuditLogRepository
from src.domain.base import as_naive_utc
from src.domain.entities import AuditLog
from src.domain.queries import AuditLogFilters


def build_audit_log_conditions(filters: AuditLogFilters) -> list:
    """Compile filters into an ordered list of boolean clauses (ANDed)."""
    conditions = []

    if filters.actor_id:
        conditions.append(AuditLog.actor_id == filters.actor_id)
    if filters.action_types:
        conditions.append(AuditLog.action_type.in_(filters.action_types))
    if filters.target_id:
        conditions.append(AuditLog.target_id == filters.target_id)
    if filters.organization_id:
        conditions.append(AuditLog.organization_id == filters.organization_id)
    if filters.start_date:
        conditions.append(AuditLog.timestamp >= as_naive_utc(filters.start_date))
    if filters.end_date:
        conditions.append(AuditLog.timestamp <= as_naive_utc(filters.end_date))
    if filters.ip_address:
        conditions.append(AuditLog.ip_address == filters.ip_address)
    if filters.success is not None:
        conditions.append(AuditLog.success == filters.success)
    if filters.search_query:
        query = filters.search_query
        conditions.append(
            or_(
                cast(AuditLog.log_metadata, String).icontains(query, autoescape=True),
                cast(AuditLog.action_type, String).icontains(query, autoescape=True),
                AuditLog.target_id.icontains(query, autoescape=True),
            )
        )

    return conditions


class AuditLogRepository(IAuditLogRepository):
    """AuditLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_log: AuditLog) -> AuditLog:
        """Append a new audit log entry (immutable)"""
        self.session.add(audit_log)
        await self.session.flush()
        await self.session.refresh(audit_log)
        return audit_log

    async def query(self, filters: AuditLogFilters) -> Tuple[List[AuditLog], int]:
        conditions = build_audit_log_conditions(filters)

        count_stmt = select(func.count()).select_from(AuditLog).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(AuditLog)
            .where(*conditions)
            .order_by(AuditLog.timestamp.desc(), AuditLog.log_id.desc())
            .offset(filters.page * filters.page_size)
            .limit(filters.page_size)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def list_matching(self, filters: AuditLogFilters, limit: int) -> List[AuditLog]:
        stmt = (
            select(AuditLog)
            .where(*build_audit_log_conditions(filters))
            .order_by(AuditLog.timestamp.desc(), AuditLog.log_id.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_since(self, since: datetime) -> int:
        stmt = select(func.count()).select_from(AuditLog).where(AuditLog.timestamp >= since)
        return (await self.session.exec(stmt)).one()
