from datetime import datetime
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import String, cast, func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.abuse_report_repository import IAbuseReportRepository
from src.domain.base import as_naive_utc
from src.domain.entities import AbuseReport
from src.domain.queries import AbuseReportFilters


def build_abuse_report_conditions(filters: AbuseReportFilters) -> list:
    """Compile filters into an ordered list of boolean clauses (ANDed)."""
    conditions = []

    if filters.abuse_score:
        conditions.append(AbuseReport.abuse_score == filters.abuse_score)
    if filters.patterns:
        # patterns is a JSON array of quoted tags; match any listed tag
        patterns_text = cast(AbuseReport.patterns, String)
        conditions.append(
            or_(
                *[
                    patterns_text.contains(f'"{pattern.value}"', autoescape=True)
                    for pattern in filters.patterns
                ]
            )
        )
    if filters.client_id:
        conditions.append(AbuseReport.client_id == filters.client_id)
    if filters.ip_address:
        conditions.append(AbuseReport.ip_address == filters.ip_address)
    if filters.token_id:
        conditions.append(AbuseReport.token_id == filters.token_id)
    if filters.organization_id:
        conditions.append(AbuseReport.organization_id == filters.organization_id)
    if filters.start_date:
        conditions.append(AbuseReport.detected_at >= as_naive_utc(filters.start_date))
    if filters.end_date:
        conditions.append(AbuseReport.detected_at <= as_naive_utc(filters.end_date))
    if filters.min_severity is not None:
        conditions.append(AbuseReport.severity >= filters.min_severity)
    if filters.max_severity is not None:
        conditions.append(AbuseReport.severity <= filters.max_severity)
    if filters.is_flagged is not None:
        conditions.append(AbuseReport.is_flagged == filters.is_flagged)
    if filters.is_resolved is not None:
        conditions.append(AbuseReport.is_resolved == filters.is_resolved)

    return conditions


class AbuseReportRepository(IAbuseReportRepository):
    """AbuseReport repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, report: AbuseReport) -> AbuseReport:
        self.session.add(report)
        await self.session.flush()
        await self.session.refresh(report)
        return report

    async def get_by_id(self, report_id: UUID) -> Optional[AbuseReport]:
        stmt = select(AbuseReport).where(AbuseReport.report_id == report_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update(self, report: AbuseReport) -> AbuseReport:
        self.session.add(report)
        await self.session.flush()
        await self.session.refresh(report)
        return report

    async def query(self, filters: AbuseReportFilters) -> Tuple[List[AbuseReport], int]:
        conditions = build_abuse_report_conditions(filters)

        count_stmt = select(func.count()).select_from(AbuseReport).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(AbuseReport)
            .where(*conditions)
            .order_by(AbuseReport.detected_at.desc(), AbuseReport.report_id.desc())
            .offset(filters.page * filters.page_size)
            .limit(filters.page_size)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def count_since(self, since: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(AbuseReport)
            .where(AbuseReport.detected_at >= since)
        )
        return (await self.session.exec(stmt)).one()

    async def score_distribution_since(self, since: datetime) -> Dict[str, int]:
        stmt = (
            select(AbuseReport.abuse_score, func.count())
            .where(AbuseReport.detected_at >= since)
            .group_by(AbuseReport.abuse_score)
        )
        result = await self.session.exec(stmt)
        return {getattr(score, "value", score): count for score, count in result.all()}

    async def patterns_since(self, since: datetime) -> List[List[str]]:
        stmt = select(AbuseReport.patterns).where(AbuseReport.detected_at >= since)
        result = await self.session.exec(stmt)
        return [patterns or [] for patterns in result.all()]
