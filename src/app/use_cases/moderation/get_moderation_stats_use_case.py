"""
Get Moderation Stats Use Case

Dashboard aggregates for a fixed look-back window.
"""

from collections import Counter
from datetime import timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.moderation.dtos import (
    AbuseScoreDistribution,
    FlaggedClient,
    FlaggedIP,
    ModerationStats,
    PatternCount,
)
from src.domain.base import utc_now
from src.domain.entities import AbusePatternType

TIME_RANGES = {
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
}

TOP_LIMIT = 10


class GetModerationStatsUseCase:
    """
    Use case for moderation statistics.

    Business Rules:
    - time_range is one of 24h, 7d, 30d, 90d
    - Every count is restricted to the window except active flags,
      which is the number of flags active right now
    - Top lists hold at most 10 entries; severity is the highest observed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, time_range: Optional[str] = "7d") -> Result[ModerationStats]:
        window = TIME_RANGES.get(time_range or "7d")
        if window is None:
            return Return.err(
                Error(
                    "INVALID_TIME_RANGE",
                    f"time_range must be one of {', '.join(TIME_RANGES)}",
                )
            )

        now = utc_now()
        since = now - window

        async with self.uow:
            total_audit_logs = await self.uow.audit_logs.count_since(since)
            total_abuse_reports = await self.uow.abuse_reports.count_since(since)
            active_flags = await self.uow.moderation_flags.count_active(now)
            resolved_flags = await self.uow.moderation_flags.count_resolved_since(since)
            distribution = await self.uow.abuse_reports.score_distribution_since(since)
            pattern_lists = await self.uow.abuse_reports.patterns_since(since)
            top_clients = await self.uow.moderation_flags.top_flagged_clients(
                since, limit=TOP_LIMIT
            )
            top_ips = await self.uow.moderation_flags.top_flagged_ips(since, limit=TOP_LIMIT)

        counter = Counter(pattern for patterns in pattern_lists for pattern in patterns)
        top_patterns = [
            PatternCount(pattern=AbusePatternType(pattern), count=count)
            for pattern, count in counter.most_common(TOP_LIMIT)
        ]

        return Return.ok(
            ModerationStats(
                time_range=time_range or "7d",
                total_audit_logs=total_audit_logs,
                total_abuse_reports=total_abuse_reports,
                active_flags=active_flags,
                resolved_flags=resolved_flags,
                abuse_score_distribution=AbuseScoreDistribution(**distribution),
                top_patterns=top_patterns,
                top_flagged_clients=[
                    FlaggedClient(client_id=client_id, flag_count=count, latest_severity=severity)
                    for client_id, count, severity in top_clients
                ],
                top_flagged_ips=[
                    FlaggedIP(ip_address=ip, flag_count=count, latest_severity=severity)
                    for ip, count, severity in top_ips
                ],
            )
        )
