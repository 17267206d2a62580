"""
Get Abuse Reports Use Case
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.abuse.dtos import AbuseReportsPage, AbuseReportView
from src.domain.queries import AbuseReportFilters


class GetAbuseReportsUseCase:
    """
    Use case for querying abuse reports.

    Business Rules:
    - Filters combine with AND; patterns matches any listed pattern
    - Severity bounds are inclusive
    - Newest detected_at first; total counts the whole filtered set
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, filters: AbuseReportFilters) -> Result[AbuseReportsPage]:
        if (
            filters.min_severity is not None
            and filters.max_severity is not None
            and filters.min_severity > filters.max_severity
        ):
            return Return.err(
                Error("INVALID_SEVERITY_RANGE", "min_severity must not exceed max_severity")
            )

        async with self.uow:
            reports, total = await self.uow.abuse_reports.query(filters)

            return Return.ok(
                AbuseReportsPage(
                    reports=[AbuseReportView.from_entity(report) for report in reports],
                    total=total,
                    page=filters.page,
                    page_size=filters.page_size,
                )
            )
