"""
Get Audit Logs Use Case

Filtered, paginated view of the audit trail.
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit.dtos import AuditLogsPage, AuditLogView
from src.domain.queries import AuditLogFilters


class GetAuditLogsUseCase:
    """
    Use case for querying audit logs.

    Business Rules:
    - All filters combine with AND; unset filters do not constrain
    - search_query is a case-insensitive substring over metadata,
      action type and target id
    - Always newest first; total counts the whole filtered set
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, filters: AuditLogFilters) -> Result[AuditLogsPage]:
        """
        Execute get audit logs use case.

        Args:
            filters: Filter criteria plus zero-based page and page_size

        Returns:
            Result[AuditLogsPage], or Error for an inverted date range
        """
        if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            return Return.err(
                Error("INVALID_DATE_RANGE", "start_date must not be after end_date")
            )

        async with self.uow:
            logs, total = await self.uow.audit_logs.query(filters)

            return Return.ok(
                AuditLogsPage(
                    logs=[AuditLogView.from_entity(log) for log in logs],
                    total=total,
                    page=filters.page,
                    page_size=filters.page_size,
                )
            )
