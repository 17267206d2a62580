"""
Resolve Abuse Report Use Case

Human review outcome for an abuse report.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_trail import record_audit_entry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.abuse.dtos import AbuseReportView, ResolveAbuseReportCommand
from src.domain.base import utc_now
from src.domain.entities import AuditActionType

logger = logging.getLogger(__name__)


class ResolveAbuseReportUseCase:
    """
    Use case for resolving an abuse report.

    Business Rules:
    - Sets is_resolved, resolved_at, resolved_by and notes
    - is_flagged is only changed when supplied
    - Writes an abuse_report_resolved audit entry
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        report_id: UUID,
        command: ResolveAbuseReportCommand,
        resolved_by: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[AbuseReportView]:
        async with self.uow:
            report = await self.uow.abuse_reports.get_by_id(report_id)
            if report is None:
                return Return.err(Error("REPORT_NOT_FOUND", "Abuse report not found"))

            report.is_resolved = True
            report.resolved_at = utc_now()
            report.resolved_by = resolved_by
            report.notes = command.notes
            if command.is_flagged is not None:
                report.is_flagged = command.is_flagged
            report = await self.uow.abuse_reports.update(report)

            await record_audit_entry(
                self.uow,
                actor_id=resolved_by,
                action_type=AuditActionType.abuse_report_resolved,
                target_id=str(report_id),
                target_type="abuse_report",
                organization_id=report.organization_id,
                metadata={
                    "abuse_score": report.abuse_score.value,
                    "is_flagged": report.is_flagged,
                    "notes": command.notes,
                },
                ip_address=ip_address,
                user_agent=user_agent,
            )

            await self.uow.commit()
            logger.info("Abuse report %s resolved by %s", report_id, resolved_by)

            return Return.ok(AbuseReportView.from_entity(report))
