"""
Log Audit Entry Use Case

Appends one entry to the audit trail.
"""

from libs.result import Result, Return
from src.app.services.audit_trail import record_audit_entry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit.dtos import LogAuditEntryCommand, LogAuditEntryResponse


class LogAuditEntryUseCase:
    """
    Use case for appending an audit entry.

    Business Rules:
    - log_id and timestamp are assigned by the service
    - Entries are never updated or deleted afterwards
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: LogAuditEntryCommand) -> Result[LogAuditEntryResponse]:
        async with self.uow:
            audit_log = await record_audit_entry(
                self.uow,
                actor_id=command.actor_id,
                action_type=command.action_type,
                target_id=command.target_id,
                target_type=command.target_type,
                organization_id=command.organization_id,
                metadata=command.metadata,
                ip_address=command.ip_address,
                user_agent=command.user_agent,
                success=command.success,
                error_message=command.error_message,
            )
            await self.uow.commit()

            return Return.ok(LogAuditEntryResponse(log_id=str(audit_log.log_id)))
