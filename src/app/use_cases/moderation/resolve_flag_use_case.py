"""
Resolve Flag Use Case

Manual reversal of a moderation flag before it expires.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_trail import record_audit_entry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.moderation.dtos import ResolveFlagResponse
from src.domain.base import utc_now
from src.domain.entities import AuditActionType, ModerationFlagType

logger = logging.getLogger(__name__)


class ResolveFlagUseCase:
    """
    Use case for resolving (deactivating) a flag.

    Business Rules:
    - Sets is_active=False, resolved_at, resolved_by, resolution_notes
    - Resolving a BAN is audited as client_unbanned, anything else as flag_resolved
    - Already resolved flags are rejected
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        flag_id: UUID,
        resolved_by: str,
        notes: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[ResolveFlagResponse]:
        async with self.uow:
            flag = await self.uow.moderation_flags.get_by_id(flag_id)
            if flag is None:
                return Return.err(Error("FLAG_NOT_FOUND", "Moderation flag not found"))

            if not flag.is_active or flag.resolved_at is not None:
                return Return.err(
                    Error("FLAG_ALREADY_RESOLVED", "Moderation flag is already resolved")
                )

            now = utc_now()
            flag.is_active = False
            flag.resolved_at = now
            flag.resolved_by = resolved_by
            flag.resolution_notes = notes
            await self.uow.moderation_flags.update(flag)

            if flag.flag_type == ModerationFlagType.ban:
                action_type = AuditActionType.client_unbanned
            else:
                action_type = AuditActionType.flag_resolved

            target_id, target_type = flag.target
            await record_audit_entry(
                self.uow,
                actor_id=resolved_by,
                action_type=action_type,
                target_id=target_id,
                target_type=target_type,
                organization_id=flag.organization_id,
                metadata={"flag_id": str(flag_id), "notes": notes},
                ip_address=ip_address,
                user_agent=user_agent,
            )

            await self.uow.commit()
            logger.info("Flag %s resolved by %s", flag_id, resolved_by)

            return Return.ok(
                ResolveFlagResponse(
                    flag_id=str(flag_id), status="resolved", resolved_at=now.isoformat() + "Z"
                )
            )
