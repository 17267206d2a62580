"""
Flag recording shared by FlagClientUseCase and BanTokenUseCase.
"""

import logging
from typing import Optional

from libs.result import Error
from src.app.services.audit_trail import record_audit_entry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.moderation.dtos import FlagClientCommand
from src.domain.base import as_naive_utc
from src.domain.entities import AuditActionType, ModerationFlag

logger = logging.getLogger(__name__)


def validate_flag_command(command: FlagClientCommand) -> Optional[Error]:
    """Return the validation error for a flag request, or None if valid."""
    if not command.has_identifier():
        return Error(
            "MISSING_IDENTIFIER",
            "At least one identifier (client_id, token_id, or ip_address) is required",
        )
    if not command.flag_reason or not command.flag_reason.strip():
        return Error("MISSING_REASON", "flag_reason is required")
    return None


async def record_flag(
    uow: UnitOfWork,
    command: FlagClientCommand,
    flagged_by: str,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> ModerationFlag:
    """
    Create the flag and its client_flagged audit entry (no commit).

    The command must already have passed validate_flag_command.
    """
    flag = ModerationFlag(
        client_id=command.client_id,
        token_id=command.token_id,
        ip_address=command.ip_address,
        organization_id=command.organization_id,
        flag_reason=command.flag_reason,
        flag_type=command.flag_type,
        severity=command.severity,
        flagged_by=flagged_by,
        expires_at=as_naive_utc(command.expires_at),
        flag_metadata=command.metadata or {},
    )
    flag = await uow.moderation_flags.create(flag)

    target_id, target_type = flag.target
    await record_audit_entry(
        uow,
        actor_id=flagged_by,
        action_type=AuditActionType.client_flagged,
        target_id=target_id,
        target_type=target_type,
        organization_id=command.organization_id,
        metadata={
            "flag_id": str(flag.flag_id),
            "flag_type": command.flag_type.value,
            "severity": command.severity.value,
            "reason": command.flag_reason,
        },
        ip_address=ip_address,
        user_agent=user_agent,
    )

    logger.info(
        "Flag %s (%s/%s) recorded on %s %s by %s",
        flag.flag_id,
        command.flag_type.value,
        command.severity.value,
        target_type,
        target_id,
        flagged_by,
    )
    return flag
