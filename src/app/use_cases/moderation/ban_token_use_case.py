"""
Ban Token Use Case

Bans a token by recording a critical BAN flag against it.
"""

import logging
from datetime import timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.audit_trail import record_audit_entry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.moderation.dtos import (
    BanTokenCommand,
    BanTokenResponse,
    FlagClientCommand,
)
from src.app.use_cases.moderation.flagging import record_flag
from src.domain.base import utc_now
from src.domain.entities import AuditActionType, ModerationFlagType, ModerationSeverity

logger = logging.getLogger(__name__)


class BanTokenUseCase:
    """
    Use case for banning a token.

    Business Rules:
    - A ban is a flag with flag_type=ban and severity=critical
    - ban_duration_hours sets expires_at = now + duration; absent means permanent
    - Writes both the client_flagged and the token_banned audit entries
    - notify_client is recorded only; delivery belongs to the notification service
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        command: BanTokenCommand,
        banned_by: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[BanTokenResponse]:
        """
        Execute ban token use case.

        Args:
            command: Ban request
            banned_by: Moderator performing the ban
            ip_address: Moderator's request IP (audit only)
            user_agent: Moderator's user agent (audit only)

        Returns:
            Result[BanTokenResponse], or Error
        """
        if not command.token_id or not command.reason.strip():
            return Return.err(Error("MISSING_FIELDS", "token_id and reason are required"))

        expires_at = None
        if command.ban_duration_hours:
            expires_at = utc_now() + timedelta(hours=command.ban_duration_hours)

        async with self.uow:
            flag = await record_flag(
                self.uow,
                FlagClientCommand(
                    token_id=command.token_id,
                    organization_id=command.organization_id,
                    flag_reason=command.reason,
                    flag_type=ModerationFlagType.ban,
                    severity=ModerationSeverity.critical,
                    expires_at=expires_at,
                    metadata=command.metadata,
                ),
                banned_by,
                ip_address=ip_address,
                user_agent=user_agent,
            )

            expires_at_str = expires_at.isoformat() + "Z" if expires_at else None
            await record_audit_entry(
                self.uow,
                actor_id=banned_by,
                action_type=AuditActionType.token_banned,
                target_id=command.token_id,
                target_type="token",
                organization_id=command.organization_id,
                metadata={
                    "flag_id": str(flag.flag_id),
                    "reason": command.reason,
                    "expires_at": expires_at_str,
                    "notify_client": command.notify_client,
                },
                ip_address=ip_address,
                user_agent=user_agent,
            )

            await self.uow.commit()

            if command.notify_client:
                logger.info(
                    "Client notification requested for banned token %s", command.token_id
                )

            if expires_at_str:
                message = f"Token {command.token_id} has been banned until {expires_at_str}"
            else:
                message = f"Token {command.token_id} has been banned permanently"

            return Return.ok(
                BanTokenResponse(
                    success=True,
                    token_id=command.token_id,
                    flag_id=str(flag.flag_id),
                    expires_at=expires_at_str,
                    message=message,
                )
            )
