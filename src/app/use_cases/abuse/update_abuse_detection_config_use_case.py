"""
Update Abuse Detection Config Use Case

Creates or updates the threshold row for an organization.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_trail import record_audit_entry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.abuse.dtos import (
    AbuseDetectionConfigView,
    UpdateAbuseDetectionConfigCommand,
)
from src.domain.base import utc_now
from src.domain.entities import AbuseDetectionConfig, AuditActionType

logger = logging.getLogger(__name__)


class UpdateAbuseDetectionConfigUseCase:
    """
    Use case for changing detection thresholds.

    Business Rules:
    - Missing row is created from the defaults, then the changes applied
    - abusive_score_threshold > suspicious_score_threshold >= 0 after the change
    - Writes an abuse_config_updated audit entry with before/after values
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        command: UpdateAbuseDetectionConfigCommand,
        updated_by: str,
        organization_id: Optional[UUID] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[AbuseDetectionConfigView]:
        changes = command.model_dump(exclude_none=True)

        async with self.uow:
            config = await self.uow.abuse_configs.get_by_organization(organization_id)
            if config is None:
                config = AbuseDetectionConfig.default(organization_id)
            before = config.thresholds()

            for key, value in changes.items():
                setattr(config, key, value)

            if not config.has_valid_cutoffs():
                return Return.err(
                    Error(
                        "INVALID_THRESHOLDS",
                        "abusive_score_threshold must be greater than suspicious_score_threshold",
                    )
                )

            config.updated_at = utc_now()
            config = await self.uow.abuse_configs.save(config)

            await record_audit_entry(
                self.uow,
                actor_id=updated_by,
                action_type=AuditActionType.abuse_config_updated,
                target_id=str(config.config_id),
                target_type="abuse_detection_config",
                organization_id=organization_id,
                metadata={
                    "changes": changes,
                    "previous": {key: before[key] for key in changes if key in before},
                },
                ip_address=ip_address,
                user_agent=user_agent,
            )

            await self.uow.commit()
            logger.info(
                "Abuse detection config for organization %s updated by %s",
                organization_id,
                updated_by,
            )

            return Return.ok(AbuseDetectionConfigView.from_entity(config, is_default=False))
