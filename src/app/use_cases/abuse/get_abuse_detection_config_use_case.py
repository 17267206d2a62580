"""
Get Abuse Detection Config Use Case

Resolves the detection thresholds in effect for an organization.
"""

import logging
from typing import Optional, Tuple
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.abuse.dtos import AbuseDetectionConfigView
from src.domain.entities import AbuseDetectionConfig

logger = logging.getLogger(__name__)


async def load_detection_config(
    uow: UnitOfWork, organization_id: Optional[UUID] = None
) -> Tuple[AbuseDetectionConfig, bool]:
    """
    Return (config, is_default) inside the caller's unit of work.

    A missing row falls back to the hard-coded defaults. Store errors
    propagate.
    """
    config = await uow.abuse_configs.get_active(organization_id)
    if config is None:
        logger.debug(
            "No abuse detection config for organization %s, using defaults", organization_id
        )
        return AbuseDetectionConfig.default(organization_id), True
    return config, False


class GetAbuseDetectionConfigUseCase:
    """
    Use case for reading detection thresholds.

    Business Rules:
    - organization_id None selects the global row
    - Missing row means defaults, never an error
    - Always read from the store, never cached
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, organization_id: Optional[UUID] = None
    ) -> Result[AbuseDetectionConfigView]:
        async with self.uow:
            config, is_default = await load_detection_config(self.uow, organization_id)
            return Return.ok(AbuseDetectionConfigView.from_entity(config, is_default))
