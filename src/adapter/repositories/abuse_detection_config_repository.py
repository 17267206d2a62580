from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.abuse_detection_config_repository import (
    IAbuseDetectionConfigRepository,
)
from src.domain.entities import AbuseDetectionConfig


class AbuseDetectionConfigRepository(IAbuseDetectionConfigRepository):
    """AbuseDetectionConfig repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _for_organization(self, organization_id: Optional[UUID]):
        stmt = select(AbuseDetectionConfig)
        if organization_id is None:
            return stmt.where(AbuseDetectionConfig.organization_id.is_(None))
        return stmt.where(AbuseDetectionConfig.organization_id == organization_id)

    async def get_active(self, organization_id: Optional[UUID]) -> Optional[AbuseDetectionConfig]:
        stmt = self._for_organization(organization_id).where(
            AbuseDetectionConfig.is_active == True
        )
        result = await self.session.exec(stmt.limit(1))
        return result.first()

    async def get_by_organization(
        self, organization_id: Optional[UUID]
    ) -> Optional[AbuseDetectionConfig]:
        result = await self.session.exec(self._for_organization(organization_id).limit(1))
        return result.first()

    async def save(self, config: AbuseDetectionConfig) -> AbuseDetectionConfig:
        self.session.add(config)
        await self.session.flush()
        await self.session.refresh(config)
        return config
