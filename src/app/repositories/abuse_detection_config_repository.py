from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import AbuseDetectionConfig


class IAbuseDetectionConfigRepository(ABC):
    """AbuseDetectionConfig repository interface - application layer"""

    @abstractmethod
    async def get_active(self, organization_id: Optional[UUID]) -> Optional[AbuseDetectionConfig]:
        """
        Get the active config row for an organization.

        organization_id None selects the global default row. Returns None
        when no row exists; falling back to defaults is the caller's job.
        """
        pass

    @abstractmethod
    async def get_by_organization(
        self, organization_id: Optional[UUID]
    ) -> Optional[AbuseDetectionConfig]:
        """Get the row for an organization whether active or not"""
        pass

    @abstractmethod
    async def save(self, config: AbuseDetectionConfig) -> AbuseDetectionConfig:
        """Insert or update a config row"""
        pass
