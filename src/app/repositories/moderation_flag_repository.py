from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import ModerationFlag, ModerationSeverity


class IModerationFlagRepository(ABC):
    """ModerationFlag repository interface - application layer"""

    @abstractmethod
    async def create(self, flag: ModerationFlag) -> ModerationFlag:
        """Create a new moderation flag"""
        pass

    @abstractmethod
    async def get_by_id(self, flag_id: UUID) -> Optional[ModerationFlag]:
        """Get flag by ID"""
        pass

    @abstractmethod
    async def update(self, flag: ModerationFlag) -> ModerationFlag:
        """Update existing flag (manual resolution only)"""
        pass

    @abstractmethod
    async def get_active(
        self,
        now: datetime,
        client_id: Optional[str] = None,
        token_id: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> List[ModerationFlag]:
        """
        Get flags active at `now` for exactly one dimension.

        The first supplied of client_id, token_id, ip_address drives the
        lookup. Ordered by severity (critical first) then newest first.
        """
        pass

    @abstractmethod
    async def exists_active(
        self,
        now: datetime,
        client_id: Optional[str] = None,
        token_id: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> bool:
        """True if any flag active at `now` matches any supplied dimension"""
        pass

    @abstractmethod
    async def count_active(self, now: datetime) -> int:
        """Count flags active at `now`"""
        pass

    @abstractmethod
    async def count_resolved_since(self, since: datetime) -> int:
        """Count flags with resolved_at >= since"""
        pass

    @abstractmethod
    async def top_flagged_clients(
        self, since: datetime, limit: int = 10
    ) -> List[Tuple[str, int, ModerationSeverity]]:
        """(client_id, flag count, highest severity) for flags since, most flagged first"""
        pass

    @abstractmethod
    async def top_flagged_ips(
        self, since: datetime, limit: int = 10
    ) -> List[Tuple[str, int, ModerationSeverity]]:
        """(ip_address, flag count, highest severity) for flags since, most flagged first"""
        pass
