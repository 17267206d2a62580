from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Tuple

from src.domain.entities import AuditLog
from src.domain.queries import AuditLogFilters


class IAuditLogRepository(ABC):
    """AuditLog repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_log: AuditLog) -> AuditLog:
        """Append a new audit log entry (immutable)"""
        pass

    @abstractmethod
    async def query(self, filters: AuditLogFilters) -> Tuple[List[AuditLog], int]:
        """
        Get one page of filtered audit logs.

        Returns:
            Tuple of (logs, total)
            - logs: page `filters.page` of size `filters.page_size`, newest first
            - total: number of rows matching the filters, ignoring pagination
        """
        pass

    @abstractmethod
    async def list_matching(self, filters: AuditLogFilters, limit: int) -> List[AuditLog]:
        """All filtered logs newest first, at most `limit` rows (pagination ignored)"""
        pass

    @abstractmethod
    async def count_since(self, since: datetime) -> int:
        """Count logs with timestamp >= since"""
        pass
