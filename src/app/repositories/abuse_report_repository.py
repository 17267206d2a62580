from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from src.domain.entities import AbuseReport
from src.domain.queries import AbuseReportFilters


class IAbuseReportRepository(ABC):
    """AbuseReport repository interface - application layer"""

    @abstractmethod
    async def create(self, report: AbuseReport) -> AbuseReport:
        """Persist a new abuse report"""
        pass

    @abstractmethod
    async def get_by_id(self, report_id: UUID) -> Optional[AbuseReport]:
        """Get report by ID"""
        pass

    @abstractmethod
    async def update(self, report: AbuseReport) -> AbuseReport:
        """Update review fields of an existing report"""
        pass

    @abstractmethod
    async def query(self, filters: AbuseReportFilters) -> Tuple[List[AbuseReport], int]:
        """
        Get one page of filtered reports, newest detection first.

        Returns:
            Tuple of (reports, total) where total ignores pagination
        """
        pass

    @abstractmethod
    async def count_since(self, since: datetime) -> int:
        """Count reports with detected_at >= since"""
        pass

    @abstractmethod
    async def score_distribution_since(self, since: datetime) -> Dict[str, int]:
        """Map abuse_score value -> report count for detected_at >= since"""
        pass

    @abstractmethod
    async def patterns_since(self, since: datetime) -> List[List[str]]:
        """Pattern lists of every report with detected_at >= since"""
        pass
