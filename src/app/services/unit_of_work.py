from abc import ABC, abstractmethod

from src.app.repositories.abuse_detection_config_repository import (
    IAbuseDetectionConfigRepository,
)
from src.app.repositories.abuse_report_repository import IAbuseReportRepository
from src.app.repositories.audit_log_repository import IAuditLogRepository
from src.app.repositories.moderation_flag_repository import IModerationFlagRepository
from src.app.repositories.moderator_repository import IModeratorRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    audit_logs: IAuditLogRepository
    abuse_reports: IAbuseReportRepository
    abuse_configs: IAbuseDetectionConfigRepository
    moderation_flags: IModerationFlagRepository
    moderators: IModeratorRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
