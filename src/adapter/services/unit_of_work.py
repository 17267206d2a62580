from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.abuse_detection_config_repository import (
    AbuseDetectionConfigRepository,
)
from src.adapter.repositories.abuse_report_repository import AbuseReportRepository
from src.adapter.repositories.audit_log_repository import AuditLogRepository
from src.adapter.repositories.moderation_flag_repository import ModerationFlagRepository
from src.adapter.repositories.moderator_repository import ModeratorRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.audit_logs = AuditLogRepository(self.session)
        self.abuse_reports = AbuseReportRepository(self.session)
        self.abuse_configs = AbuseDetectionConfigRepository(self.session)
        self.moderation_flags = ModerationFlagRepository(self.session)
        self.moderators = ModeratorRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
