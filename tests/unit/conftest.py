import pytest
from unittest.mock import AsyncMock, MagicMock


def _echo(entity):
    return entity


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    # Writes hand the entity back, like flush + refresh
    uow.audit_logs.create = AsyncMock(side_effect=_echo)
    uow.moderation_flags.create = AsyncMock(side_effect=_echo)
    uow.moderation_flags.update = AsyncMock(side_effect=_echo)
    uow.abuse_reports.create = AsyncMock(side_effect=_echo)
    uow.abuse_reports.update = AsyncMock(side_effect=_echo)
    uow.abuse_configs.save = AsyncMock(side_effect=_echo)
    return uow
