"""
Unit tests for moderator access and permissions
"""

import pytest
from unittest.mock import AsyncMock

from src.app.use_cases.moderators import (
    GetModeratorPermissionsUseCase,
    VerifyModeratorAccessUseCase,
)
from src.domain.entities import Moderator, ModeratorRole


@pytest.mark.asyncio
async def test_verify_access_for_moderator(mock_uow):
    """Test any admin_users row with a known role grants access"""
    mock_uow.moderators.get_by_user_id = AsyncMock(
        return_value=Moderator(user_id="u-1", role=ModeratorRole.moderator)
    )

    result = await VerifyModeratorAccessUseCase(mock_uow).execute("u-1")

    assert result.value is True


@pytest.mark.asyncio
async def test_verify_access_for_unknown_user(mock_uow):
    """Test no row means no access"""
    mock_uow.moderators.get_by_user_id = AsyncMock(return_value=None)

    result = await VerifyModeratorAccessUseCase(mock_uow).execute("nobody")

    assert result.value is False


@pytest.mark.asyncio
async def test_unknown_user_has_no_permissions(mock_uow):
    """Test every capability is False for non-moderators"""
    mock_uow.moderators.get_by_user_id = AsyncMock(return_value=None)

    result = await GetModeratorPermissionsUseCase(mock_uow).execute("nobody")

    permissions = result.value
    assert permissions.role is None
    assert not any(
        value for key, value in permissions.model_dump().items() if key.startswith("can_")
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "role, export, ban, configure",
    [
        (ModeratorRole.super_admin, True, True, True),
        (ModeratorRole.admin, True, True, False),
        (ModeratorRole.moderator, False, False, False),
    ],
)
async def test_role_capabilities(mock_uow, role, export, ban, configure):
    """Test the capability matrix per role"""
    mock_uow.moderators.get_by_user_id = AsyncMock(
        return_value=Moderator(user_id="u-1", role=role)
    )

    result = await GetModeratorPermissionsUseCase(mock_uow).execute("u-1")

    permissions = result.value
    assert permissions.role == role
    assert permissions.can_view_audit_logs is True
    assert permissions.can_view_abuse_reports is True
    assert permissions.can_flag_clients is True
    assert permissions.can_resolve_flags is True
    assert permissions.can_export_audit_logs is export
    assert permissions.can_ban_tokens is ban
    assert permissions.can_configure_detection is configure
