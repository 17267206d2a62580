"""
Unit tests for Ban Token Use Case
"""

import pytest
from datetime import timedelta

from src.app.use_cases.moderation import BanTokenCommand, BanTokenUseCase
from src.domain.base import utc_now
from src.domain.entities import AuditActionType, ModerationFlagType, ModerationSeverity


@pytest.mark.asyncio
async def test_permanent_ban(mock_uow):
    """Test no duration gives a permanent critical BAN flag"""
    use_case = BanTokenUseCase(mock_uow)
    result = await use_case.execute(
        BanTokenCommand(token_id="tok-1", reason="Replay attack"), banned_by="admin-1"
    )

    assert result.is_ok()
    assert result.value.success is True
    assert result.value.expires_at is None
    assert result.value.message == "Token tok-1 has been banned permanently"

    flag = mock_uow.moderation_flags.create.call_args.args[0]
    assert flag.flag_type == ModerationFlagType.ban
    assert flag.severity == ModerationSeverity.critical
    assert flag.token_id == "tok-1"
    assert flag.expires_at is None
    assert result.value.flag_id == str(flag.flag_id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_timed_ban_sets_expiry(mock_uow):
    """Test ban_duration_hours=24 expires a day from now"""
    before = utc_now()

    use_case = BanTokenUseCase(mock_uow)
    result = await use_case.execute(
        BanTokenCommand(token_id="tok-1", reason="Abuse", ban_duration_hours=24),
        banned_by="admin-1",
    )

    after = utc_now()
    flag = mock_uow.moderation_flags.create.call_args.args[0]
    assert before + timedelta(hours=24) <= flag.expires_at <= after + timedelta(hours=24)
    assert result.value.expires_at == flag.expires_at.isoformat() + "Z"
    assert "banned until" in result.value.message


@pytest.mark.asyncio
async def test_ban_writes_flag_and_ban_audit_entries(mock_uow):
    """Test client_flagged then token_banned audit entries"""
    use_case = BanTokenUseCase(mock_uow)
    await use_case.execute(
        BanTokenCommand(token_id="tok-1", reason="Abuse", notify_client=True),
        banned_by="admin-1",
    )

    action_types = [
        call.args[0].action_type for call in mock_uow.audit_logs.create.call_args_list
    ]
    assert action_types == [AuditActionType.client_flagged, AuditActionType.token_banned]

    ban_entry = mock_uow.audit_logs.create.call_args_list[1].args[0]
    assert ban_entry.target_id == "tok-1"
    assert ban_entry.target_type == "token"
    assert ban_entry.log_metadata["notify_client"] is True
    assert ban_entry.log_metadata["expires_at"] is None


@pytest.mark.asyncio
async def test_ban_requires_token_and_reason(mock_uow):
    """Test empty token id is rejected without writes"""
    use_case = BanTokenUseCase(mock_uow)
    result = await use_case.execute(BanTokenCommand(token_id="", reason="x"), banned_by="admin-1")

    assert result.is_err()
    assert result.error.code == "MISSING_FIELDS"
    mock_uow.moderation_flags.create.assert_not_called()


@pytest.mark.asyncio
async def test_ban_rejects_blank_reason(mock_uow):
    """Test a whitespace-only reason is rejected without writes"""
    use_case = BanTokenUseCase(mock_uow)
    result = await use_case.execute(
        BanTokenCommand(token_id="tok-1", reason="   "), banned_by="admin-1"
    )

    assert result.is_err()
    assert result.error.code == "MISSING_FIELDS"
    mock_uow.moderation_flags.create.assert_not_called()
    mock_uow.audit_logs.create.assert_not_called()
