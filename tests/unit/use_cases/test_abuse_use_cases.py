"""
Unit tests for abuse detection config, detection and report use cases
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.use_cases.abuse import (
    CreateAbuseReportUseCase,
    DetectAbuseUseCase,
    GetAbuseDetectionConfigUseCase,
    ResolveAbuseReportCommand,
    ResolveAbuseReportUseCase,
    UpdateAbuseDetectionConfigCommand,
    UpdateAbuseDetectionConfigUseCase,
)
from src.domain.abuse_scoring import AbuseDetectionMetrics
from src.domain.entities import (
    DEFAULT_THRESHOLDS,
    AbuseDetectionConfig,
    AbuseReport,
    AbuseScore,
    AuditActionType,
)


@pytest.mark.asyncio
async def test_config_falls_back_to_defaults(mock_uow):
    """Test a missing row yields the hard-coded defaults, not an error"""
    mock_uow.abuse_configs.get_active = AsyncMock(return_value=None)
    organization_id = uuid4()

    result = await GetAbuseDetectionConfigUseCase(mock_uow).execute(organization_id)

    assert result.is_ok()
    assert result.value.is_default is True
    assert result.value.thresholds == DEFAULT_THRESHOLDS
    mock_uow.abuse_configs.get_active.assert_called_once_with(organization_id)


@pytest.mark.asyncio
async def test_config_uses_stored_row(mock_uow):
    """Test a stored row overrides the defaults"""
    stored = AbuseDetectionConfig.default()
    stored.auth_failure_threshold = 3
    mock_uow.abuse_configs.get_active = AsyncMock(return_value=stored)

    result = await GetAbuseDetectionConfigUseCase(mock_uow).execute()

    assert result.value.is_default is False
    assert result.value.thresholds["auth_failure_threshold"] == 3


@pytest.mark.asyncio
async def test_config_store_errors_propagate(mock_uow):
    """Test store failures are not absorbed by the fallback"""
    mock_uow.abuse_configs.get_active = AsyncMock(side_effect=RuntimeError("db down"))

    with pytest.raises(RuntimeError):
        await GetAbuseDetectionConfigUseCase(mock_uow).execute()


@pytest.mark.asyncio
async def test_detect_abuse_uses_organization_thresholds(mock_uow):
    """Test a lowered threshold changes the outcome"""
    stored = AbuseDetectionConfig.default()
    stored.auth_failure_threshold = 3
    mock_uow.abuse_configs.get_active = AsyncMock(return_value=stored)

    result = await DetectAbuseUseCase(mock_uow).execute(
        AbuseDetectionMetrics(authentication_failures=3), uuid4()
    )

    assert result.value.severity == 30
    assert [pattern.value for pattern in result.value.patterns] == ["brute_force_attempt"]


@pytest.mark.asyncio
async def test_create_report_persists_outcome(mock_uow):
    """Test the report stores dimensions, score, sorted patterns and raw metrics"""
    mock_uow.abuse_configs.get_active = AsyncMock(return_value=None)
    metrics = AbuseDetectionMetrics(
        client_id="client-1",
        endpoint="/v1/messages",
        token_reuse_count=5,
        authentication_failures=15,
        unauthorized_attempts=10,
    )

    result = await CreateAbuseReportUseCase(mock_uow).execute(metrics)

    assert result.is_ok()
    report = mock_uow.abuse_reports.create.call_args.args[0]
    assert report.client_id == "client-1"
    assert report.endpoint == "/v1/messages"
    assert report.abuse_score == AbuseScore.abusive
    assert report.severity == 90
    assert report.patterns == [
        "brute_force_attempt",
        "token_replay_attack",
        "unauthorized_access_attempts",
    ]
    assert report.metrics["token_reuse_count"] == 5
    assert result.value.report_id == str(report.report_id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_update_config_rejects_inverted_cutoffs(mock_uow):
    """Test INVALID_THRESHOLDS and no save"""
    mock_uow.abuse_configs.get_by_organization = AsyncMock(return_value=None)

    result = await UpdateAbuseDetectionConfigUseCase(mock_uow).execute(
        UpdateAbuseDetectionConfigCommand(suspicious_score_threshold=80),
        updated_by="root",
    )

    assert result.is_err()
    assert result.error.code == "INVALID_THRESHOLDS"
    mock_uow.abuse_configs.save.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_update_config_creates_row_and_audits(mock_uow):
    """Test a first update starts from the defaults and is audited"""
    mock_uow.abuse_configs.get_by_organization = AsyncMock(return_value=None)
    organization_id = uuid4()

    result = await UpdateAbuseDetectionConfigUseCase(mock_uow).execute(
        UpdateAbuseDetectionConfigCommand(token_reuse_threshold=2),
        updated_by="root",
        organization_id=organization_id,
    )

    assert result.is_ok()
    saved = mock_uow.abuse_configs.save.call_args.args[0]
    assert saved.organization_id == organization_id
    assert saved.token_reuse_threshold == 2
    assert saved.abusive_score_threshold == DEFAULT_THRESHOLDS["abusive_score_threshold"]

    audit_log = mock_uow.audit_logs.create.call_args.args[0]
    assert audit_log.action_type == AuditActionType.abuse_config_updated
    assert audit_log.log_metadata["changes"] == {"token_reuse_threshold": 2}
    assert audit_log.log_metadata["previous"] == {"token_reuse_threshold": 5}
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_resolve_report_not_found(mock_uow):
    """Test REPORT_NOT_FOUND"""
    mock_uow.abuse_reports.get_by_id = AsyncMock(return_value=None)

    result = await ResolveAbuseReportUseCase(mock_uow).execute(
        uuid4(), ResolveAbuseReportCommand(), resolved_by="mod-1"
    )

    assert result.is_err()
    assert result.error.code == "REPORT_NOT_FOUND"


@pytest.mark.asyncio
async def test_resolve_report_marks_reviewed(mock_uow):
    """Test resolution fields, optional flag toggle and audit entry"""
    report = AbuseReport(abuse_score=AbuseScore.suspicious, severity=55, client_id="client-1")
    mock_uow.abuse_reports.get_by_id = AsyncMock(return_value=report)

    result = await ResolveAbuseReportUseCase(mock_uow).execute(
        report.report_id,
        ResolveAbuseReportCommand(notes="False positive", is_flagged=False),
        resolved_by="mod-1",
    )

    assert result.is_ok()
    assert report.is_resolved is True
    assert report.resolved_by == "mod-1"
    assert report.notes == "False positive"
    assert result.value.is_resolved is True

    audit_log = mock_uow.audit_logs.create.call_args.args[0]
    assert audit_log.action_type == AuditActionType.abuse_report_resolved
    assert audit_log.target_id == str(report.report_id)
