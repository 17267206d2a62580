"""
Abuse Detection Use Case DTOs
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.abuse_scoring import AbuseDetectionMetrics, AbuseDetectionResult
from src.domain.entities import AbuseDetectionConfig, AbusePatternType, AbuseReport, AbuseScore


# ============================================================================
# Command DTOs
# ============================================================================


class DetectAbuseCommand(BaseModel):
    metrics: AbuseDetectionMetrics
    organization_id: Optional[UUID] = None


class UpdateAbuseDetectionConfigCommand(BaseModel):
    """Partial threshold update; unset fields keep their current value"""

    rate_limit_exceeded_threshold: Optional[int] = Field(default=None, ge=0)
    rate_limit_bypass_threshold: Optional[int] = Field(default=None, ge=0)
    malformed_payload_threshold: Optional[int] = Field(default=None, ge=0)
    malformed_payload_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    unauthorized_attempts_threshold: Optional[int] = Field(default=None, ge=0)
    auth_failure_threshold: Optional[int] = Field(default=None, ge=0)
    token_reuse_threshold: Optional[int] = Field(default=None, ge=0)
    suspicious_token_pattern_threshold: Optional[int] = Field(default=None, ge=0)
    webhook_failure_threshold: Optional[int] = Field(default=None, ge=0)
    webhook_failure_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    time_window_minutes: Optional[int] = Field(default=None, gt=0)
    requests_per_minute_threshold: Optional[int] = Field(default=None, ge=0)
    error_rate_threshold: Optional[float] = Field(default=None, ge=0, le=100)
    suspicious_score_threshold: Optional[int] = Field(default=None, ge=0, le=100)
    abusive_score_threshold: Optional[int] = Field(default=None, ge=0, le=100)
    is_active: Optional[bool] = None


class ResolveAbuseReportCommand(BaseModel):
    notes: Optional[str] = None
    is_flagged: Optional[bool] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AbuseDetectionConfigView(BaseModel):
    organization_id: Optional[str] = None
    is_default: bool
    is_active: bool
    thresholds: Dict[str, Any]

    @classmethod
    def from_entity(cls, config: AbuseDetectionConfig, is_default: bool) -> "AbuseDetectionConfigView":
        return cls(
            organization_id=str(config.organization_id) if config.organization_id else None,
            is_default=is_default,
            is_active=config.is_active,
            thresholds=config.thresholds(),
        )


class DetectAbuseResponse(BaseModel):
    abuse_score: AbuseScore
    severity: int
    patterns: List[AbusePatternType]

    @classmethod
    def from_result(cls, result: AbuseDetectionResult) -> "DetectAbuseResponse":
        return cls(
            abuse_score=result.score,
            severity=result.severity,
            patterns=[AbusePatternType(value) for value in result.sorted_patterns()],
        )


class CreateAbuseReportResponse(BaseModel):
    report_id: str
    abuse_score: AbuseScore
    severity: int
    patterns: List[str]


class AbuseReportView(BaseModel):
    report_id: str
    client_id: Optional[str] = None
    ip_address: Optional[str] = None
    token_id: Optional[str] = None
    endpoint: Optional[str] = None
    abuse_score: AbuseScore
    patterns: List[str]
    metrics: Dict[str, Any]
    organization_id: Optional[str] = None
    severity: int
    detected_at: str
    is_flagged: bool
    is_resolved: bool
    resolved_at: Optional[str] = None
    resolved_by: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_entity(cls, report: AbuseReport) -> "AbuseReportView":
        return cls(
            report_id=str(report.report_id),
            client_id=report.client_id,
            ip_address=report.ip_address,
            token_id=report.token_id,
            endpoint=report.endpoint,
            abuse_score=report.abuse_score,
            patterns=list(report.patterns or []),
            metrics=report.metrics or {},
            organization_id=str(report.organization_id) if report.organization_id else None,
            severity=report.severity,
            detected_at=report.detected_at.isoformat() + "Z",
            is_flagged=report.is_flagged,
            is_resolved=report.is_resolved,
            resolved_at=report.resolved_at.isoformat() + "Z" if report.resolved_at else None,
            resolved_by=report.resolved_by,
            notes=report.notes,
        )


class AbuseReportsPage(BaseModel):
    reports: List[AbuseReportView]
    total: int
    page: int
    page_size: int
