"""
AbuseDetectionConfig Entity

Thresholds that drive the abuse scoring engine.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now

# Fallback thresholds used when no row exists for the organization
DEFAULT_THRESHOLDS = {
    "rate_limit_exceeded_threshold": 10,
    "rate_limit_bypass_threshold": 5,
    "malformed_payload_threshold": 20,
    "malformed_payload_percentage": 15.0,
    "unauthorized_attempts_threshold": 10,
    "auth_failure_threshold": 15,
    "token_reuse_threshold": 5,
    "suspicious_token_pattern_threshold": 3,
    "webhook_failure_threshold": 10,
    "webhook_failure_percentage": 25.0,
    "time_window_minutes": 60,
    "requests_per_minute_threshold": 100,
    "error_rate_threshold": 20.0,
    "suspicious_score_threshold": 50,
    "abusive_score_threshold": 75,
}


class AbuseDetectionConfig(SQLModel, table=True):
    """
    AbuseDetectionConfig entity - one active row per organization.

    Business Rules:
    - organization_id NULL is the global default row
    - abusive_score_threshold > suspicious_score_threshold >= 0
    - Always read from the store per call, never cached in process
    """

    __tablename__ = "abuse_detection_config"

    config_id: UUID = Field(default_factory=uuid4, primary_key=True)
    organization_id: Optional[UUID] = Field(default=None, unique=True, index=True)

    # Rate limiting
    rate_limit_exceeded_threshold: int = Field(default=10)
    rate_limit_bypass_threshold: int = Field(default=5)

    # Payload quality
    malformed_payload_threshold: int = Field(default=20)
    malformed_payload_percentage: float = Field(default=15.0)

    # Authorization
    unauthorized_attempts_threshold: int = Field(default=10)
    auth_failure_threshold: int = Field(default=15)

    # Token security
    token_reuse_threshold: int = Field(default=5)
    suspicious_token_pattern_threshold: int = Field(default=3)

    # Webhooks
    webhook_failure_threshold: int = Field(default=10)
    webhook_failure_percentage: float = Field(default=25.0)

    # General
    time_window_minutes: int = Field(default=60)
    requests_per_minute_threshold: int = Field(default=100)
    error_rate_threshold: float = Field(default=20.0)

    # Classification cutoffs (0-100)
    suspicious_score_threshold: int = Field(default=50)
    abusive_score_threshold: int = Field(default=75)

    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    @classmethod
    def default(cls, organization_id: Optional[UUID] = None) -> "AbuseDetectionConfig":
        """Hard-coded fallback, never persisted by this call."""
        return cls(organization_id=organization_id, **DEFAULT_THRESHOLDS)

    def has_valid_cutoffs(self) -> bool:
        return self.abusive_score_threshold > self.suspicious_score_threshold >= 0

    def thresholds(self) -> dict:
        return {key: getattr(self, key) for key in DEFAULT_THRESHOLDS}
