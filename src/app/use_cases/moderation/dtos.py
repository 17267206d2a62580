"""
Moderation Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the flag/ban lifecycle and statistics.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import (
    AbusePatternType,
    ModerationFlag,
    ModerationFlagType,
    ModerationSeverity,
)


# ============================================================================
# Command DTOs
# ============================================================================


class FlagClientCommand(BaseModel):
    """Flag a client, token or IP address"""

    client_id: Optional[str] = None
    token_id: Optional[str] = None
    ip_address: Optional[str] = None
    organization_id: Optional[UUID] = None
    flag_reason: str
    flag_type: ModerationFlagType
    severity: ModerationSeverity
    expires_at: Optional[datetime] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def has_identifier(self) -> bool:
        return bool(self.client_id or self.token_id or self.ip_address)


class BanTokenCommand(BaseModel):
    """Ban a token, permanently unless ban_duration_hours is given"""

    token_id: str
    reason: str
    notify_client: bool = False
    ban_duration_hours: Optional[float] = Field(default=None, gt=0)
    organization_id: Optional[UUID] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Response DTOs
# ============================================================================


class ModerationFlagView(BaseModel):
    """Moderation flag as exposed to callers"""

    flag_id: str
    client_id: Optional[str] = None
    token_id: Optional[str] = None
    ip_address: Optional[str] = None
    organization_id: Optional[str] = None
    flag_reason: str
    flag_type: ModerationFlagType
    severity: ModerationSeverity
    flagged_by: str
    flagged_at: str
    expires_at: Optional[str] = None
    is_active: bool
    metadata: Dict[str, Any]
    resolved_at: Optional[str] = None
    resolved_by: Optional[str] = None
    resolution_notes: Optional[str] = None

    @classmethod
    def from_entity(cls, flag: ModerationFlag, now: datetime) -> "ModerationFlagView":
        return cls(
            flag_id=str(flag.flag_id),
            client_id=flag.client_id,
            token_id=flag.token_id,
            ip_address=flag.ip_address,
            organization_id=str(flag.organization_id) if flag.organization_id else None,
            flag_reason=flag.flag_reason,
            flag_type=flag.flag_type,
            severity=flag.severity,
            flagged_by=flag.flagged_by,
            flagged_at=flag.flagged_at.isoformat() + "Z",
            expires_at=flag.expires_at.isoformat() + "Z" if flag.expires_at else None,
            is_active=flag.is_active_at(now),
            metadata=flag.flag_metadata or {},
            resolved_at=flag.resolved_at.isoformat() + "Z" if flag.resolved_at else None,
            resolved_by=flag.resolved_by,
            resolution_notes=flag.resolution_notes,
        )


class FlagClientResponse(BaseModel):
    """Response for flag client use case"""

    flag_id: str
    message: str


class BanTokenResponse(BaseModel):
    """Response for ban token use case"""

    success: bool
    token_id: str
    flag_id: str
    expires_at: Optional[str] = None
    message: str


class CheckFlaggedResponse(BaseModel):
    """Response for check flagged use case"""

    is_flagged: bool
    active_flags: List[ModerationFlagView]


class ResolveFlagResponse(BaseModel):
    """Response for resolve flag use case"""

    flag_id: str
    status: str
    resolved_at: str


class AbuseScoreDistribution(BaseModel):
    normal: int = 0
    suspicious: int = 0
    abusive: int = 0


class PatternCount(BaseModel):
    pattern: AbusePatternType
    count: int


class FlaggedClient(BaseModel):
    client_id: str
    flag_count: int
    latest_severity: ModerationSeverity


class FlaggedIP(BaseModel):
    ip_address: str
    flag_count: int
    latest_severity: ModerationSeverity


class ModerationStats(BaseModel):
    """Moderation dashboard statistics for one time range"""

    time_range: str
    total_audit_logs: int
    total_abuse_reports: int
    active_flags: int
    resolved_flags: int
    abuse_score_distribution: AbuseScoreDistribution
    top_patterns: List[PatternCount]
    top_flagged_clients: List[FlaggedClient]
    top_flagged_ips: List[FlaggedIP]
