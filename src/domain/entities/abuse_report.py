"""
AbuseReport Entity

Persisted result of one scoring run.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utc_now

from .enums import AbuseScore


class AbuseReport(SQLModel, table=True):
    """
    AbuseReport entity - outcome of abuse detection for one actor.

    Business Rules:
    - Created once per detection run
    - metrics holds the raw snapshot verbatim for audit/replay
    - Only is_flagged, is_resolved, resolved_at, resolved_by, notes change
      after creation (human review)
    """

    __tablename__ = "abuse_reports"

    report_id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: Optional[str] = Field(default=None, max_length=255, index=True)
    ip_address: Optional[str] = Field(default=None, max_length=45, index=True)
    token_id: Optional[str] = Field(default=None, max_length=255, index=True)
    endpoint: Optional[str] = Field(default=None, max_length=500)

    abuse_score: AbuseScore = Field(index=True)
    patterns: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    metrics: dict = Field(default_factory=dict, sa_column=Column(JSON))
    organization_id: Optional[UUID] = Field(default=None, index=True)
    severity: int = Field(default=0, ge=0, le=100)

    detected_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    # Review workflow
    is_flagged: bool = Field(default=False)
    is_resolved: bool = Field(default=False)
    resolved_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    resolved_by: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None)

    __table_args__ = (
        Index("idx_abuse_reports_detected_at", "detected_at"),
        Index("idx_abuse_reports_score_detected", "abuse_score", "detected_at"),
        Index("idx_abuse_reports_severity", "severity"),
    )
