"""
Query filter models for the audit trail and abuse reports.

Every field is optional; unset fields do not constrain the result.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import AbusePatternType, AbuseScore, AuditActionType


class AuditLogFilters(BaseModel):
    actor_id: Optional[str] = None
    action_types: Optional[List[AuditActionType]] = None
    target_id: Optional[str] = None
    organization_id: Optional[UUID] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    ip_address: Optional[str] = None
    success: Optional[bool] = None
    search_query: Optional[str] = None  # substring, case-insensitive
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=50, ge=1)


class AbuseReportFilters(BaseModel):
    abuse_score: Optional[AbuseScore] = None
    patterns: Optional[List[AbusePatternType]] = None  # matches any listed
    client_id: Optional[str] = None
    ip_address: Optional[str] = None
    token_id: Optional[str] = None
    organization_id: Optional[UUID] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    min_severity: Optional[int] = Field(default=None, ge=0, le=100)
    max_severity: Optional[int] = Field(default=None, ge=0, le=100)
    is_flagged: Optional[bool] = None
    is_resolved: Optional[bool] = None
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=50, ge=1)
