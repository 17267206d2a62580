"""
AuditLog Entity

Append-only record of every sensitive administrative/enforcement action.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import SYSTEM_ORGANIZATION_ID, utc_now

from .enums import AuditActionType


class AuditLog(SQLModel, table=True):
    """
    AuditLog entity - one immutable row per sensitive action.

    Business Rules:
    - Immutable (never updated or deleted)
    - log_id and timestamp are assigned on insert, never by the caller
    - timestamp is the canonical ordering key (newest first)
    - System actions use the nil organization id and 0.0.0.0
    """

    __tablename__ = "audit_logs"

    log_id: UUID = Field(default_factory=uuid4, primary_key=True)

    actor_id: str = Field(max_length=255, index=True)
    action_type: AuditActionType = Field(index=True)
    target_id: Optional[str] = Field(default=None, max_length=255, index=True)
    target_type: Optional[str] = Field(default=None, max_length=100)

    ip_address: str = Field(max_length=45)
    user_agent: Optional[str] = Field(default=None)
    organization_id: UUID = Field(default=SYSTEM_ORGANIZATION_ID, index=True)

    log_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))
    success: bool = Field(default=True)
    error_message: Optional[str] = Field(default=None)

    timestamp: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_logs_timestamp", "timestamp"),
        Index("idx_audit_logs_org_timestamp", "organization_id", "timestamp"),
        Index("idx_audit_logs_action_timestamp", "action_type", "timestamp"),
    )
