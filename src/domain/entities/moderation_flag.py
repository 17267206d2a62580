"""
ModerationFlag Entity

Enforcement record against a client, token or IP address.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utc_now

from .enums import ModerationFlagType, ModerationSeverity


class ModerationFlag(SQLModel, table=True):
    """
    ModerationFlag entity - warning, restriction, suspension or ban.

    Business Rules:
    - At least one of client_id / token_id / ip_address is set
    - Active while is_active and (expires_at is null or now < expires_at)
    - Expiry is evaluated lazily at query time, there is no sweep job
    - A ban is a flag of type ban with critical severity
    - Manual reversal sets is_active=False plus the resolution fields
    """

    __tablename__ = "moderation_flags"

    flag_id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: Optional[str] = Field(default=None, max_length=255, index=True)
    token_id: Optional[str] = Field(default=None, max_length=255, index=True)
    ip_address: Optional[str] = Field(default=None, max_length=45, index=True)
    organization_id: Optional[UUID] = Field(default=None, index=True)

    flag_reason: str
    flag_type: ModerationFlagType
    severity: ModerationSeverity
    flagged_by: str = Field(max_length=255)
    flagged_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    is_active: bool = Field(default=True)
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    flag_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    resolved_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    resolved_by: Optional[str] = Field(default=None, max_length=255)
    resolution_notes: Optional[str] = Field(default=None)

    __table_args__ = (
        CheckConstraint(
            "client_id IS NOT NULL OR token_id IS NOT NULL OR ip_address IS NOT NULL",
            name="moderation_flags_identifier_check",
        ),
        Index("idx_moderation_flags_flagged_at", "flagged_at"),
        Index("idx_moderation_flags_active_expires", "is_active", "expires_at"),
    )

    def is_active_at(self, now: datetime) -> bool:
        if not self.is_active:
            return False
        return self.expires_at is None or now < self.expires_at

    @property
    def target(self) -> tuple:
        """(target_id, target_type) of the flagged dimension."""
        if self.client_id:
            return self.client_id, "client"
        if self.token_id:
            return self.token_id, "token"
        return self.ip_address, "ip_address"
