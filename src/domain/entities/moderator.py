"""
Moderator Entity

Platform staff allowed into the moderation console.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now

from .enums import ModeratorRole


class Moderator(SQLModel, table=True):
    """
    Moderator entity - a row in admin_users.

    Business Rules:
    - user_id comes from the upstream identity provider
    - role decides the capability map (see GetModeratorPermissionsUseCase)
    """

    __tablename__ = "admin_users"

    user_id: str = Field(primary_key=True, max_length=255)
    role: ModeratorRole

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
