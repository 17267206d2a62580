"""
Moderator Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import ModeratorRole


class ModeratorPermissions(BaseModel):
    """Capability map for one user; every capability False for non-moderators"""

    user_id: str
    role: Optional[ModeratorRole] = None
    can_view_audit_logs: bool = False
    can_export_audit_logs: bool = False
    can_view_abuse_reports: bool = False
    can_flag_clients: bool = False
    can_ban_tokens: bool = False
    can_resolve_flags: bool = False
    can_configure_detection: bool = False
