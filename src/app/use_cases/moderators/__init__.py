"""
Moderator Use Cases

Access checks for the moderation console.
"""

from .dtos import ModeratorPermissions
from .get_moderator_permissions_use_case import GetModeratorPermissionsUseCase
from .verify_moderator_access_use_case import VerifyModeratorAccessUseCase

__all__ = [
    "VerifyModeratorAccessUseCase",
    "GetModeratorPermissionsUseCase",
    "ModeratorPermissions",
]
