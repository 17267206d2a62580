"""
Get Moderator Permissions Use Case

Maps a moderator role to its capability set.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.moderators.dtos import ModeratorPermissions
from src.domain.entities import ModeratorRole

ALL_ROLES = {ModeratorRole.super_admin, ModeratorRole.admin, ModeratorRole.moderator}
ADMIN_ROLES = {ModeratorRole.super_admin, ModeratorRole.admin}


def permissions_for(user_id: str, role: ModeratorRole) -> ModeratorPermissions:
    return ModeratorPermissions(
        user_id=user_id,
        role=role,
        can_view_audit_logs=role in ALL_ROLES,
        can_export_audit_logs=role in ADMIN_ROLES,
        can_view_abuse_reports=role in ALL_ROLES,
        can_flag_clients=role in ALL_ROLES,
        can_ban_tokens=role in ADMIN_ROLES,
        can_resolve_flags=role in ALL_ROLES,
        can_configure_detection=role == ModeratorRole.super_admin,
    )


class GetModeratorPermissionsUseCase:
    """
    Use case for resolving a user's moderation capabilities.

    Business Rules:
    - view audit logs, view reports, flag, resolve flags: any moderator role
    - export audit logs, ban tokens: super_admin and admin
    - configure detection: super_admin only
    - Unknown users get every capability False
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[ModeratorPermissions]:
        async with self.uow:
            moderator = await self.uow.moderators.get_by_user_id(user_id)
            if moderator is None:
                return Return.ok(ModeratorPermissions(user_id=user_id))

            return Return.ok(permissions_for(user_id, ModeratorRole(moderator.role)))
