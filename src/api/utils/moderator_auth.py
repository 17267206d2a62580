"""
Moderator Authorization

Resolves the caller's moderation capabilities from the bearer JWT.
"""

from fastapi import Depends, status

from libs.result import Error
from src.api.error import ClientError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.moderators import GetModeratorPermissionsUseCase, ModeratorPermissions
from src.depends import get_current_user, get_unit_of_work


async def require_moderator(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ModeratorPermissions:
    """
    Dependency that admits moderators only.

    Raises:
        ClientError: 401 via get_current_user, 403 if the caller is not a moderator

    Returns:
        The caller's capability map
    """
    use_case = GetModeratorPermissionsUseCase(uow)
    result = await use_case.execute(current_user["user_id"])
    permissions = result.value

    if permissions.role is None:
        raise ClientError(
            Error("NOT_A_MODERATOR", "Moderator access required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    return permissions


def ensure_permission(permissions: ModeratorPermissions, capability: str) -> None:
    """Raise 403 INSUFFICIENT_PERMISSIONS unless the capability is granted."""
    if not getattr(permissions, capability):
        raise ClientError(
            Error("INSUFFICIENT_PERMISSIONS", f"Missing permission: {capability}"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
