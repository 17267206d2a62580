"""
Moderation API Routes

Audit trail, abuse detection, flag/ban lifecycle and statistics for the
moderation console. Every route requires a moderator JWT; each checks its
own capability.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.moderator_auth import ensure_permission, require_moderator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.abuse import (
    AbuseDetectionConfigView,
    AbuseReportsPage,
    AbuseReportView,
    CreateAbuseReportResponse,
    CreateAbuseReportUseCase,
    DetectAbuseCommand,
    DetectAbuseResponse,
    DetectAbuseUseCase,
    GetAbuseDetectionConfigUseCase,
    GetAbuseReportsUseCase,
    ResolveAbuseReportCommand,
    ResolveAbuseReportUseCase,
    UpdateAbuseDetectionConfigCommand,
    UpdateAbuseDetectionConfigUseCase,
)
from src.app.use_cases.audit import (
    AuditLogsPage,
    ExportAuditLogsResponse,
    ExportAuditLogsUseCase,
    GetAuditLogsUseCase,
    LogAuditEntryCommand,
    LogAuditEntryResponse,
    LogAuditEntryUseCase,
)
from src.app.use_cases.moderation import (
    BanTokenCommand,
    BanTokenResponse,
    BanTokenUseCase,
    CheckFlaggedResponse,
    CheckFlaggedUseCase,
    FlagClientCommand,
    FlagClientResponse,
    FlagClientUseCase,
    GetModerationStatsUseCase,
    ModerationStats,
    ResolveFlagResponse,
    ResolveFlagUseCase,
)
from src.app.use_cases.moderators import ModeratorPermissions
from src.depends import get_unit_of_work
from src.domain.entities import AbusePatternType, AbuseScore, AuditActionType
from src.domain.queries import AbuseReportFilters, AuditLogFilters

router = APIRouter(prefix="/moderation", tags=["Moderation"])


class ResolveFlagRequest(BaseModel):
    """POST /moderation/flags/{flag_id}/resolve request payload"""

    notes: Optional[str] = None


def client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")


def page_params(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    page_size: int = Query(
        ApplicationConfig.DEFAULT_PAGE_SIZE, ge=1, le=ApplicationConfig.MAX_PAGE_SIZE
    ),
) -> dict:
    return {"page": page, "page_size": page_size}


def audit_log_filters(
    actor_id: Optional[str] = Query(None),
    action_types: Optional[List[AuditActionType]] = Query(None),
    target_id: Optional[str] = Query(None),
    organization_id: Optional[UUID] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    ip_address: Optional[str] = Query(None),
    success: Optional[bool] = Query(None),
    search_query: Optional[str] = Query(None, description="Case-insensitive substring"),
    paging: dict = Depends(page_params),
) -> AuditLogFilters:
    return AuditLogFilters(
        actor_id=actor_id,
        action_types=action_types,
        target_id=target_id,
        organization_id=organization_id,
        start_date=start_date,
        end_date=end_date,
        ip_address=ip_address,
        success=success,
        search_query=search_query,
        **paging,
    )


# ============================================================================
# Audit trail
# ============================================================================


@router.post(
    "/audit-logs",
    status_code=status.HTTP_201_CREATED,
    response_model=LogAuditEntryResponse,
)
async def log_audit_entry(
    command: LogAuditEntryCommand,
    request: Request,
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Append an audit entry.

    log_id and timestamp are assigned by the service. IP address and user
    agent default to the calling request's.
    """
    if command.ip_address is None:
        command.ip_address = client_ip(request)
    if command.user_agent is None:
        command.user_agent = user_agent(request)

    use_case = LogAuditEntryUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/audit-logs",
    status_code=status.HTTP_200_OK,
    response_model=AuditLogsPage,
)
async def get_audit_logs(
    filters: AuditLogFilters = Depends(audit_log_filters),
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Query the audit trail, newest first.

    Raises:
        - 400 Bad Request: INVALID_DATE_RANGE
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    ensure_permission(permissions, "can_view_audit_logs")

    use_case = GetAuditLogsUseCase(uow)
    result = await use_case.execute(filters)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_DATE_RANGE":
            raise ClientError(error)
        raise ServerError(error)

    return result.value


@router.get(
    "/audit-logs/export",
    status_code=status.HTTP_200_OK,
    response_model=ExportAuditLogsResponse,
)
async def export_audit_logs(
    export_format: str = Query("json", alias="format", description="json or csv"),
    filters: AuditLogFilters = Depends(audit_log_filters),
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Export the filtered audit trail (pagination ignored).

    csv is returned as a text/csv document; the X-Export-Truncated header
    reports whether the row cap was hit.

    Raises:
        - 400 Bad Request: INVALID_EXPORT_FORMAT
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    ensure_permission(permissions, "can_export_audit_logs")

    use_case = ExportAuditLogsUseCase(uow, max_rows=ApplicationConfig.AUDIT_EXPORT_MAX_ROWS)
    result = await use_case.execute(export_format, filters)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_EXPORT_FORMAT":
            raise ClientError(error)
        raise ServerError(error)

    export = result.value
    if export.format == "csv":
        return PlainTextResponse(
            export.content,
            media_type="text/csv",
            headers={
                "Content-Disposition": "attachment; filename=audit_logs.csv",
                "X-Export-Truncated": "true" if export.truncated else "false",
            },
        )

    return export


# ============================================================================
# Abuse detection
# ============================================================================


@router.get(
    "/abuse-config",
    status_code=status.HTTP_200_OK,
    response_model=AbuseDetectionConfigView,
)
async def get_abuse_config(
    organization_id: Optional[UUID] = Query(None),
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Thresholds in effect for an organization (defaults when none stored)."""
    ensure_permission(permissions, "can_view_abuse_reports")

    use_case = GetAbuseDetectionConfigUseCase(uow)
    result = await use_case.execute(organization_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.put(
    "/abuse-config",
    status_code=status.HTTP_200_OK,
    response_model=AbuseDetectionConfigView,
)
async def update_abuse_config(
    command: UpdateAbuseDetectionConfigCommand,
    request: Request,
    organization_id: Optional[UUID] = Query(None),
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create or update thresholds for an organization (super_admin only).

    Raises:
        - 400 Bad Request: INVALID_THRESHOLDS
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    ensure_permission(permissions, "can_configure_detection")

    use_case = UpdateAbuseDetectionConfigUseCase(uow)
    result = await use_case.execute(
        command,
        updated_by=permissions.user_id,
        organization_id=organization_id,
        ip_address=client_ip(request),
        user_agent=user_agent(request),
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_THRESHOLDS":
            raise ClientError(error)
        raise ServerError(error)

    return result.value


@router.post(
    "/detect-abuse",
    status_code=status.HTTP_200_OK,
    response_model=DetectAbuseResponse,
)
async def detect_abuse(
    command: DetectAbuseCommand,
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Score a metrics snapshot without storing a report."""
    ensure_permission(permissions, "can_view_abuse_reports")

    use_case = DetectAbuseUseCase(uow)
    result = await use_case.execute(command.metrics, command.organization_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/abuse-reports",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateAbuseReportResponse,
)
async def create_abuse_report(
    command: DetectAbuseCommand,
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Score a metrics snapshot and store the resulting report."""
    ensure_permission(permissions, "can_view_abuse_reports")

    use_case = CreateAbuseReportUseCase(uow)
    result = await use_case.execute(command.metrics, command.organization_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/abuse-reports",
    status_code=status.HTTP_200_OK,
    response_model=AbuseReportsPage,
)
async def get_abuse_reports(
    abuse_score: Optional[AbuseScore] = Query(None),
    patterns: Optional[List[AbusePatternType]] = Query(None),
    client_id: Optional[str] = Query(None),
    ip_address: Optional[str] = Query(None),
    token_id: Optional[str] = Query(None),
    organization_id: Optional[UUID] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    min_severity: Optional[int] = Query(None, ge=0, le=100),
    max_severity: Optional[int] = Query(None, ge=0, le=100),
    is_flagged: Optional[bool] = Query(None),
    is_resolved: Optional[bool] = Query(None),
    paging: dict = Depends(page_params),
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Query abuse reports, newest first.

    Raises:
        - 400 Bad Request: INVALID_SEVERITY_RANGE
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    ensure_permission(permissions, "can_view_abuse_reports")

    filters = AbuseReportFilters(
        abuse_score=abuse_score,
        patterns=patterns,
        client_id=client_id,
        ip_address=ip_address,
        token_id=token_id,
        organization_id=organization_id,
        start_date=start_date,
        end_date=end_date,
        min_severity=min_severity,
        max_severity=max_severity,
        is_flagged=is_flagged,
        is_resolved=is_resolved,
        **paging,
    )

    use_case = GetAbuseReportsUseCase(uow)
    result = await use_case.execute(filters)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_SEVERITY_RANGE":
            raise ClientError(error)
        raise ServerError(error)

    return result.value


@router.post(
    "/abuse-reports/{report_id}/resolve",
    status_code=status.HTTP_200_OK,
    response_model=AbuseReportView,
)
async def resolve_abuse_report(
    report_id: UUID,
    command: ResolveAbuseReportCommand,
    request: Request,
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Mark an abuse report as reviewed.

    Raises:
        - 404 Not Found: REPORT_NOT_FOUND
    """
    ensure_permission(permissions, "can_resolve_flags")

    use_case = ResolveAbuseReportUseCase(uow)
    result = await use_case.execute(
        report_id,
        command,
        resolved_by=permissions.user_id,
        ip_address=client_ip(request),
        user_agent=user_agent(request),
    )

    if result.is_err():
        error = result.error
        if error.code == "REPORT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


# ============================================================================
# Flags and bans
# ============================================================================


@router.post(
    "/flag-client",
    status_code=status.HTTP_201_CREATED,
    response_model=FlagClientResponse,
)
async def flag_client(
    command: FlagClientCommand,
    request: Request,
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Flag a client, token or IP address.

    Raises:
        - 400 Bad Request: MISSING_IDENTIFIER, MISSING_REASON
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    ensure_permission(permissions, "can_flag_clients")

    use_case = FlagClientUseCase(uow)
    result = await use_case.execute(
        command,
        flagged_by=permissions.user_id,
        ip_address=client_ip(request),
        user_agent=user_agent(request),
    )

    if result.is_err():
        error = result.error
        if error.code in ("MISSING_IDENTIFIER", "MISSING_REASON"):
            raise ClientError(error)
        raise ServerError(error)

    return result.value


@router.post(
    "/ban-token",
    status_code=status.HTTP_201_CREATED,
    response_model=BanTokenResponse,
)
async def ban_token(
    command: BanTokenCommand,
    request: Request,
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Ban a token, permanently unless ban_duration_hours is given.

    Raises:
        - 400 Bad Request: MISSING_FIELDS
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (super_admin/admin only)
    """
    ensure_permission(permissions, "can_ban_tokens")

    use_case = BanTokenUseCase(uow)
    result = await use_case.execute(
        command,
        banned_by=permissions.user_id,
        ip_address=client_ip(request),
        user_agent=user_agent(request),
    )

    if result.is_err():
        error = result.error
        if error.code == "MISSING_FIELDS":
            raise ClientError(error)
        raise ServerError(error)

    return result.value


@router.get(
    "/check-flagged",
    status_code=status.HTTP_200_OK,
    response_model=CheckFlaggedResponse,
)
async def check_flagged(
    client_id: Optional[str] = Query(None),
    token_id: Optional[str] = Query(None),
    ip_address: Optional[str] = Query(None),
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Whether any active flag matches, plus the active flags for the first given identifier."""
    ensure_permission(permissions, "can_view_abuse_reports")

    use_case = CheckFlaggedUseCase(uow)
    result = await use_case.execute(
        client_id=client_id, token_id=token_id, ip_address=ip_address
    )

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/flags/{flag_id}/resolve",
    status_code=status.HTTP_200_OK,
    response_model=ResolveFlagResponse,
)
async def resolve_flag(
    flag_id: UUID,
    payload: ResolveFlagRequest,
    request: Request,
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Deactivate a flag before it expires.

    Raises:
        - 404 Not Found: FLAG_NOT_FOUND
        - 409 Conflict: FLAG_ALREADY_RESOLVED
    """
    ensure_permission(permissions, "can_resolve_flags")

    use_case = ResolveFlagUseCase(uow)
    result = await use_case.execute(
        flag_id,
        resolved_by=permissions.user_id,
        notes=payload.notes,
        ip_address=client_ip(request),
        user_agent=user_agent(request),
    )

    if result.is_err():
        error = result.error
        if error.code == "FLAG_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code == "FLAG_ALREADY_RESOLVED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


# ============================================================================
# Statistics and permissions
# ============================================================================


@router.get(
    "/stats",
    status_code=status.HTTP_200_OK,
    response_model=ModerationStats,
)
async def get_stats(
    time_range: str = Query("7d", description="24h, 7d, 30d or 90d"),
    permissions: ModeratorPermissions = Depends(require_moderator),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Moderation dashboard statistics.

    Raises:
        - 400 Bad Request: INVALID_TIME_RANGE
    """
    ensure_permission(permissions, "can_view_audit_logs")

    use_case = GetModerationStatsUseCase(uow)
    result = await use_case.execute(time_range)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TIME_RANGE":
            raise ClientError(error)
        raise ServerError(error)

    return result.value


@router.get(
    "/permissions",
    status_code=status.HTTP_200_OK,
    response_model=ModeratorPermissions,
)
async def get_permissions(
    permissions: ModeratorPermissions = Depends(require_moderator),
):
    """Capability map of the calling moderator."""
    return permissions