"""
Use Cases

Organized into domain folders:
- abuse/: Detection config, scoring and abuse reports
- audit/: Audit trail
- moderation/: Flags, bans and statistics
- moderators/: Moderator access checks

Import from subdirectories for better organization.
"""

from .abuse import (
    CreateAbuseReportUseCase,
    DetectAbuseUseCase,
    GetAbuseDetectionConfigUseCase,
    GetAbuseReportsUseCase,
    ResolveAbuseReportUseCase,
    UpdateAbuseDetectionConfigUseCase,
)
from .audit import (
    ExportAuditLogsUseCase,
    GetAuditLogsUseCase,
    LogAuditEntryUseCase,
)
from .moderation import (
    BanTokenUseCase,
    CheckFlaggedUseCase,
    FlagClientUseCase,
    GetModerationStatsUseCase,
    ResolveFlagUseCase,
)
from .moderators import (
    GetModeratorPermissionsUseCase,
    VerifyModeratorAccessUseCase,
)

__all__ = [
    # Abuse
    "GetAbuseDetectionConfigUseCase",
    "UpdateAbuseDetectionConfigUseCase",
    "DetectAbuseUseCase",
    "CreateAbuseReportUseCase",
    "GetAbuseReportsUseCase",
    "ResolveAbuseReportUseCase",
    # Audit
    "LogAuditEntryUseCase",
    "GetAuditLogsUseCase",
    "ExportAuditLogsUseCase",
    # Moderation
    "FlagClientUseCase",
    "BanTokenUseCase",
    "CheckFlaggedUseCase",
    "ResolveFlagUseCase",
    "GetModerationStatsUseCase",
    # Moderators
    "VerifyModeratorAccessUseCase",
    "GetModeratorPermissionsUseCase",
]
