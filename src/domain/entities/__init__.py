"""
Moderation Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuditActionType,
    AbuseScore,
    AbusePatternType,
    ModerationFlagType,
    ModerationSeverity,
    ModeratorRole,
    SEVERITY_RANK,
)

# Export all entities
from .audit_log import AuditLog
from .abuse_detection_config import AbuseDetectionConfig, DEFAULT_THRESHOLDS
from .abuse_report import AbuseReport
from .moderation_flag import ModerationFlag
from .moderator import Moderator

__all__ = [
    # Enums
    "AuditActionType",
    "AbuseScore",
    "AbusePatternType",
    "ModerationFlagType",
    "ModerationSeverity",
    "ModeratorRole",
    "SEVERITY_RANK",
    # Entities
    "AuditLog",
    "AbuseDetectionConfig",
    "DEFAULT_THRESHOLDS",
    "AbuseReport",
    "ModerationFlag",
    "Moderator",
]
