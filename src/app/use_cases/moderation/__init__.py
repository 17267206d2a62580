"""
Moderation Use Cases

Flag and ban lifecycle plus moderation statistics.
"""

from .ban_token_use_case import BanTokenUseCase
from .check_flagged_use_case import CheckFlaggedUseCase
from .dtos import (
    BanTokenCommand,
    BanTokenResponse,
    CheckFlaggedResponse,
    FlagClientCommand,
    FlagClientResponse,
    ModerationFlagView,
    ModerationStats,
    ResolveFlagResponse,
)
from .flag_client_use_case import FlagClientUseCase
from .get_moderation_stats_use_case import TIME_RANGES, GetModerationStatsUseCase
from .resolve_flag_use_case import ResolveFlagUseCase

__all__ = [
    "FlagClientUseCase",
    "BanTokenUseCase",
    "CheckFlaggedUseCase",
    "ResolveFlagUseCase",
    "GetModerationStatsUseCase",
    "TIME_RANGES",
    "FlagClientCommand",
    "FlagClientResponse",
    "BanTokenCommand",
    "BanTokenResponse",
    "CheckFlaggedResponse",
    "ModerationFlagView",
    "ModerationStats",
    "ResolveFlagResponse",
]
