"""
Abuse Detection Use Cases

Threshold configuration, scoring and the abuse report store.
"""

from .create_abuse_report_use_case import CreateAbuseReportUseCase
from .detect_abuse_use_case import DetectAbuseUseCase
from .dtos import (
    AbuseDetectionConfigView,
    AbuseReportsPage,
    AbuseReportView,
    CreateAbuseReportResponse,
    DetectAbuseCommand,
    DetectAbuseResponse,
    ResolveAbuseReportCommand,
    UpdateAbuseDetectionConfigCommand,
)
from .get_abuse_detection_config_use_case import (
    GetAbuseDetectionConfigUseCase,
    load_detection_config,
)
from .get_abuse_reports_use_case import GetAbuseReportsUseCase
from .resolve_abuse_report_use_case import ResolveAbuseReportUseCase
from .update_abuse_detection_config_use_case import UpdateAbuseDetectionConfigUseCase

__all__ = [
    "GetAbuseDetectionConfigUseCase",
    "UpdateAbuseDetectionConfigUseCase",
    "DetectAbuseUseCase",
    "CreateAbuseReportUseCase",
    "GetAbuseReportsUseCase",
    "ResolveAbuseReportUseCase",
    "load_detection_config",
    "AbuseDetectionConfigView",
    "AbuseReportsPage",
    "AbuseReportView",
    "CreateAbuseReportResponse",
    "DetectAbuseCommand",
    "DetectAbuseResponse",
    "ResolveAbuseReportCommand",
    "UpdateAbuseDetectionConfigCommand",
]
