"""
Audit Use Cases

Append, query and export the audit trail.
"""

from .dtos import (
    AuditLogsPage,
    AuditLogView,
    ExportAuditLogsResponse,
    LogAuditEntryCommand,
    LogAuditEntryResponse,
)
from .export_audit_logs_use_case import ExportAuditLogsUseCase
from .get_audit_logs_use_case import GetAuditLogsUseCase
from .log_audit_entry_use_case import LogAuditEntryUseCase

__all__ = [
    "LogAuditEntryUseCase",
    "GetAuditLogsUseCase",
    "ExportAuditLogsUseCase",
    "LogAuditEntryCommand",
    "LogAuditEntryResponse",
    "AuditLogView",
    "AuditLogsPage",
    "ExportAuditLogsResponse",
]
