"""
Export Audit Logs Use Case

Serializes the filtered audit trail as JSON records or a CSV document.
"""

import csv
import io
import json
import logging
from typing import List

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit.dtos import AuditLogView, ExportAuditLogsResponse
from src.domain.entities import AuditLog
from src.domain.queries import AuditLogFilters

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv")

CSV_HEADER = [
    "Log ID",
    "Actor ID",
    "Action Type",
    "Target ID",
    "Target Type",
    "Timestamp",
    "IP Address",
    "User Agent",
    "Organization ID",
    "Success",
    "Error Message",
    "Metadata",
]


def to_csv(views: List[AuditLogView]) -> str:
    """Every value quoted, embedded quotes doubled, metadata as compact JSON."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for view in views:
        writer.writerow(
            [
                view.log_id,
                view.actor_id,
                view.action_type.value,
                view.target_id or "",
                view.target_type or "",
                view.timestamp,
                view.ip_address,
                view.user_agent or "",
                view.organization_id,
                "true" if view.success else "false",
                view.error_message or "",
                json.dumps(view.metadata, separators=(",", ":"), sort_keys=True),
            ]
        )
    return buffer.getvalue()


class ExportAuditLogsUseCase:
    """
    Use case for exporting audit logs.

    Business Rules:
    - format is json or csv
    - The whole filtered set is exported (page/page_size are ignored)
      up to max_rows; beyond that the response is marked truncated
    """

    def __init__(self, uow: UnitOfWork, max_rows: int = 10000):
        self.uow = uow
        self.max_rows = max_rows

    async def execute(
        self, export_format: str, filters: AuditLogFilters
    ) -> Result[ExportAuditLogsResponse]:
        export_format = (export_format or "").lower()
        if export_format not in EXPORT_FORMATS:
            return Return.err(
                Error("INVALID_EXPORT_FORMAT", "format must be one of json, csv")
            )

        async with self.uow:
            logs: List[AuditLog] = await self.uow.audit_logs.list_matching(
                filters, limit=self.max_rows + 1
            )

            truncated = len(logs) > self.max_rows
            if truncated:
                logs = logs[: self.max_rows]
                logger.warning("Audit export truncated at %s rows", self.max_rows)

            views = [AuditLogView.from_entity(log) for log in logs]

        if export_format == "csv":
            content = to_csv(views)
        else:
            content = [view.model_dump(mode="json") for view in views]

        return Return.ok(
            ExportAuditLogsResponse(
                format=export_format,
                content=content,
                row_count=len(views),
                truncated=truncated,
            )
        )
