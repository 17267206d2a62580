"""
Create Abuse Report Use Case

Scores a metrics snapshot and persists the outcome.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.abuse.dtos import CreateAbuseReportResponse
from src.app.use_cases.abuse.get_abuse_detection_config_use_case import load_detection_config
from src.domain.abuse_scoring import AbuseDetectionMetrics, score_metrics
from src.domain.entities import AbuseReport, AbuseScore

logger = logging.getLogger(__name__)


class CreateAbuseReportUseCase:
    """
    Use case for recording an abuse detection run.

    Business Rules:
    - Report carries the metrics' client/IP/token/endpoint, the score,
      severity, pattern set (sorted) and the raw metrics snapshot
    - detected_at is assigned on insert
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, metrics: AbuseDetectionMetrics, organization_id: Optional[UUID] = None
    ) -> Result[CreateAbuseReportResponse]:
        async with self.uow:
            config, _ = await load_detection_config(self.uow, organization_id)
            result = score_metrics(metrics, config)

            report = AbuseReport(
                client_id=metrics.client_id,
                ip_address=metrics.ip_address,
                token_id=metrics.token_id,
                endpoint=metrics.endpoint,
                abuse_score=result.score,
                patterns=result.sorted_patterns(),
                metrics=metrics.model_dump(mode="json"),
                organization_id=organization_id,
                severity=result.severity,
            )
            report = await self.uow.abuse_reports.create(report)
            await self.uow.commit()

            if result.score != AbuseScore.normal:
                logger.info(
                    "Abuse report %s: %s (severity %s) for client=%s ip=%s token=%s",
                    report.report_id,
                    result.score.value,
                    result.severity,
                    metrics.client_id,
                    metrics.ip_address,
                    metrics.token_id,
                )

            return Return.ok(
                CreateAbuseReportResponse(
                    report_id=str(report.report_id),
                    abuse_score=result.score,
                    severity=result.severity,
                    patterns=result.sorted_patterns(),
                )
            )
