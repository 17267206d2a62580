"""
Detect Abuse Use Case

Scores a metrics snapshot without persisting anything.
"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.abuse.dtos import DetectAbuseResponse
from src.app.use_cases.abuse.get_abuse_detection_config_use_case import load_detection_config
from src.domain.abuse_scoring import AbuseDetectionMetrics, score_metrics


class DetectAbuseUseCase:
    """Fetch the organization's thresholds and run the scoring engine."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, metrics: AbuseDetectionMetrics, organization_id: Optional[UUID] = None
    ) -> Result[DetectAbuseResponse]:
        async with self.uow:
            config, _ = await load_detection_config(self.uow, organization_id)
            result = score_metrics(metrics, config)

            return Return.ok(DetectAbuseResponse.from_result(result))
