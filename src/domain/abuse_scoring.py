"""
Abuse Scoring Engine

Maps a metrics snapshot plus detection thresholds to a classification,
a 0-100 severity and the set of abuse patterns that fired. Pure: no I/O,
no shared state.
"""

from typing import List, Optional, Set

from pydantic import BaseModel, Field

from src.domain.entities import AbuseDetectionConfig, AbusePatternType, AbuseScore

MAX_SEVERITY = 100

# Severity weight added by each signal
RATE_LIMIT_EXCEEDED_WEIGHT = 15
RATE_LIMIT_BYPASS_WEIGHT = 20
MALFORMED_PAYLOAD_WEIGHT = 10
UNAUTHORIZED_ATTEMPTS_WEIGHT = 25
AUTH_FAILURE_WEIGHT = 30
TOKEN_REUSE_WEIGHT = 35
SUSPICIOUS_TOKEN_PATTERN_WEIGHT = 20
WEBHOOK_FAILURE_WEIGHT = 10
REQUESTS_PER_MINUTE_WEIGHT = 15
ERROR_RATE_WEIGHT = 10


class AbuseDetectionMetrics(BaseModel):
    """Snapshot gathered upstream for one client/IP/token over a time window."""

    client_id: Optional[str] = None
    ip_address: Optional[str] = None
    token_id: Optional[str] = None
    endpoint: Optional[str] = None
    time_window_minutes: int = Field(default=60, ge=0)

    # Rate limiting
    rate_limit_exceeded_count: int = Field(default=0, ge=0)
    rate_limit_bypass_attempts: int = Field(default=0, ge=0)

    # Payload quality
    malformed_payload_count: int = Field(default=0, ge=0)
    invalid_payload_count: int = Field(default=0, ge=0)
    total_requests: int = Field(default=0, ge=0)

    # Authorization
    unauthorized_attempts: int = Field(default=0, ge=0)
    authentication_failures: int = Field(default=0, ge=0)

    # Tokens
    token_reuse_count: int = Field(default=0, ge=0)
    suspicious_token_patterns: int = Field(default=0, ge=0)

    # Webhooks
    webhook_failure_count: int = Field(default=0, ge=0)
    webhook_timeout_count: int = Field(default=0, ge=0)
    total_webhook_attempts: int = Field(default=0, ge=0)

    # Context
    unique_endpoints_accessed: int = Field(default=0, ge=0)
    requests_per_minute: float = Field(default=0.0, ge=0)
    error_rate: float = Field(default=0.0, ge=0)


class AbuseDetectionResult(BaseModel):
    score: AbuseScore
    severity: int
    patterns: Set[AbusePatternType]

    def sorted_patterns(self) -> List[str]:
        return sorted(pattern.value for pattern in self.patterns)


def percentage(part: float, total: float) -> float:
    """part/total as a percentage; 0 when total is 0."""
    if total <= 0:
        return 0.0
    return part / total * 100


def classify(severity: int, config: AbuseDetectionConfig) -> AbuseScore:
    if severity >= config.abusive_score_threshold:
        return AbuseScore.abusive
    if severity >= config.suspicious_score_threshold:
        return AbuseScore.suspicious
    return AbuseScore.normal


def score_metrics(
    metrics: AbuseDetectionMetrics, config: AbuseDetectionConfig
) -> AbuseDetectionResult:
    """
    Run every signal check independently and aggregate.

    Each triggered signal adds its weight and its pattern tag; the weight
    sum is clamped to [0, 100] and classified against the config cutoffs.
    """
    malformed_percentage = percentage(
        metrics.malformed_payload_count, metrics.total_requests
    )
    webhook_failure_percentage = percentage(
        metrics.webhook_failure_count, metrics.total_webhook_attempts
    )

    signals = (
        (
            metrics.rate_limit_exceeded_count >= config.rate_limit_exceeded_threshold,
            RATE_LIMIT_EXCEEDED_WEIGHT,
            AbusePatternType.rate_limit_bypass,
        ),
        (
            metrics.rate_limit_bypass_attempts >= config.rate_limit_bypass_threshold,
            RATE_LIMIT_BYPASS_WEIGHT,
            AbusePatternType.rate_limit_bypass,
        ),
        (
            metrics.malformed_payload_count >= config.malformed_payload_threshold
            or malformed_percentage >= config.malformed_payload_percentage,
            MALFORMED_PAYLOAD_WEIGHT,
            AbusePatternType.invalid_payload_spam,
        ),
        (
            metrics.unauthorized_attempts >= config.unauthorized_attempts_threshold,
            UNAUTHORIZED_ATTEMPTS_WEIGHT,
            AbusePatternType.unauthorized_access_attempts,
        ),
        (
            metrics.authentication_failures >= config.auth_failure_threshold,
            AUTH_FAILURE_WEIGHT,
            AbusePatternType.brute_force_attempt,
        ),
        (
            metrics.token_reuse_count >= config.token_reuse_threshold,
            TOKEN_REUSE_WEIGHT,
            AbusePatternType.token_replay_attack,
        ),
        (
            metrics.suspicious_token_patterns >= config.suspicious_token_pattern_threshold,
            SUSPICIOUS_TOKEN_PATTERN_WEIGHT,
            AbusePatternType.token_replay_attack,
        ),
        (
            metrics.webhook_failure_count >= config.webhook_failure_threshold
            or webhook_failure_percentage >= config.webhook_failure_percentage,
            WEBHOOK_FAILURE_WEIGHT,
            AbusePatternType.excessive_webhook_failures,
        ),
        (
            metrics.requests_per_minute >= config.requests_per_minute_threshold,
            REQUESTS_PER_MINUTE_WEIGHT,
            AbusePatternType.suspicious_ip_behavior,
        ),
        (
            metrics.error_rate >= config.error_rate_threshold,
            ERROR_RATE_WEIGHT,
            AbusePatternType.suspicious_ip_behavior,
        ),
    )

    total = 0
    patterns: Set[AbusePatternType] = set()
    for triggered, weight, pattern in signals:
        if triggered:
            total += weight
            patterns.add(pattern)

    severity = max(0, min(total, MAX_SEVERITY))
    return AbuseDetectionResult(
        score=classify(severity, config), severity=severity, patterns=patterns
    )
