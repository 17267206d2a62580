"""
Moderation Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AuditActionType(str, Enum):
    """Kinds of sensitive actions recorded in the audit trail"""

    # Token operations
    token_created = "token_created"
    token_rotated = "token_rotated"
    token_revoked = "token_revoked"
    token_accessed = "token_accessed"

    # Agent configuration
    agent_created = "agent_created"
    agent_updated = "agent_updated"
    agent_deleted = "agent_deleted"
    agent_config_changed = "agent_config_changed"
    agent_personality_changed = "agent_personality_changed"

    # Conversation actions
    escalation_triggered = "escalation_triggered"
    handoff_initiated = "handoff_initiated"
    override_applied = "override_applied"
    conversation_flagged = "conversation_flagged"

    # Admin actions
    admin_login = "admin_login"
    admin_permission_granted = "admin_permission_granted"
    admin_permission_revoked = "admin_permission_revoked"
    admin_access_denied = "admin_access_denied"

    # API & webhook
    api_key_created = "api_key_created"
    api_key_rotated = "api_key_rotated"
    api_key_revoked = "api_key_revoked"
    webhook_registered = "webhook_registered"
    webhook_updated = "webhook_updated"
    webhook_deleted = "webhook_deleted"

    # Security events
    rate_limit_exceeded = "rate_limit_exceeded"
    unauthorized_access = "unauthorized_access"
    malformed_payload = "malformed_payload"
    token_replay_detected = "token_replay_detected"

    # Moderation actions
    client_flagged = "client_flagged"
    client_banned = "client_banned"
    client_unbanned = "client_unbanned"
    token_banned = "token_banned"
    flag_resolved = "flag_resolved"
    abuse_report_resolved = "abuse_report_resolved"
    abuse_config_updated = "abuse_config_updated"


class AbuseScore(str, Enum):
    """Classification produced by the scoring engine"""

    normal = "normal"
    suspicious = "suspicious"
    abusive = "abusive"


class AbusePatternType(str, Enum):
    """Class of abusive behaviour a signal points at"""

    rate_limit_bypass = "rate_limit_bypass"
    invalid_payload_spam = "invalid_payload_spam"
    unauthorized_access_attempts = "unauthorized_access_attempts"
    token_replay_attack = "token_replay_attack"
    excessive_webhook_failures = "excessive_webhook_failures"
    brute_force_attempt = "brute_force_attempt"
    suspicious_ip_behavior = "suspicious_ip_behavior"


class ModerationFlagType(str, Enum):
    """Enforcement action type"""

    warning = "warning"
    restriction = "restriction"
    suspension = "suspension"
    ban = "ban"


class ModerationSeverity(str, Enum):
    """Severity level of a moderation flag"""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]


SEVERITY_RANK = {
    ModerationSeverity.low: 1,
    ModerationSeverity.medium: 2,
    ModerationSeverity.high: 3,
    ModerationSeverity.critical: 4,
}


class ModeratorRole(str, Enum):
    """Role held by an entry in admin_users"""

    super_admin = "super_admin"
    admin = "admin"
    moderator = "moderator"
