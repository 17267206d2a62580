"""
Audit Use Case DTOs
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import AuditActionType, AuditLog


class LogAuditEntryCommand(BaseModel):
    """Audit entry as supplied by the caller; id and timestamp are server-assigned"""

    actor_id: str
    action_type: AuditActionType
    target_id: Optional[str] = None
    target_type: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    organization_id: Optional[UUID] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    success: bool = True
    error_message: Optional[str] = None


class LogAuditEntryResponse(BaseModel):
    log_id: str


class AuditLogView(BaseModel):
    log_id: str
    actor_id: str
    action_type: AuditActionType
    target_id: Optional[str] = None
    target_type: Optional[str] = None
    ip_address: str
    user_agent: Optional[str] = None
    organization_id: str
    metadata: Dict[str, Any]
    success: bool
    error_message: Optional[str] = None
    timestamp: str

    @classmethod
    def from_entity(cls, log: AuditLog) -> "AuditLogView":
        return cls(
            log_id=str(log.log_id),
            actor_id=log.actor_id,
            action_type=log.action_type,
            target_id=log.target_id,
            target_type=log.target_type,
            ip_address=log.ip_address,
            user_agent=log.user_agent,
            organization_id=str(log.organization_id),
            metadata=log.log_metadata or {},
            success=log.success,
            error_message=log.error_message,
            timestamp=log.timestamp.isoformat() + "Z",
        )


class AuditLogsPage(BaseModel):
    logs: List[AuditLogView]
    total: int
    page: int
    page_size: int


class ExportAuditLogsResponse(BaseModel):
    """json: content is a list of records; csv: content is one document"""

    format: str
    content: Any
    row_count: int
    truncated: bool
