from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import SYSTEM_IP_ADDRESS, SYSTEM_ORGANIZATION_ID
from src.domain.entities import AuditActionType, AuditLog


async def record_audit_entry(
    uow: UnitOfWork,
    actor_id: str,
    action_type: AuditActionType,
    target_id: Optional[str] = None,
    target_type: Optional[str] = None,
    organization_id: Optional[UUID] = None,
    metadata: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    success: bool = True,
    error_message: Optional[str] = None,
) -> AuditLog:
    """
    Append an audit entry inside the caller's unit of work (no commit).

    log_id and timestamp are always assigned here. Entries without a request
    origin are recorded as system actions (nil organization, 0.0.0.0).
    """
    audit_log = AuditLog(
        actor_id=actor_id,
        action_type=action_type,
        target_id=target_id,
        target_type=target_type,
        organization_id=organization_id or SYSTEM_ORGANIZATION_ID,
        log_metadata=metadata or {},
        ip_address=ip_address or SYSTEM_IP_ADDRESS,
        user_agent=user_agent,
        success=success,
        error_message=error_message,
    )
    return await uow.audit_logs.create(audit_log)
