"""
Integration tests for the audit log repository (sqlite)
"""

import pytest
from datetime import timedelta

from src.domain.base import utc_now
from src.domain.entities import AuditActionType, AuditLog
from src.domain.queries import AuditLogFilters


async def seed_logs(uow):
    now = utc_now()
    entries = [
        AuditLog(
            actor_id="mod-1",
            action_type=AuditActionType.client_flagged,
            target_id="client-a",
            ip_address="10.0.0.1",
            log_metadata={"reason": "Webhook SPAM burst"},
            timestamp=now - timedelta(minutes=5),
        ),
        AuditLog(
            actor_id="mod-2",
            action_type=AuditActionType.token_banned,
            target_id="tok-9",
            ip_address="10.0.0.2",
            log_metadata={"reason": "replay"},
            timestamp=now - timedelta(minutes=4),
        ),
        AuditLog(
            actor_id="mod-1",
            action_type=AuditActionType.admin_login,
            target_id=None,
            ip_address="10.0.0.1",
            success=False,
            error_message="bad password",
            timestamp=now - timedelta(minutes=3),
        ),
        AuditLog(
            actor_id="svc",
            action_type=AuditActionType.token_created,
            target_id="tok-100%",
            ip_address="10.0.0.3",
            timestamp=now - timedelta(minutes=2),
        ),
    ]
    for entry in entries:
        await uow.audit_logs.create(entry)
    return entries


@pytest.mark.asyncio
async def test_query_newest_first(uow):
    """Test results are ordered by timestamp descending"""
    entries = await seed_logs(uow)

    logs, total = await uow.audit_logs.query(AuditLogFilters())

    assert total == 4
    assert [log.log_id for log in logs] == [entry.log_id for entry in reversed(entries)]


@pytest.mark.asyncio
async def test_search_is_case_insensitive_across_fields(uow):
    """Test search_query matches metadata, action type and target id"""
    await seed_logs(uow)

    by_metadata, _ = await uow.audit_logs.query(AuditLogFilters(search_query="spam"))
    by_action, _ = await uow.audit_logs.query(AuditLogFilters(search_query="BANNED"))
    by_target, _ = await uow.audit_logs.query(AuditLogFilters(search_query="client-A"))

    assert [log.target_id for log in by_metadata] == ["client-a"]
    assert [log.target_id for log in by_action] == ["tok-9"]
    assert [log.target_id for log in by_target] == ["client-a"]


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(uow):
    """Test % in the search text is not a LIKE wildcard"""
    await seed_logs(uow)

    logs, total = await uow.audit_logs.query(AuditLogFilters(search_query="100%"))

    assert total == 1
    assert logs[0].target_id == "tok-100%"


@pytest.mark.asyncio
async def test_search_matches_non_ascii_metadata(uow):
    """Test metadata text like café is stored literally and searchable"""
    await seed_logs(uow)
    await uow.audit_logs.create(
        AuditLog(
            actor_id="mod-3",
            action_type=AuditActionType.client_flagged,
            target_id="client-b",
            ip_address="10.0.0.4",
            log_metadata={"reason": "spam from café bot"},
        )
    )

    logs, total = await uow.audit_logs.query(AuditLogFilters(search_query="café"))

    assert total == 1
    assert logs[0].target_id == "client-b"


@pytest.mark.asyncio
async def test_filters_combine(uow):
    """Test actor, action membership and success filters are ANDed"""
    await seed_logs(uow)

    logs, total = await uow.audit_logs.query(
        AuditLogFilters(
            actor_id="mod-1",
            action_types=[AuditActionType.client_flagged, AuditActionType.admin_login],
            success=False,
        )
    )

    assert total == 1
    assert logs[0].action_type == AuditActionType.admin_login


@pytest.mark.asyncio
async def test_time_range_filter(uow):
    """Test start/end bounds are inclusive on timestamp"""
    entries = await seed_logs(uow)

    logs, total = await uow.audit_logs.query(
        AuditLogFilters(start_date=entries[1].timestamp, end_date=entries[2].timestamp)
    )

    assert total == 2
    assert {log.log_id for log in logs} == {entries[1].log_id, entries[2].log_id}


@pytest.mark.asyncio
async def test_pages_cover_total_without_overlap(uow):
    """Test summing page sizes over all pages equals total"""
    await seed_logs(uow)

    seen = []
    page = 0
    while True:
        logs, total = await uow.audit_logs.query(AuditLogFilters(page=page, page_size=3))
        if not logs:
            break
        seen.extend(log.log_id for log in logs)
        page += 1

    assert len(seen) == total == 4
    assert len(set(seen)) == 4


@pytest.mark.asyncio
async def test_list_matching_ignores_paging(uow):
    """Test export listing honours the limit, not page/page_size"""
    await seed_logs(uow)

    logs = await uow.audit_logs.list_matching(AuditLogFilters(page=3, page_size=1), limit=10)

    assert len(logs) == 4


@pytest.mark.asyncio
async def test_count_since(uow):
    """Test the window count used by the statistics"""
    entries = await seed_logs(uow)

    assert await uow.audit_logs.count_since(entries[2].timestamp) == 2
