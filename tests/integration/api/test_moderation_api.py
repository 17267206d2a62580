"""
Integration tests for the Moderation API
"""

import csv
import io
import pytest
from httpx import AsyncClient
from sqlmodel import select

from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt
from src.domain.entities import AuditActionType, AuditLog

BASE = f"{ApplicationConfig.API_PREFIX}/moderation"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """Test health endpoint needs no auth"""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(client: AsyncClient):
    """Test 401 without a bearer token"""
    response = await client.get(f"{BASE}/permissions")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_invalid_token_is_unauthorized(client: AsyncClient):
    """Test 401 for a token that fails verification"""
    response = await client.get(
        f"{BASE}/permissions", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_non_moderator_is_forbidden(client: AsyncClient, moderator_headers):
    """Test 403 for a valid JWT without an admin_users row"""
    token = generate_jwt("random-user")

    response = await client.get(
        f"{BASE}/permissions", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_A_MODERATOR"


@pytest.mark.asyncio
async def test_permissions_for_moderator(client: AsyncClient, moderator_headers):
    """Test the capability map of a plain moderator"""
    response = await client.get(f"{BASE}/permissions", headers=moderator_headers["moderator"])

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "moderator"
    assert data["can_flag_clients"] is True
    assert data["can_ban_tokens"] is False


@pytest.mark.asyncio
async def test_flag_then_check_then_resolve(client: AsyncClient, db_session, moderator_headers):
    """Test the full flag lifecycle over HTTP"""
    headers = moderator_headers["moderator"]

    response = await client.post(
        f"{BASE}/flag-client",
        json={
            "client_id": "client-1",
            "flag_reason": "Payload spam",
            "flag_type": "restriction",
            "severity": "high",
        },
        headers=headers,
    )
    assert response.status_code == 201
    flag_id = response.json()["flag_id"]

    response = await client.get(
        f"{BASE}/check-flagged", params={"client_id": "client-1"}, headers=headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["is_flagged"] is True
    assert [flag["flag_id"] for flag in data["active_flags"]] == [flag_id]

    response = await client.post(
        f"{BASE}/flags/{flag_id}/resolve", json={"notes": "Cleared"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "resolved"

    response = await client.post(f"{BASE}/flags/{flag_id}/resolve", json={}, headers=headers)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "FLAG_ALREADY_RESOLVED"

    response = await client.get(
        f"{BASE}/check-flagged", params={"client_id": "client-1"}, headers=headers
    )
    assert response.json() == {"is_flagged": False, "active_flags": []}

    result = await db_session.exec(select(AuditLog).order_by(AuditLog.timestamp))
    actions = [log.action_type for log in result.all()]
    assert actions == [AuditActionType.client_flagged, AuditActionType.flag_resolved]


@pytest.mark.asyncio
async def test_flag_without_identifier(client: AsyncClient, db_session, moderator_headers):
    """Test 400 MISSING_IDENTIFIER and no audit entry written"""
    response = await client.post(
        f"{BASE}/flag-client",
        json={"flag_reason": "x", "flag_type": "warning", "severity": "low"},
        headers=moderator_headers["moderator"],
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MISSING_IDENTIFIER"
    result = await db_session.exec(select(AuditLog))
    assert result.all() == []


@pytest.mark.asyncio
async def test_ban_requires_admin(client: AsyncClient, moderator_headers):
    """Test moderators cannot ban; admins can"""
    payload = {"token_id": "tok-1", "reason": "Replay attack"}

    response = await client.post(
        f"{BASE}/ban-token", json=payload, headers=moderator_headers["moderator"]
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_PERMISSIONS"

    response = await client.post(f"{BASE}/ban-token", json=payload, headers=moderator_headers["admin"])
    assert response.status_code == 201
    data = response.json()
    assert data["expires_at"] is None
    assert data["message"] == "Token tok-1 has been banned permanently"


@pytest.mark.asyncio
async def test_audit_log_roundtrip_and_export(client: AsyncClient, moderator_headers):
    """Test logging, querying and CSV export of the audit trail"""
    admin = moderator_headers["admin"]
    for i in range(3):
        response = await client.post(
            f"{BASE}/audit-logs",
            json={
                "actor_id": "svc",
                "action_type": "token_created",
                "target_id": f"tok-{i}",
                "metadata": {"note": f'batch "{i}", ok'},
            },
            headers=admin,
        )
        assert response.status_code == 201

    response = await client.get(
        f"{BASE}/audit-logs", params={"page": 0, "page_size": 2}, headers=admin
    )
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert len(data["logs"]) == 2
    assert data["logs"][0]["target_id"] == "tok-2"

    response = await client.get(
        f"{BASE}/audit-logs/export", params={"format": "csv"}, headers=admin
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["x-export-truncated"] == "false"
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0][0] == "Log ID"
    assert len(rows) == 4
    assert rows[1][3] == "tok-2"

    response = await client.get(
        f"{BASE}/audit-logs/export", params={"format": "xml"}, headers=admin
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_EXPORT_FORMAT"


@pytest.mark.asyncio
async def test_export_forbidden_for_moderator(client: AsyncClient, moderator_headers):
    """Test export needs super_admin or admin"""
    response = await client.get(
        f"{BASE}/audit-logs/export", headers=moderator_headers["moderator"]
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_abuse_config_and_reports(client: AsyncClient, moderator_headers):
    """Test default config, super_admin update, and report creation against it"""
    root = moderator_headers["super_admin"]

    response = await client.get(f"{BASE}/abuse-config", headers=root)
    assert response.status_code == 200
    assert response.json()["is_default"] is True

    response = await client.put(
        f"{BASE}/abuse-config", json={"auth_failure_threshold": 3}, headers=moderator_headers["admin"]
    )
    assert response.status_code == 403

    response = await client.put(
        f"{BASE}/abuse-config",
        json={"suspicious_score_threshold": 90},
        headers=root,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_THRESHOLDS"

    response = await client.put(
        f"{BASE}/abuse-config", json={"auth_failure_threshold": 3}, headers=root
    )
    assert response.status_code == 200
    assert response.json()["thresholds"]["auth_failure_threshold"] == 3

    response = await client.post(
        f"{BASE}/abuse-reports",
        json={"metrics": {"client_id": "client-1", "authentication_failures": 3}},
        headers=root,
    )
    assert response.status_code == 201
    report = response.json()
    assert report["severity"] == 30
    assert report["patterns"] == ["brute_force_attempt"]

    response = await client.get(
        f"{BASE}/abuse-reports",
        params={"patterns": "brute_force_attempt"},
        headers=root,
    )
    assert response.status_code == 200
    assert response.json()["total"] == 1

    response = await client.post(
        f"{BASE}/abuse-reports/{report['report_id']}/resolve",
        json={"notes": "Known load test"},
        headers=root,
    )
    assert response.status_code == 200
    assert response.json()["is_resolved"] is True


@pytest.mark.asyncio
async def test_detect_abuse_does_not_persist(client: AsyncClient, moderator_headers):
    """Test detect-abuse scores without storing a report"""
    headers = moderator_headers["moderator"]

    response = await client.post(
        f"{BASE}/detect-abuse",
        json={"metrics": {"token_reuse_count": 5, "unauthorized_attempts": 10}},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {
        "abuse_score": "suspicious",
        "severity": 60,
        "patterns": ["token_replay_attack", "unauthorized_access_attempts"],
    }

    response = await client.get(f"{BASE}/abuse-reports", headers=headers)
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, moderator_headers):
    """Test stats over HTTP and the time range validation"""
    headers = moderator_headers["admin"]
    await client.post(
        f"{BASE}/flag-client",
        json={
            "ip_address": "10.0.0.1",
            "flag_reason": "Scanner",
            "flag_type": "warning",
            "severity": "medium",
        },
        headers=headers,
    )

    response = await client.get(f"{BASE}/stats", params={"time_range": "24h"}, headers=headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["active_flags"] == 1
    assert stats["total_audit_logs"] == 1
    assert stats["top_flagged_ips"] == [
        {"ip_address": "10.0.0.1", "flag_count": 1, "latest_severity": "medium"}
    ]

    response = await client.get(f"{BASE}/stats", params={"time_range": "2w"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TIME_RANGE"
