"""Tests for API routes using httpx AsyncClient."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from lexicompare.api.dependencies import Repos
from lexicompare.config import Settings
from lexicompare.main import app
from tests.conftest import setup_test_app


@pytest.fixture
async def repos(tmp_path: Path) -> Repos:
    repos = setup_test_app(tmp_path)
    repos.source.add(  # type: ignore[attr-defined]
        "deposition", 1, "The contract was signed on March 1.", matter_id=10
    )
    repos.source.add(  # type: ignore[attr-defined]
        "extraction", 2, "The contract was not signed on March 1.", matter_id=10
    )
    return repos


@pytest.fixture
async def client(repos: Repos):
    """Create a test client with fake repos (no database)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


class TestHealthRoutes:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert "version" in data

    async def test_health_detailed(self, client: AsyncClient) -> None:
        resp = await client.get("/api/health/detailed")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert set(data["components"]) == {"database", "audit_log"}


class TestSourceRoutes:
    async def test_upsert_and_get(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/sources",
            json={
                "source_type": "citation",
                "source_id": 7,
                "text": "I never saw it.",
                "page_number": 3,
                "line_start": 11,
            },
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["citation"] == "Page 3, Line 11"

        resp = await client.get("/api/sources/citation/7")
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["text"] == "I never saw it."

    async def test_unknown_source_type_rejected(
        self, client: AsyncClient
    ) -> None:
        resp = await client.post(
            "/api/sources",
            json={"source_type": "email", "source_id": 1, "text": "x"},
        )
        assert resp.status_code == 422

    async def test_get_missing_source(self, client: AsyncClient) -> None:
        resp = await client.get("/api/sources/extraction/404")
        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert "not found" in body["error"].lower()


class TestComparisonRoutes:
    async def test_compare_text(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/compare/text",
            json={"text_a": "The cat sat", "text_b": "The dog sat"},
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["total_differences"] == 1
        assert data["differences"][0]["before"] == "cat"
        assert data["differences"][0]["after"] == "dog"
        assert data["conflicts"] == []

    async def test_create_and_fetch_comparison(
        self, client: AsyncClient
    ) -> None:
        resp = await client.post(
            "/api/comparisons",
            json={
                "matter_id": 10,
                "source_a_type": "deposition",
                "source_a_id": 1,
                "source_b_type": "extraction",
                "source_b_id": 2,
                "comparison_kind": "deposition_conflict",
                "detect_conflicts": True,
                "created_by": 3,
            },
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["similarity_score"] == 90
        assert data["critical_conflicts"] == 1
        comparison_id = data["id"]

        resp = await client.get(f"/api/comparisons/{comparison_id}")
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["created_by"] == 3

        resp = await client.get("/api/matters/10/comparisons")
        body = resp.json()
        assert body["metadata"]["count"] == 1

    async def test_unsaved_comparison_has_no_id(
        self, client: AsyncClient
    ) -> None:
        resp = await client.post(
            "/api/comparisons",
            json={
                "matter_id": 10,
                "source_a_type": "deposition",
                "source_a_id": 1,
                "source_b_type": "extraction",
                "source_b_id": 2,
                "save": False,
            },
        )
        assert "id" not in resp.json()["data"]

    async def test_missing_source_is_404(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/comparisons",
            json={
                "matter_id": 10,
                "source_a_type": "deposition",
                "source_a_id": 1,
                "source_b_type": "extraction",
                "source_b_id": 99,
            },
        )
        assert resp.status_code == 404
        assert resp.json()["success"] is False

    async def test_get_missing_comparison(self, client: AsyncClient) -> None:
        resp = await client.get("/api/comparisons/nonexistent")
        assert resp.status_code == 404

    async def test_resolve_conflict_twice(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/comparisons",
            json={
                "matter_id": 10,
                "source_a_type": "deposition",
                "source_a_id": 1,
                "source_b_type": "extraction",
                "source_b_id": 2,
                "detect_conflicts": True,
            },
        )
        comparison_id = resp.json()["data"]["id"]
        url = f"/api/comparisons/{comparison_id}/conflicts/0/resolve"

        resp = await client.post(url, json={"notes": "Errata", "actor_id": 4})
        assert resp.status_code == 200
        conflict = resp.json()["data"]["conflicts"][0]
        assert conflict["resolved"] is True
        assert conflict["resolved_by"] == 4

        resp = await client.post(url, json={"notes": "Again", "actor_id": 5})
        assert resp.status_code == 409
        assert resp.json()["success"] is False

        resp = await client.post(
            f"/api/comparisons/{comparison_id}/conflicts/5/resolve",
            json={"notes": "x", "actor_id": 5},
        )
        assert resp.status_code == 404


class TestContractRoutes:
    async def _create_versions(self, client: AsyncClient) -> tuple[str, str]:
        clauses = [
            {
                "id": "c1",
                "section_name": "Indemnity",
                "category": "indemnification",
                "text": "Supplier shall indemnify Buyer.",
            },
            {
                "id": "c2",
                "section_name": "Notices",
                "text": "Notices in writing.",
            },
        ]
        resp = await client.post(
            "/api/contracts/msa/versions",
            json={"clauses": clauses, "created_by": 1},
        )
        assert resp.status_code == 200
        v1 = resp.json()["data"]
        assert v1["version_number"] == 1
        assert v1["total_clauses"] == 2

        resp = await client.post(
            "/api/contracts/msa/versions",
            json={
                "clauses": clauses[1:],
                "created_by": 1,
                "version_label": "Executed",
            },
        )
        v2 = resp.json()["data"]
        return v1["id"], v2["id"]

    async def test_versions_listed_newest_first(
        self, client: AsyncClient
    ) -> None:
        await self._create_versions(client)
        resp = await client.get("/api/contracts/msa/versions")
        body = resp.json()
        assert [v["version_number"] for v in body["data"]] == [2, 1]
        assert body["data"][0]["is_current"] is True

    async def test_compare_and_review(self, client: AsyncClient) -> None:
        v1_id, v2_id = await self._create_versions(client)
        resp = await client.post(
            "/api/contracts/msa/comparisons",
            json={
                "version_a_id": v1_id,
                "version_b_id": v2_id,
                "created_by": 2,
            },
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["deletions"] == 1
        assert data["changes"][0]["risk_level"] == "critical"
        assert data["changes"][0]["status"] == "pending"
        comparison_id = data["id"]

        resp = await client.get(f"/api/contract-comparisons/{comparison_id}")
        assert resp.json()["data"]["total_changes"] == 1

        resp = await client.get("/api/contracts/msa/comparisons")
        assert resp.json()["metadata"]["count"] == 1

        review_url = (
            f"/api/contract-comparisons/{comparison_id}/changes/0/review"
        )
        resp = await client.post(
            review_url, json={"status": "accepted", "reviewer_id": 8}
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "accepted"

        resp = await client.post(
            review_url, json={"status": "rejected", "reviewer_id": 8}
        )
        assert resp.status_code == 409

    async def test_compare_unknown_version(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/contracts/msa/comparisons",
            json={"version_a_id": "x", "version_b_id": "y", "created_by": 1},
        )
        assert resp.status_code == 404


class TestApiKey:
    async def test_key_required_when_configured(
        self, tmp_path: Path
    ) -> None:
        setup_test_app(
            tmp_path,
            settings=Settings(database_url="sqlite:///:memory:", api_key="s3cret"),
        )
        transport = ASGITransport(app=app)
        async with AsyncClient(
            transport=transport, base_url="http://test"
        ) as c:
            health = await c.get("/api/health")
            denied = await c.post(
                "/api/compare/text", json={"text_a": "a", "text_b": "b"}
            )
            allowed = await c.post(
                "/api/compare/text",
                json={"text_a": "a", "text_b": "b"},
                headers={"X-API-Key": "s3cret"},
            )
        app.dependency_overrides.clear()

        assert health.status_code == 200
        assert denied.status_code == 401
        assert denied.json()["success"] is False
        assert allowed.status_code == 200
