"""Tests for API endpoints."""

import pytest


@pytest.mark.asyncio
class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_shorten_url(self, client, auth_headers, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["original_url"] == sample_urls[0]
        assert len(data["short_code"]) == 6
        assert data["short_url"] == f"http://testserver/{data['short_code']}"
        assert data["expiry"].endswith("Z")

    async def test_shorten_with_legacy_field_names(self, client, auth_headers, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"originalUrl": sample_urls[0], "validityMinutes": 5, "customShortCode": "legacy1"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["short_code"] == "legacy1"
        assert data["expiry"] == "2024-01-01T12:05:00Z"

    async def test_shorten_with_custom_code(self, client, auth_headers, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "custom_code": "test123"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["short_code"] == "test123"

    async def test_shorten_behind_proxy(self, client, auth_headers, sample_urls):
        headers = {
            **auth_headers,
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "sho.rt",
        }

        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "custom_code": "proxy1"},
            headers=headers,
        )

        assert response.json()["short_url"] == "https://sho.rt/proxy1"

    async def test_shorten_missing_url(self, client, auth_headers):
        response = await client.post("/api/shorten", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "missing_field"

    async def test_shorten_invalid_url(self, client, auth_headers):
        response = await client.post(
            "/api/shorten",
            json={"url": "not-a-url"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_format"

    async def test_shorten_blank_custom_code_generates_one(self, client, auth_headers, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "custom_code": "  "},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert len(response.json()["short_code"]) == 6

    async def test_shorten_invalid_custom_code(self, client, auth_headers, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "custom_code": "ab"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_format"

    async def test_shorten_malformed_validity(self, client, auth_headers, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "validity_minutes": "soon"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_format"

    async def test_shorten_oversized_validity(self, client, auth_headers, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "validity_minutes": 1e10},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_format"

    async def test_shorten_duplicate_custom_code(self, client, auth_headers, sample_urls):
        await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "custom_code": "dupe123"},
            headers=auth_headers,
        )

        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[1], "custom_code": "dupe123"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer "}, {"Authorization": "Basic abc"}])
    async def test_shorten_requires_bearer_token(self, client, sample_urls, headers):
        response = await client.post("/api/shorten", json={"url": sample_urls[0]}, headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    async def test_redirect(self, client, auth_headers, sample_urls):
        await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "custom_code": "go123"},
            headers=auth_headers,
        )

        response = await client.get("/go123", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[0]

    async def test_redirect_not_found(self, client):
        response = await client.get("/missing1", follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    async def test_redirect_expired(self, client, auth_headers, clock, sample_urls):
        await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "validity_minutes": 0.01, "custom_code": "old123"},
            headers=auth_headers,
        )
        clock.advance(seconds=1)

        expired = await client.get("/old123", follow_redirects=False)
        gone = await client.get("/old123", follow_redirects=False)

        assert expired.status_code == 410
        assert expired.json()["error"] == "expired"
        assert gone.status_code == 404

    async def test_stats_lists_clicks(self, client, auth_headers, sample_urls):
        await client.post(
            "/api/shorten",
            json={"url": sample_urls[0], "custom_code": "stat123"},
            headers=auth_headers,
        )
        await client.get("/stat123", headers={"Referer": "https://news.example.com"}, follow_redirects=False)
        await client.get("/stat123", headers={"X-Forwarded-For": "203.0.113.9"}, follow_redirects=False)

        response = await client.get("/api/stats", headers=auth_headers)

        assert response.status_code == 200
        [entry] = response.json()
        assert entry["short_code"] == "stat123"
        assert entry["short_url"] == "http://testserver/stat123"
        assert entry["created_at"] == "2024-01-01T12:00:00Z"
        assert entry["expiry"] == "2024-01-01T12:30:00Z"
        assert entry["total_clicks"] == 2
        assert [click["source"] for click in entry["detailed_clicks"]] == ["https://news.example.com", "direct"]
        assert entry["detailed_clicks"][1]["client_address"] == "203.0.113.9"

    async def test_stats_empty(self, client, auth_headers):
        response = await client.get("/api/stats", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == []

    async def test_stats_idempotent(self, client, auth_headers, sample_urls):
        for url in sample_urls:
            await client.post("/api/shorten", json={"url": url}, headers=auth_headers)

        first = await client.get("/api/stats", headers=auth_headers)
        second = await client.get("/api/stats", headers=auth_headers)

        assert first.json() == second.json()

    async def test_stats_requires_bearer_token(self, client):
        response = await client.get("/api/stats")

        assert response.status_code == 401

    async def test_stats_summary(self, client, auth_headers, sample_urls):
        await client.post("/api/shorten", json={"url": sample_urls[0], "custom_code": "sum123"}, headers=auth_headers)
        await client.get("/sum123", follow_redirects=False)

        response = await client.get("/api/stats/summary", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "total_links": 1,
            "active_links": 1,
            "total_clicks": 1,
            "custom_codes_enabled": True,
        }

    async def test_ingest_log(self, client, auth_headers, caplog):
        with caplog.at_level("WARNING", logger="shortener.ingest"):
            response = await client.post(
                "/api/logs",
                json={"stack": "frontend", "level": "warn", "package": "component", "message": "slow render"},
                headers=auth_headers,
            )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "log created successfully"
        assert data["log_id"] in caplog.text
        assert "[frontend/component] slow render" in caplog.text

    async def test_ingest_log_rejects_unknown_level(self, client, auth_headers):
        response = await client.post(
            "/api/logs",
            json={"stack": "frontend", "level": "loud", "package": "api", "message": "x"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    async def test_health_check(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["registry"] == "healthy"
