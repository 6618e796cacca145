# =============================================================================
# tests/test_health.py - Health Endpoint Tests
# =============================================================================

from tests.conftest import FakeStorageError


class TestHealth:
    """Tests for the health endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "development"

    def test_live(self, client):
        response = client.get("/api/health/live")

        assert response.json()["status"] == "alive"

    def test_ready(self, client):
        response = client.get("/api/health/ready")

        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"] == {"config": "healthy", "storage": "healthy"}

    def test_ready_degraded_when_bucket_unreachable(self, client, fake_supabase):
        fake_supabase.storage.bucket_error = FakeStorageError(404, "Bucket not found")

        response = client.get("/api/health/ready")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "degraded"
        assert body["checks"]["storage"].startswith("unhealthy")

    def test_ready_degraded_without_secrets(self, client, settings_override, fake_supabase):
        settings_override(SUPABASE_SERVICE_ROLE_KEY="")

        response = client.get("/api/health/ready")

        body = response.json()
        assert body["status"] == "degraded"
        assert body["checks"]["storage"] == "skipped"
        assert fake_supabase.created_with == []

    def test_root(self, client):
        response = client.get("/")

        assert response.json()["update"] == "/api/update-and-deploy"
