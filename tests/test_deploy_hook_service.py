# =============================================================================
# tests/test_deploy_hook_service.py - Deploy Hook Tests
# =============================================================================
# Uses httpx.MockTransport so no request leaves the process.
# =============================================================================

import asyncio

import httpx

from core.services.deploy_hook_service import DeployHookService

HOOK_URL = "https://api.vercel.com/v1/integrations/deploy/prj_test/abc123"


def _run(url, handler):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await DeployHookService.trigger(url, client=client)
    return asyncio.run(go())


class TestTrigger:
    """Tests for DeployHookService.trigger."""

    def test_posts_to_hook(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201, json={"job": {"id": "job_1"}})

        assert _run(HOOK_URL, handler) is True
        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert str(seen[0].url) == HOOK_URL

    def test_error_status_is_reported_not_raised(self, caplog):
        def handler(request):
            return httpx.Response(500)

        assert _run(HOOK_URL, handler) is False
        assert "HTTP 500" in caplog.text

    def test_transport_error_is_swallowed(self, caplog):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert _run(HOOK_URL, handler) is False
        assert "Deploy hook failed" in caplog.text

    def test_empty_url_sends_nothing(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        assert _run("", handler) is False
        assert seen == []
