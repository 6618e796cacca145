# =============================================================================
# core/services/deploy_hook_service.py - Redeploy Webhook
# =============================================================================
# POSTs to the configured deploy hook after a successful update so the
# static site rebuilds with the new properties.json.
#
# Best effort only: runs as a background task after the response is sent,
# and every failure is logged and dropped.
# =============================================================================

import logging

import httpx

logger = logging.getLogger(__name__)


class DeployHookService:
    """Fires the redeploy webhook."""

    @staticmethod
    async def trigger(url: str, client: httpx.AsyncClient | None = None) -> bool:
        """
        POST to the deploy hook.

        Args:
            url: Hook URL. Nothing is sent when empty.
            client: Optional client to send with (tests pass one with a
                mock transport). A new one is created otherwise.

        Returns:
            True if the hook answered with a 2xx status
        """
        if not url:
            return False

        try:
            if client is None:
                async with httpx.AsyncClient() as owned_client:
                    response = await owned_client.post(url)
            else:
                response = await client.post(url)
        except Exception as e:
            logger.warning(f"Deploy hook failed: {e}")
            return False

        if not response.is_success:
            logger.warning(f"Deploy hook returned HTTP {response.status_code}")
            return False

        logger.info("Deploy hook triggered")
        return True
