# =============================================================================
# app/routers/properties.py - Admin Property Update Endpoint
# =============================================================================
# POST /api/update-and-deploy
#
# Body:   {"action": "add"|"edit"|"delete", "property": {"id": ..., ...}}
# Header: Authorization: Bearer <access_token_from_client>
#
# Flow: verify admin -> download properties.json -> apply the change ->
# upload properties.json -> trigger the deploy hook in the background.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from app.auth import extract_bearer_token, require_admin, verify_token
from app.config import Settings, get_settings
from app.exceptions import (
    PropertyAdminException,
    ServerMisconfigurationError,
    UnexpectedError,
)
from core.models.property import PropertyUpdateResponse
from core.services.deploy_hook_service import DeployHookService
from core.services.property_service import PropertyService, loads_strict
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()

SettingsDep = Annotated[Settings, Depends(get_settings)]


def _require_storage_credentials(config: Settings) -> None:
    if config.has_storage_credentials:
        return
    missing = [
        name for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_ROLE_KEY")
        if not getattr(config, name)
    ]
    logger.error(f"Update rejected, missing configuration: {', '.join(missing)}")
    raise ServerMisconfigurationError(missing)


@router.post("/update-and-deploy", response_model=PropertyUpdateResponse)
async def update_and_deploy(
    request: Request,
    background_tasks: BackgroundTasks,
    config: SettingsDep,
):
    """
    Add, edit or delete a property and redeploy the site.

    Requires a Supabase access token for a user listed in ADMIN_EMAILS.
    The whole properties.json document is rewritten on every call.
    """
    try:
        token = extract_bearer_token(request.headers.get("authorization"))
        body = loads_strict(await request.body())

        _require_storage_credentials(config)

        user = verify_token(token, config)
        require_admin(user, config)

        storage = StorageService(SupabaseClient.create_admin_client(config))
        collection = storage.download_collection()

        action, prop = PropertyService.parse_request(body)
        collection = PropertyService.apply_update(collection, action, prop)

        storage.upload_collection(collection)
        logger.info(f"{user.email} applied {action.value} to properties")

        if config.VERCEL_DEPLOY_HOOK:
            background_tasks.add_task(DeployHookService.trigger, config.VERCEL_DEPLOY_HOOK)

        return PropertyUpdateResponse()

    except PropertyAdminException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error while updating properties: {e}")
        raise UnexpectedError(e) from e
