# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .deploy_hook_service import DeployHookService
from .property_service import PropertyService, property_id_key
from .storage_service import StorageService

__all__ = [
    "DeployHookService",
    "PropertyService",
    "StorageService",
    "property_id_key",
]
