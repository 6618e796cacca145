# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# - property.py: Update request/response schemas and the action enum
# =============================================================================

from .property import (
    Property,
    PropertyAction,
    PropertyUpdateRequest,
    PropertyUpdateResponse,
)

__all__ = [
    "Property",
    "PropertyAction",
    "PropertyUpdateRequest",
    "PropertyUpdateResponse",
]
