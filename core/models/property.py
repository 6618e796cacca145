# =============================================================================
# core/models/property.py - Property Update Schemas
# =============================================================================
# These models define the API contract for the admin update endpoint:
# - PropertyAction: add / edit / delete
# - PropertyUpdateRequest: {"action": ..., "property": {...}}
# - PropertyUpdateResponse: {"ok": true}
#
# Property records themselves stay plain dicts. Only "id" is ever read,
# every other field is passed through untouched.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# A single listing as stored in properties.json
Property = dict[str, Any]


class PropertyAction(str, Enum):
    """
    Mutation applied to the collection document.

    - add: Append the property to the end of the list
    - edit: Replace every property with the same id
    - delete: Remove every property with the same id
    """
    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"


class PropertyUpdateRequest(BaseModel):
    """
    Body of POST /api/update-and-deploy.

    action is left untyped so an unsupported value reaches the handler
    and is reported as "Unknown action" rather than a validation error.
    """
    action: Any = Field(
        default=None,
        examples=["add"],
        description="One of: add, edit, delete"
    )
    property: Property | None = Field(
        default=None,
        examples=[{"id": "42", "title": "Sea view flat", "price": 350000}],
        description="The property record; only id is interpreted"
    )


class PropertyUpdateResponse(BaseModel):
    """Response after a successful update."""
    ok: bool = True
