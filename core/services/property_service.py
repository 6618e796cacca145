# =============================================================================
# core/services/property_service.py - Property Collection Mutations
# =============================================================================
# Pure, in-memory operations on the list of properties. No I/O here:
# the router downloads the list, calls apply_update(), and uploads the result.
#
# Ids are compared as text so that 1, 1.0 and "1" all address the same
# property, matching how the admin frontend and JSON.stringify render them.
# =============================================================================

import json
import logging
import math
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from app.exceptions import BadRequestError, UnknownActionError
from core.models.property import Property, PropertyAction, PropertyUpdateRequest

logger = logging.getLogger(__name__)

# Stands in for a missing "id" key. Only matches other missing ids.
_MISSING_ID = object()

# JavaScript switches Number text to exponent form outside this range
_JS_MAX_PLAIN_EXPONENT = 21
_JS_MIN_PLAIN_EXPONENT = -6


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON value: {name}")


def loads_strict(raw: str | bytes) -> Any:
    """
    Decode JSON, rejecting NaN, Infinity and -Infinity.

    json.loads accepts those words but they are not JSON, and a document
    holding them cannot be read back by the site.
    """
    return json.loads(raw, parse_constant=_reject_constant)


def _js_number_text(value: float) -> str:
    """Render a float the way JavaScript's String(number) does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() gives the shortest round-tripping digits, as JS does
    decimal = Decimal(repr(abs(value))).normalize()
    _, digit_tuple, exponent = decimal.as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = k + exponent

    if k <= n <= _JS_MAX_PLAIN_EXPONENT:
        text = digits + "0" * (n - k)
    elif 0 < n <= _JS_MAX_PLAIN_EXPONENT:
        text = f"{digits[:n]}.{digits[n:]}"
    elif _JS_MIN_PLAIN_EXPONENT < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        e = n - 1
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + text


def property_id_key(value: Any) -> Any:
    """
    Text form of a property id used for equality checks.

    Numbers render as JavaScript's String() would (1.0 -> "1",
    1e21 -> "1e+21", 1e-7 -> "1e-7"), booleans and null use their JSON
    spelling. A missing id returns a sentinel.
    """
    if value is _MISSING_ID:
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if abs(value) < 10 ** _JS_MAX_PLAIN_EXPONENT:
            return str(value)
        return _js_number_text(float(value))
    if isinstance(value, float):
        return _js_number_text(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _is_falsy(value: Any) -> bool:
    """JavaScript truthiness: empty lists and objects count as present."""
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and (value == 0 or math.isnan(value))


def _id_of(item: Any) -> Any:
    if isinstance(item, dict):
        return property_id_key(item.get("id", _MISSING_ID))
    return _MISSING_ID


class PropertyService:
    """
    Mutations on the properties collection.

    All methods return a new list and leave the input untouched.
    """

    @staticmethod
    def parse_request(body: Any) -> tuple[PropertyAction, Property]:
        """
        Validate a request body and resolve its action.

        Args:
            body: Decoded JSON body

        Returns:
            (action, property) tuple

        Raises:
            BadRequestError: If action or property is missing
            UnknownActionError: If action is not add, edit or delete
        """
        if not isinstance(body, dict):
            raise BadRequestError()

        try:
            request = PropertyUpdateRequest.model_validate(body)
        except ValidationError:
            raise BadRequestError()

        if _is_falsy(request.action) or request.property is None:
            raise BadRequestError()

        if not isinstance(request.action, str):
            raise UnknownActionError(request.action)
        try:
            action = PropertyAction(request.action)
        except ValueError:
            raise UnknownActionError(request.action)

        return action, request.property

    @staticmethod
    def add(collection: list[Any], prop: Property) -> list[Any]:
        """Append prop to the end of the collection."""
        return [*collection, prop]

    @staticmethod
    def edit(collection: list[Any], prop: Property) -> list[Any]:
        """Replace every item whose id matches prop's id, keeping order."""
        target = _id_of(prop)
        return [prop if _id_of(item) == target else item for item in collection]

    @staticmethod
    def delete(collection: list[Any], prop: Property) -> list[Any]:
        """Remove every item whose id matches prop's id."""
        target = _id_of(prop)
        return [item for item in collection if _id_of(item) != target]

    @classmethod
    def apply_update(
        cls,
        collection: list[Any],
        action: PropertyAction,
        prop: Property,
    ) -> list[Any]:
        """
        Apply one action to the collection.

        Args:
            collection: Current list of properties
            action: What to do
            prop: The property from the request

        Returns:
            The updated list
        """
        if action == PropertyAction.ADD:
            updated = cls.add(collection, prop)
        elif action == PropertyAction.EDIT:
            updated = cls.edit(collection, prop)
        elif action == PropertyAction.DELETE:
            updated = cls.delete(collection, prop)
        else:
            raise UnknownActionError(action)

        logger.info(
            f"Applied {action.value} for id={prop.get('id')!r}: "
            f"{len(collection)} -> {len(updated)} properties"
        )
        return updated
