"""
Input Validation Module

Parses and validates JSON payloads and query parameters of the
cooking-plan API. Invalid input raises PayloadError carrying every
problem found, which the API turns into a 400 response.
"""

import math
from datetime import date

from constants import (
    DATE_PATTERN,
    MAX_BATCH_DETAILS,
    MAX_HEADCOUNT,
    MIN_HEADCOUNT,
    UUID_PATTERN,
)


class PayloadError(ValueError):
    """Request payload failed validation."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or []


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(value) if value else default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def safe_int(value, default=1, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(value) if value else default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def is_valid_id(value):
    return isinstance(value, str) and bool(UUID_PATTERN.match(value))


def parse_iso_date(value, field='date'):
    """Parse a YYYY-MM-DD string into a date or raise PayloadError."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise PayloadError('Invalid date', [f"{field} must be YYYY-MM-DD"])
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise PayloadError('Invalid date', [f"{field} is not a calendar date"])


def _require_object(data):
    if not isinstance(data, dict):
        raise PayloadError('Invalid payload', ['request body must be a JSON object'])


def _number(value):
    """Finite numbers only; booleans are rejected even though they are ints."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def parse_meal_portions_payload(data):
    """
    Validate {date, meal_portions: [{meal_plan_id, headcount}]}.

    Returns (date, [(meal_plan_id, headcount), ...]). A meal plan listed
    twice keeps its last headcount.
    """
    _require_object(data)
    errors = []

    plan_date = None
    try:
        plan_date = parse_iso_date(data.get('date'))
    except PayloadError as e:
        errors.extend(e.details)

    portions = data.get('meal_portions')
    parsed = {}
    if not isinstance(portions, list) or not portions:
        errors.append('meal_portions must be a non-empty list')
    else:
        for index, item in enumerate(portions):
            if not isinstance(item, dict):
                errors.append(f"meal_portions[{index}] must be an object")
                continue
            meal_plan_id = item.get('meal_plan_id')
            headcount = item.get('headcount')
            if not is_valid_id(meal_plan_id):
                errors.append(f"meal_portions[{index}].meal_plan_id is invalid")
            if (not _number(headcount) or not MIN_HEADCOUNT <= headcount <= MAX_HEADCOUNT
                    or int(headcount) != headcount):
                errors.append(
                    f"meal_portions[{index}].headcount must be an integer between {MIN_HEADCOUNT} and {MAX_HEADCOUNT}"
                )
                continue
            if is_valid_id(meal_plan_id):
                parsed[meal_plan_id] = int(headcount)

    if errors:
        raise PayloadError('Invalid meal portions', errors)
    return plan_date, list(parsed.items())


def parse_order_quantities_payload(data):
    """Validate {order_quantities: [{ingredient_id, order_quantity >= 0}]}."""
    _require_object(data)
    items = data.get('order_quantities')
    if not isinstance(items, list):
        raise PayloadError('Invalid order quantities', ['order_quantities must be a list'])

    errors = []
    parsed = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            errors.append(f"order_quantities[{index}] must be an object")
            continue
        ingredient_id = item.get('ingredient_id')
        quantity = item.get('order_quantity')
        if not is_valid_id(ingredient_id):
            errors.append(f"order_quantities[{index}].ingredient_id is invalid")
        if not _number(quantity) or quantity < 0:
            errors.append(f"order_quantities[{index}].order_quantity must be a number >= 0")
        if is_valid_id(ingredient_id) and _number(quantity) and quantity >= 0:
            parsed.append((ingredient_id, float(quantity)))

    if errors:
        raise PayloadError('Invalid order quantities', errors)
    return parsed


def parse_additional_item_payload(data, id_field):
    """Validate {<id_field>, quantity > 0}; returns (item_id, quantity)."""
    _require_object(data)
    errors = []
    item_id = data.get(id_field)
    quantity = data.get('quantity')
    if not is_valid_id(item_id):
        errors.append(f"{id_field} is invalid")
    if not _number(quantity) or quantity <= 0:
        errors.append('quantity must be a number > 0')
    if errors:
        raise PayloadError('Invalid item', errors)
    return item_id, float(quantity)


def parse_batch_details_payload(data):
    """
    Validate {menus: [{menu_id, container_id?}]}.

    Returns (menu_id, container_id) pairs in request order; a missing or
    null container_id means no container.
    """
    _require_object(data)
    menus = data.get('menus')
    if not isinstance(menus, list) or not menus:
        raise PayloadError('Invalid menus', ['menus must be a non-empty list'])
    if len(menus) > MAX_BATCH_DETAILS:
        raise PayloadError('Invalid menus', [f"at most {MAX_BATCH_DETAILS} menus per request"])

    errors = []
    parsed = []
    for index, item in enumerate(menus):
        if not isinstance(item, dict):
            errors.append(f"menus[{index}] must be an object")
            continue
        menu_id = item.get('menu_id')
        container_id = item.get('container_id')
        if not is_valid_id(menu_id):
            errors.append(f"menus[{index}].menu_id is invalid")
        if container_id is not None and not is_valid_id(container_id):
            errors.append(f"menus[{index}].container_id is invalid")
        parsed.append((menu_id, container_id))

    if errors:
        raise PayloadError('Invalid menus', errors)
    return parsed
