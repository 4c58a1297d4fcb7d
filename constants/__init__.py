"""
Constants Package

Shared constants for validation, ordering and output markers.
"""

from .markers import (
    ADDITIONAL_CONTAINER_PREFIX,
    ADDITIONAL_INGREDIENT_PREFIX,
    COST_SOURCE_MENU_CONTAINER,
    COST_SOURCE_NONE,
    COST_SOURCE_PRICE_HISTORY,
    COST_UNAVAILABLE,
    DETAIL_UNAVAILABLE,
    NO_INGREDIENT_DATA,
    UNAVAILABLE,
    UNPRICED,
)

from .units import (
    CACHED_COST_DECIMALS,
    CONTAINER_UNIT,
    MENU_COST_DECIMALS,
    DEFAULT_CONTAINER_LABEL,
    MEAL_TIME_ORDER,
    OTHER_MEAL_TIME,
    meal_time_rank,
)

from .validation import (
    DATE_PATTERN,
    MAX_BATCH_DETAILS,
    MAX_HEADCOUNT,
    MIN_HEADCOUNT,
    UUID_PATTERN,
    VALID_STOCK_ITEM_TYPES,
)
