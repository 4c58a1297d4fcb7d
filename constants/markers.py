"""
Marker Constants

Values written into output rows when part of a row cannot be derived.
"""

# Shown in place of a ratio or price that cannot be computed
UNAVAILABLE = '-'

# Row notes
NO_INGREDIENT_DATA = 'no ingredient data'
DETAIL_UNAVAILABLE = 'detail unavailable'
COST_UNAVAILABLE = 'cost unavailable'
UNPRICED = 'unpriced'

# Sources reported by the menu cost resolution
COST_SOURCE_MENU_CONTAINER = 'menu_container'
COST_SOURCE_PRICE_HISTORY = 'price_history'
COST_SOURCE_NONE = 'unavailable'

# Id prefixes for manually added stock requirement rows
ADDITIONAL_INGREDIENT_PREFIX = 'additional_ingredient_'
ADDITIONAL_CONTAINER_PREFIX = 'additional_container_'
