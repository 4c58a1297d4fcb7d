"""
Unit and Ordering Constants

Display units, meal-time ordering and the labels used when a record
has no value of its own.
"""

# Containers are always counted in pieces
CONTAINER_UNIT = 'EA'

# Meal times in serving order; anything else sorts after these
MEAL_TIME_ORDER = {'breakfast': 0, 'lunch': 1, 'dinner': 2}

# Group label for plans without a meal time
OTHER_MEAL_TIME = 'other'

# Container label used in per-container headcount splits when a menu
# is served without a tracked container
DEFAULT_CONTAINER_LABEL = 'Default'

# Decimal places kept when a menu-container ingredient cost is cached
CACHED_COST_DECIMALS = 1

# Menu cost_price refreshed from its containers is kept in whole units
MENU_COST_DECIMALS = 0


def meal_time_rank(meal_time):
    """Sort key for meal times: known times first, in serving order."""
    return (MEAL_TIME_ORDER.get(meal_time, len(MEAL_TIME_ORDER)), meal_time or '')
