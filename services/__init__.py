"""
Services Package

Business logic modules for the cooking-plan engine.
"""

from .records import (
    AdditionalItem,
    Catalog,
    ContainerMaster,
    CookingPlan,
    IngredientMaster,
    MealPlanRecord,
    MenuContainerRecord,
    MenuMaster,
    PriceHistoryEntry,
    RecipeLine,
    Selection,
    StockSnapshot,
)

from .portions import (
    expand_portions,
    aggregate_menu_portions,
    group_menus_by_name,
    meal_time_totals,
)

from .ingredients import (
    aggregate_ingredient_requirements,
    ingredient_cost_total,
)

from .containers import (
    distinct_containers,
    container_demand,
    aggregate_container_requirements,
    container_cost_total,
)

from .cost import (
    latest_price_entry,
    resolve_menu_cost,
    recipe_ingredients_cost,
    cached_ingredients_cost,
    menu_cost_price,
    meal_plan_cost,
    summarize_costs,
)

from .cooking_plan import (
    build_cooking_plan,
    summarize_dates,
)

from .stock import (
    stock_requirements,
)

from .details import (
    MenuNotFoundError,
    menu_detail,
    unavailable_detail,
    batch_menu_details,
)

__all__ = [
    # Records
    'AdditionalItem',
    'Catalog',
    'ContainerMaster',
    'CookingPlan',
    'IngredientMaster',
    'MealPlanRecord',
    'MenuContainerRecord',
    'MenuMaster',
    'PriceHistoryEntry',
    'RecipeLine',
    'Selection',
    'StockSnapshot',
    # Portions
    'expand_portions',
    'aggregate_menu_portions',
    'group_menus_by_name',
    'meal_time_totals',
    # Ingredients
    'aggregate_ingredient_requirements',
    'ingredient_cost_total',
    # Containers
    'distinct_containers',
    'container_demand',
    'aggregate_container_requirements',
    'container_cost_total',
    # Cost
    'latest_price_entry',
    'resolve_menu_cost',
    'recipe_ingredients_cost',
    'cached_ingredients_cost',
    'menu_cost_price',
    'meal_plan_cost',
    'summarize_costs',
    # Cooking plan
    'build_cooking_plan',
    'summarize_dates',
    # Stock
    'stock_requirements',
    # Details
    'MenuNotFoundError',
    'menu_detail',
    'unavailable_detail',
    'batch_menu_details',
]
