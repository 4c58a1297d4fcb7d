"""
Cost Calculation Service

Functions for resolving menu costs and calculating meal plan and
day totals.
"""

import logging
import math

from constants import (
    CACHED_COST_DECIMALS,
    COST_SOURCE_MENU_CONTAINER,
    COST_SOURCE_NONE,
    COST_SOURCE_PRICE_HISTORY,
    MENU_COST_DECIMALS,
    UNAVAILABLE,
)
from .containers import container_cost_total, distinct_containers
from .ingredients import ingredient_cost_total
from .records import CostSummary, MealPlanCost

logger = logging.getLogger(__name__)


def latest_price_entry(entries):
    """
    Newest price-history entry that carries a price.

    Dated entries come first, newest first; undated entries follow all
    dated ones. Entries with equal dates keep their input order, and the
    first element wins. Returns None when no entry has a price.
    """
    priced = [e for e in entries if e.cost_price is not None]
    dated = sorted((e for e in priced if e.recorded_at is not None),
                   key=lambda e: e.recorded_at, reverse=True)
    undated = [e for e in priced if e.recorded_at is None]
    ordered = dated + undated
    return ordered[0] if ordered else None


def resolve_menu_cost(catalog, menu_id, container_id):
    """
    Ingredient cost of one serving of a menu in a container.

    1. the cached menu-container ingredients_cost, when present and positive
    2. otherwise the newest menu price-history entry

    Returns (cost, source); cost is None when neither step yields one.
    """
    record = catalog.recipe(menu_id, container_id)
    if record is not None and record.ingredients_cost is not None and record.ingredients_cost > 0:
        return record.ingredients_cost, COST_SOURCE_MENU_CONTAINER

    menu = catalog.menus.get(menu_id)
    if menu is not None:
        entry = latest_price_entry(menu.price_history)
        if entry is not None:
            return entry.cost_price, COST_SOURCE_PRICE_HISTORY

    logger.warning(f"No cost for menu {menu_id} in container {container_id}")
    return None, COST_SOURCE_NONE


def recipe_ingredients_cost(lines, ingredients):
    """
    Sum amount x unit price over recipe lines.

    Returns (cost, missing) where missing lists the ingredient ids that
    could not be priced and were left out of the sum.
    """
    parts = []
    missing = []
    for line in lines:
        master = ingredients.get(line.ingredient_id)
        unit_price = master.unit_price if master else None
        if unit_price is None:
            missing.append(line.ingredient_id)
            continue
        parts.append(line.amount * unit_price)
    return math.fsum(parts), missing


def cached_ingredients_cost(record, ingredients):
    """
    Value stored as a menu-container's ingredients_cost.

    None without recipe lines or when no line can be priced.
    """
    if not record.ingredients:
        return None
    cost, missing = recipe_ingredients_cost(record.ingredients, ingredients)
    if len(missing) == len(record.ingredients):
        logger.warning(f"Menu container {record.id}: no priced ingredients, cost left unset")
        return None
    if missing:
        logger.warning(f"Menu container {record.id}: unpriced ingredients {missing} left out")
    return round(cost, CACHED_COST_DECIMALS)


def menu_cost_price(container_costs):
    """Menu cost_price from the cached costs of its containers."""
    return round(math.fsum(c for c in container_costs if c), MENU_COST_DECIMALS)


def meal_plan_cost(meal_plan, catalog, headcount=None):
    """
    Per-serving cost of a meal plan.

    Each distinct (menu, container) selection is charged its menu cost;
    each distinct container is charged its price once, using the same
    container de-duplication as the container requirements.
    """
    menu_items = []
    seen = set()
    for selection in meal_plan.selections:
        key = (selection.menu_id, selection.container_id)
        if key in seen:
            continue
        seen.add(key)
        cost, source = resolve_menu_cost(catalog, selection.menu_id, selection.container_id)
        menu_items.append({
            'menu_id': selection.menu_id,
            'menu_name': selection.menu_name,
            'container_id': selection.container_id,
            'cost': cost,
            'source': source,
        })

    containers = []
    for container_id, container_name in distinct_containers(meal_plan.selections):
        master = catalog.containers.get(container_id)
        containers.append({
            'container_id': container_id,
            'name': master.name if master else container_name,
            'price': master.price if master else None,
        })

    menu_cost = math.fsum(item['cost'] for item in menu_items if item['cost'] is not None)
    container_cost = math.fsum(c['price'] for c in containers if c['price'] is not None)

    unavailable_menu_ids = tuple(item['menu_id'] for item in menu_items if item['cost'] is None)
    unpriced_container_ids = tuple(c['container_id'] for c in containers if c['price'] is None)

    for row in menu_items:
        if row['cost'] is None:
            row['cost'] = UNAVAILABLE
    for row in containers:
        if row['price'] is None:
            row['price'] = UNAVAILABLE

    return MealPlanCost(
        meal_plan_id=meal_plan.id,
        menu_items=tuple(menu_items),
        containers=tuple(containers),
        menu_cost=menu_cost,
        container_cost=container_cost,
        headcount=headcount,
        unavailable_menu_ids=unavailable_menu_ids,
        unpriced_container_ids=unpriced_container_ids,
    )


def summarize_costs(ingredient_requirements, container_requirements):
    ingredient_cost, unpriced_ingredients = ingredient_cost_total(ingredient_requirements)
    container_cost, unpriced_containers = container_cost_total(container_requirements)
    return CostSummary(
        ingredient_cost=ingredient_cost,
        container_cost=container_cost,
        unpriced_ingredient_ids=unpriced_ingredients,
        unpriced_container_ids=unpriced_containers,
    )
