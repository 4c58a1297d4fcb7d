"""
Ingredient Requirement Service

Functions for consolidating the day's recipe lines into one requirement
per ingredient with its projected cost.
"""

import logging
import math

from .records import IngredientRequirement

logger = logging.getLogger(__name__)


def aggregate_ingredient_requirements(menu_portions, catalog):
    """
    Sum amount x headcount per ingredient over all menu portions.

    Every (menu, container) portion is its own batch, so a menu served in
    two containers contributes its recipe twice. Portions without a
    registered recipe contribute nothing. Amounts are collected and summed
    once with fsum so the total does not depend on the portion order.
    """
    consolidated = {}
    for portion in menu_portions:
        recipe = catalog.recipe(portion.menu_id, portion.container_id)
        if recipe is None:
            logger.warning(
                f"No recipe for menu {portion.menu_id} in container {portion.container_id}; skipped"
            )
            continue

        for line in recipe.ingredients:
            item = consolidated.get(line.ingredient_id)
            if item is None:
                item = consolidated[line.ingredient_id] = {
                    'name': line.ingredient_name,
                    'unit': line.unit,
                    'amounts': [],
                }
            item['amounts'].append(line.amount * portion.headcount)

    requirements = []
    for ing_id, item in consolidated.items():
        requirements.append(_build_requirement(ing_id, item, catalog))

    requirements.sort(key=lambda r: (r.name, r.ingredient_id))
    return requirements


def _build_requirement(ing_id, item, catalog):
    total_amount = math.fsum(item['amounts'])
    stock = catalog.ingredient_stock(ing_id)
    current_stock = stock.current_quantity if stock else None
    stock_updated_at = stock.last_updated if stock else None
    order_quantity = catalog.order_quantities.get(ing_id)

    master = catalog.ingredients.get(ing_id)
    if master is None:
        # Deleted from the master: keep the name the recipe last saw
        logger.warning(f"Ingredient {ing_id} ({item['name']}) not in master; cost unavailable")
        return IngredientRequirement(
            ingredient_id=ing_id,
            name=item['name'],
            unit=item['unit'],
            total_amount=total_amount,
            current_stock=current_stock,
            stock_updated_at=stock_updated_at,
            order_quantity=order_quantity,
            available=False,
        )

    unit_price = master.unit_price
    if unit_price is None:
        logger.warning(
            f"Ingredient {ing_id} ({master.name}) has no usable price/package amount; cost unavailable"
        )
        total_price = None
    else:
        total_price = total_amount * unit_price

    return IngredientRequirement(
        ingredient_id=ing_id,
        name=master.name,
        unit=master.unit or item['unit'],
        total_amount=total_amount,
        package_amount=master.package_amount,
        unit_price=unit_price,
        total_price=total_price,
        code_name=master.code_name,
        supplier=master.supplier,
        stock_grade=master.stock_grade,
        current_stock=current_stock,
        stock_updated_at=stock_updated_at,
        order_quantity=order_quantity,
    )


def ingredient_cost_total(requirements):
    """Return (sum of known total prices, ids of requirements without a price)."""
    priced = [r.total_price for r in requirements if r.priced]
    unpriced = tuple(r.ingredient_id for r in requirements if not r.priced)
    return math.fsum(priced), unpriced
