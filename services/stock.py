"""
Stock Requirement Service

Lists what the kitchen must have on hand for a day: stock-tracked
ingredients and all containers of the cooking plan, followed by the
items added by hand.
"""

import logging

from constants import ADDITIONAL_CONTAINER_PREFIX, ADDITIONAL_INGREDIENT_PREFIX, CONTAINER_UNIT

logger = logging.getLogger(__name__)


def _shortage(required, on_hand):
    if on_hand is None:
        return None
    return max(required - on_hand, 0.0)


def _ingredient_row(row_id, master, required, stock):
    current = stock.current_quantity if stock else None
    return {
        'id': row_id,
        'item_id': master.id,
        'item_type': 'ingredient',
        'name': master.name,
        'code_name': master.code_name,
        'unit': master.unit,
        'supplier': master.supplier,
        'stock_grade': master.stock_grade,
        'price': master.price,
        'total_amount': required,
        'current_stock': current,
        'stock_updated_at': stock.last_updated.isoformat() if stock and stock.last_updated else None,
        'shortage': _shortage(required, current),
    }


def _container_row(row_id, master, required, stock, fallback_name=None):
    current = stock.current_quantity if stock else None
    return {
        'id': row_id,
        'item_id': master.id if master else None,
        'item_type': 'container',
        'name': master.name if master else fallback_name,
        'code_name': master.code_name if master else None,
        'unit': CONTAINER_UNIT,
        'price': master.price if master else None,
        'total_amount': required,
        'current_stock': current,
        'stock_updated_at': stock.last_updated.isoformat() if stock and stock.last_updated else None,
        'stock_source_id': master.stock_source_id if master else None,
        'shortage': _shortage(required, current),
    }


def stock_requirements(cooking_plan, catalog, additional_ingredients=(), additional_containers=()):
    """
    Build {'ingredients': [...], 'containers': [...]} for a cooking plan.

    Only ingredients with a stock grade are listed. Added items come after
    the planned ones with their id prefixed so both can appear for the
    same master item.
    """
    ingredients = []
    for requirement in cooking_plan.ingredient_requirements:
        if not requirement.stock_grade:
            continue
        master = catalog.ingredients.get(requirement.ingredient_id)
        ingredients.append(_ingredient_row(
            requirement.ingredient_id, master, requirement.total_amount,
            catalog.ingredient_stock(requirement.ingredient_id),
        ))

    for item in additional_ingredients:
        master = catalog.ingredients.get(item.item_id)
        if master is None:
            logger.warning(f"Added ingredient {item.item_id} not in master; skipped")
            continue
        ingredients.append(_ingredient_row(
            f"{ADDITIONAL_INGREDIENT_PREFIX}{item.item_id}", master, item.quantity,
            catalog.ingredient_stock(item.item_id),
        ))

    containers = []
    for requirement in cooking_plan.container_requirements:
        master = catalog.containers.get(requirement.container_id)
        containers.append(_container_row(
            requirement.container_id, master, requirement.needed_quantity,
            catalog.container_stock(requirement.stock_source_id),
            fallback_name=requirement.name,
        ))

    for item in additional_containers:
        master = catalog.containers.get(item.item_id)
        if master is None:
            logger.warning(f"Added container {item.item_id} not in master; skipped")
            continue
        containers.append(_container_row(
            f"{ADDITIONAL_CONTAINER_PREFIX}{item.item_id}", master, item.quantity,
            catalog.container_stock(master.stock_source_id),
        ))

    return {'ingredients': ingredients, 'containers': containers}
