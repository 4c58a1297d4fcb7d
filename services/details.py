"""
Menu Detail Service

Per-selection menu details for the meal-plan editor: name, resolved
cost, container and calories. Batches are fetched concurrently; a row
whose fetch fails or misses the deadline comes back marked
"detail unavailable" while the others are returned normally.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor, wait

from constants import DETAIL_UNAVAILABLE, UNAVAILABLE
from .cost import resolve_menu_cost

logger = logging.getLogger(__name__)


class MenuNotFoundError(LookupError):
    """Raised when a requested menu does not exist for the company."""


def menu_calories(lines, ingredients):
    """
    Calories of one serving: sum of calories per package / package amount x amount.

    Returns None when no line can be converted.
    """
    parts = []
    for line in lines:
        master = ingredients.get(line.ingredient_id)
        if master is None or master.calories is None or not master.package_amount or master.package_amount <= 0:
            continue
        parts.append(master.calories / master.package_amount * line.amount)
    if not parts:
        return None
    return math.fsum(parts)


def menu_detail(catalog, menu_id, container_id=None):
    """Detail row for one (menu, container) selection."""
    menu = catalog.menus.get(menu_id)
    if menu is None:
        raise MenuNotFoundError(f"Menu {menu_id} not found")

    cost, source = resolve_menu_cost(catalog, menu_id, container_id)
    container = catalog.containers.get(container_id) if container_id else None
    recipe = catalog.recipe(menu_id, container_id)
    calories = menu_calories(recipe.ingredients, catalog.ingredients) if recipe else None

    return {
        'menu_id': menu_id,
        'container_id': container_id,
        'menu_name': menu.name,
        'cost': UNAVAILABLE if cost is None else cost,
        'cost_source': source,
        'container_name': container.name if container else None,
        'container_price': container.price if container else None,
        'calories': UNAVAILABLE if calories is None else calories,
        'ingredients': [
            {'ingredient_id': line.ingredient_id, 'name': line.ingredient_name, 'amount': line.amount, 'unit': line.unit}
            for line in (recipe.ingredients if recipe else ())
        ],
        'status': 'ok',
    }


def unavailable_detail(selection):
    return {
        'menu_id': selection.menu_id,
        'container_id': selection.container_id,
        'status': DETAIL_UNAVAILABLE,
    }


def batch_menu_details(selections, fetch_detail, max_workers=8, timeout=None):
    """
    Fetch details for many selections concurrently.

    Args:
        selections: Selection records, in request order
        fetch_detail: callable taking one selection and returning its row
        max_workers: upper bound on concurrent fetches
        timeout: seconds to wait for the whole batch; None waits for all

    Returns:
        One row per selection, in request order. Rows that raised or were
        not finished at the deadline are replaced by unavailable_detail().
    """
    if not selections:
        return []

    results = [None] * len(selections)
    executor = ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(selections))))
    try:
        futures = {executor.submit(fetch_detail, selection): index
                   for index, selection in enumerate(selections)}
        done, not_done = wait(futures, timeout=timeout)

        for future in done:
            index = futures[future]
            selection = selections[index]
            try:
                results[index] = future.result()
            except Exception as e:
                logger.warning(f"Detail fetch failed for menu {selection.menu_id} "
                               f"container {selection.container_id}: {e}")
                results[index] = unavailable_detail(selection)

        for future in not_done:
            index = futures[future]
            selection = selections[index]
            future.cancel()
            logger.warning(f"Detail fetch timed out for menu {selection.menu_id} "
                           f"container {selection.container_id}")
            results[index] = unavailable_detail(selection)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    return results
