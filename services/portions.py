"""
Portion Service

Turns a day's meal plans into portion seeds and aggregates them into
menu portions: one row per (meal time, menu, container), plus the
name-level print view and the per-meal-time headcount totals.
"""

import logging
import math

from constants import DEFAULT_CONTAINER_LABEL, OTHER_MEAL_TIME, meal_time_rank
from .records import ContainerShare, GroupIngredient, MenuGroup, MenuPortion, PortionSeed

logger = logging.getLogger(__name__)


def plan_meal_time(meal_plan):
    """Plans without a meal time are grouped under 'other'."""
    return meal_plan.meal_time or OTHER_MEAL_TIME


def expand_portions(meal_plans):
    """
    Flatten meal plans into one seed per (menu, container) of each plan.

    A plan selecting the same (menu, container) twice yields one seed.
    A plan without selections yields nothing.
    """
    seeds = []
    for plan in meal_plans:
        seen = set()
        for selection in plan.selections:
            key = (selection.menu_id, selection.container_id)
            if key in seen:
                logger.debug(f"Duplicate selection {key} in meal plan {plan.id} ignored")
                continue
            seen.add(key)
            seeds.append(PortionSeed(
                meal_plan_id=plan.id,
                meal_time=plan_meal_time(plan),
                menu_id=selection.menu_id,
                menu_name=selection.menu_name,
                container_id=selection.container_id,
                container_name=selection.container_name,
                headcount=plan.headcount,
            ))
    return seeds


def menu_portion_sort_key(portion):
    return (
        meal_time_rank(portion.meal_time),
        portion.menu_name,
        portion.container_name or '',
        portion.menu_id,
        portion.container_id or '',
    )


def aggregate_menu_portions(seeds, catalog=None):
    """
    Group seeds by (meal_time, menu_id, container_id).

    Headcounts are summed and the originating plan ids collected; a plan
    contributes its headcount to a group once, so feeding the same seeds
    again does not change the result. With a catalog, rows whose
    (menu, container) has no registered recipe are flagged.
    """
    consolidated = {}
    for seed in seeds:
        key = (seed.meal_time, seed.menu_id, seed.container_id)
        portion = consolidated.get(key)
        if portion is None:
            portion = MenuPortion(
                meal_time=seed.meal_time,
                menu_id=seed.menu_id,
                menu_name=seed.menu_name,
                container_id=seed.container_id,
                container_name=seed.container_name,
            )
            consolidated[key] = portion

        if seed.meal_plan_id in portion.source_meal_plan_ids:
            continue
        portion.source_meal_plan_ids.add(seed.meal_plan_id)
        portion.headcount += seed.headcount

    portions = sorted(consolidated.values(), key=menu_portion_sort_key)

    if catalog is not None:
        for portion in portions:
            recipe = catalog.recipe(portion.menu_id, portion.container_id)
            if recipe is None or not recipe.ingredients:
                portion.has_ingredient_data = False

    return portions


def group_menus_by_name(menu_portions, catalog):
    """
    Collapse menu portions to one row per (meal time, menu name).

    Containers are listed with their own headcount; the group headcount is
    the plain sum over containers. Ingredient amounts are amount x
    container headcount, merged by ingredient.
    """
    groups = {}
    for portion in menu_portions:
        key = (portion.meal_time, portion.menu_name)
        group = groups.setdefault(key, {'containers': [], 'amounts': {}, 'labels': {}})
        group['containers'].append(ContainerShare(
            name=portion.container_name or DEFAULT_CONTAINER_LABEL,
            headcount=portion.headcount,
        ))

        recipe = catalog.recipe(portion.menu_id, portion.container_id)
        if recipe is None:
            continue
        for line in recipe.ingredients:
            master = catalog.ingredients.get(line.ingredient_id)
            group['amounts'].setdefault(line.ingredient_id, []).append(line.amount * portion.headcount)
            if line.ingredient_id not in group['labels']:
                if master:
                    group['labels'][line.ingredient_id] = (master.name, master.unit)
                else:
                    group['labels'][line.ingredient_id] = (line.ingredient_name, line.unit)

    result = []
    for (meal_time, menu_name), group in groups.items():
        ingredients = [
            GroupIngredient(
                ingredient_id=ing_id,
                name=group['labels'][ing_id][0],
                unit=group['labels'][ing_id][1],
                amount=math.fsum(amounts),
            )
            for ing_id, amounts in group['amounts'].items()
        ]
        ingredients.sort(key=lambda i: (i.name, i.ingredient_id))
        result.append(MenuGroup(
            meal_time=meal_time,
            menu_name=menu_name,
            headcount=sum(c.headcount for c in group['containers']),
            containers_info=tuple(group['containers']),
            ingredients=tuple(ingredients),
        ))

    result.sort(key=lambda g: (meal_time_rank(g.meal_time), g.menu_name))
    return result


def meal_time_totals(meal_plans):
    """Headcount per meal time, each meal plan counted once."""
    totals = {}
    seen = set()
    for plan in meal_plans:
        if plan.id in seen:
            continue
        seen.add(plan.id)
        meal_time = plan_meal_time(plan)
        totals[meal_time] = totals.get(meal_time, 0) + plan.headcount
    return tuple(sorted(totals.items(), key=lambda item: meal_time_rank(item[0])))
