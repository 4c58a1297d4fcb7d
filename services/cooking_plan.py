"""
Cooking Plan Service

Assembles the cooking plan for one date from the day's meal plans and
the company's master data.
"""

import logging

from constants import OTHER_MEAL_TIME, meal_time_rank
from .containers import aggregate_container_requirements
from .cost import summarize_costs
from .ingredients import aggregate_ingredient_requirements
from .portions import (
    aggregate_menu_portions,
    expand_portions,
    group_menus_by_name,
    meal_time_totals,
    plan_meal_time,
)
from .records import CookingPlan

logger = logging.getLogger(__name__)


def build_cooking_plan(plan_date, meal_plans, catalog):
    """
    Compute the cooking plan for one date.

    meal_plans are MealPlanRecords carrying the day's headcount. The
    result depends only on the inputs: the same inputs in any order give
    the same plan. No meal plans gives an empty plan.
    """
    meal_plans = sorted(meal_plans, key=lambda p: (meal_time_rank(plan_meal_time(p)), p.name, p.id))
    if not meal_plans:
        logger.info(f"No meal portions for {plan_date}; empty cooking plan")
        return CookingPlan(date=plan_date)

    seeds = expand_portions(meal_plans)
    menu_portions = aggregate_menu_portions(seeds, catalog)
    ingredient_requirements = aggregate_ingredient_requirements(menu_portions, catalog)
    container_requirements = aggregate_container_requirements(seeds, catalog)

    logger.info(
        f"Cooking plan {plan_date}: {len(meal_plans)} meal plans, {len(menu_portions)} menu portions, "
        f"{len(ingredient_requirements)} ingredients, {len(container_requirements)} containers"
    )

    return CookingPlan(
        date=plan_date,
        meal_portions=tuple(
            {
                'meal_plan_id': plan.id,
                'meal_plan_name': plan.name,
                'meal_time': plan_meal_time(plan),
                'headcount': plan.headcount,
            }
            for plan in meal_plans
        ),
        meal_plans=tuple(meal_plans),
        menu_portions=tuple(menu_portions),
        ingredient_requirements=tuple(ingredient_requirements),
        container_requirements=tuple(container_requirements),
        menu_groups=tuple(group_menus_by_name(menu_portions, catalog)),
        meal_time_totals=meal_time_totals(meal_plans),
        cost_summary=summarize_costs(ingredient_requirements, container_requirements),
    )


def summarize_dates(portion_rows):
    """
    One entry per date for the cooking-plan list, newest date first.

    portion_rows are (date, meal_time, headcount) tuples, one per meal
    portion.
    """
    by_date = {}
    for plan_date, meal_time, headcount in portion_rows:
        entry = by_date.setdefault(plan_date, {'meal_times': set(), 'total_headcount': 0, 'meal_plan_count': 0})
        entry['meal_times'].add(meal_time or OTHER_MEAL_TIME)
        entry['total_headcount'] += headcount
        entry['meal_plan_count'] += 1

    return [
        {
            'date': plan_date.isoformat(),
            'meal_times': sorted(entry['meal_times'], key=meal_time_rank),
            'total_headcount': entry['total_headcount'],
            'meal_plan_count': entry['meal_plan_count'],
        }
        for plan_date, entry in sorted(by_date.items(), key=lambda item: item[0], reverse=True)
    ]
