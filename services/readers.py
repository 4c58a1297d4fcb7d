"""
Domain Readers

Load a company's meal plans and master data from the database and
turn them into the engine's plain records. Reading only; nothing here
aggregates.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from constants import VALID_STOCK_ITEM_TYPES
from models import (
    AdditionalContainer,
    AdditionalIngredient,
    Container,
    Ingredient,
    MealPlan,
    MealPortion,
    Menu,
    MenuContainer,
    OrderQuantity,
    StockItem,
)
from utils.validation import safe_float, safe_int
from .records import (
    AdditionalItem,
    Catalog,
    ContainerMaster,
    IngredientMaster,
    MealPlanRecord,
    MenuContainerRecord,
    MenuMaster,
    PriceHistoryEntry,
    RecipeLine,
    Selection,
    StockSnapshot,
)

logger = logging.getLogger(__name__)


class MealPlanSourceError(RuntimeError):
    """The meal-plan list for a date could not be read."""


# ============================================
# ROW -> RECORD
# ============================================

def meal_plan_record(plan, headcount):
    return MealPlanRecord(
        id=plan.id,
        date=plan.date,
        meal_time=plan.meal_time,
        name=plan.name,
        headcount=headcount,
        selections=tuple(
            Selection(
                menu_id=item.menu_id,
                menu_name=item.menu_name,
                container_id=item.container_id or None,
                container_name=item.container_name,
            )
            for item in plan.menus
        ),
    )


def ingredient_master(row):
    # Mapped supplier first, free text second
    supplier = row.supplier_ref.name if row.supplier_ref else row.supplier
    return IngredientMaster(
        id=row.id,
        name=row.name,
        unit=row.unit,
        price=row.price,
        package_amount=row.package_amount,
        code_name=row.code_name,
        supplier=supplier or None,
        stock_grade=row.stock_grade or None,
        calories=row.calories,
    )


def container_master(row):
    return ContainerMaster(
        id=row.id,
        name=row.name,
        code_name=row.code_name,
        price=row.price,
        parent_container_id=row.parent_container_id,
    )


def menu_master(row):
    return MenuMaster(
        id=row.id,
        name=row.name,
        cost_price=row.cost_price,
        price_history=tuple(
            PriceHistoryEntry(cost_price=h.cost_price, recorded_at=h.recorded_at)
            for h in sorted(row.price_history, key=lambda h: h.id)
        ),
    )


def menu_container_record(row):
    return MenuContainerRecord(
        id=row.id,
        menu_id=row.menu_id,
        container_id=row.container_id or None,
        ingredients_cost=row.ingredients_cost,
        ingredients=tuple(
            RecipeLine(
                ingredient_id=line.ingredient_id,
                amount=safe_float(line.amount),
                ingredient_name=line.ingredient_name,
                unit=line.unit,
            )
            for line in row.ingredients
        ),
    )


def stock_snapshot(row):
    return StockSnapshot(
        item_id=row.item_id,
        item_type=row.item_type,
        current_quantity=safe_float(row.current_quantity),
        last_updated=row.last_updated,
        unit=row.unit,
    )


# ============================================
# QUERIES
# ============================================

def load_meal_plans(company_id, plan_date):
    """
    Meal plans with a portion on plan_date, headcount taken from the portion.

    This is the one read whose failure is terminal: it raises
    MealPlanSourceError.
    """
    try:
        rows = (MealPortion.query
                .options(selectinload(MealPortion.meal_plan).selectinload(MealPlan.menus))
                .filter_by(company_id=company_id, date=plan_date)
                .all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to read meal plans for company {company_id} on {plan_date}: {e}")
        raise MealPlanSourceError(f"Meal plans for {plan_date} could not be read") from e

    records = []
    for portion in rows:
        if portion.meal_plan is None:
            logger.warning(f"Meal portion {portion.id} points at a missing meal plan; skipped")
            continue
        records.append(meal_plan_record(portion.meal_plan, safe_int(portion.headcount, default=0, min_val=0)))
    return records


def load_meal_plan(company_id, meal_plan_id, plan_date=None):
    """
    Returns (record, headcount), or (None, None) when the plan does not exist.

    With plan_date, headcount is the plan's portion on that date (None
    when it has no portion); without it headcount is None.
    """
    try:
        plan = (MealPlan.query
                .options(selectinload(MealPlan.menus))
                .filter_by(company_id=company_id, id=meal_plan_id)
                .first())
        if plan is None:
            return None, None
        headcount = None
        if plan_date is not None:
            portion = MealPortion.query.filter_by(
                company_id=company_id, meal_plan_id=meal_plan_id, date=plan_date).first()
            headcount = portion.headcount if portion else None
    except SQLAlchemyError as e:
        logger.error(f"Failed to read meal plan {meal_plan_id}: {e}")
        raise MealPlanSourceError(f"Meal plan {meal_plan_id} could not be read") from e

    return meal_plan_record(plan, headcount or 0), headcount


def load_catalog(company_id, plan_date=None):
    """
    Master data of a company; with plan_date also that day's order quantities.

    A failed read is logged and gives an empty catalog: every row then
    reports its cost and names as unavailable.
    """
    try:
        menus = (Menu.query
                 .options(selectinload(Menu.price_history))
                 .filter_by(company_id=company_id)
                 .all())
        menu_containers = (MenuContainer.query
                           .join(Menu)
                           .options(selectinload(MenuContainer.ingredients))
                           .filter(Menu.company_id == company_id)
                           .all())
        ingredients = (Ingredient.query
                       .options(selectinload(Ingredient.supplier_ref))
                       .filter_by(company_id=company_id)
                       .all())
        containers = Container.query.filter_by(company_id=company_id).all()
        stock = StockItem.query.filter(StockItem.company_id == company_id,
                                       StockItem.item_type.in_(sorted(VALID_STOCK_ITEM_TYPES))).all()
        order_quantities = {}
        if plan_date is not None:
            order_quantities = {
                row.ingredient_id: row.order_quantity
                for row in OrderQuantity.query.filter_by(company_id=company_id, date=plan_date)
            }
    except SQLAlchemyError as e:
        logger.error(f"Failed to read master data for company {company_id}: {e}")
        return Catalog()

    return Catalog.build(
        menus=[menu_master(m) for m in menus],
        menu_containers=[menu_container_record(mc) for mc in menu_containers],
        ingredients=[ingredient_master(i) for i in ingredients],
        containers=[container_master(c) for c in containers],
        stock=[stock_snapshot(s) for s in stock],
        order_quantities=order_quantities,
    )


def load_portion_rows(company_id, start_date, end_date):
    """(date, meal_time, headcount) per meal portion in the inclusive range."""
    try:
        rows = (MealPortion.query
                .join(MealPlan)
                .with_entities(MealPortion.date, MealPlan.meal_time, MealPortion.headcount)
                .filter(MealPortion.company_id == company_id,
                        MealPortion.date >= start_date,
                        MealPortion.date <= end_date)
                .all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to read meal portions for company {company_id}: {e}")
        raise MealPlanSourceError('Meal portions could not be read') from e
    return [(row[0], row[1], row[2]) for row in rows]


def load_additional_items(company_id, plan_date):
    """Hand-added (ingredients, containers) of a date as AdditionalItems."""
    ingredients = [
        AdditionalItem(item_id=row.ingredient_id, quantity=row.quantity, item_type='ingredient')
        for row in AdditionalIngredient.query.filter_by(company_id=company_id, date=plan_date)
        .order_by(AdditionalIngredient.id)
    ]
    containers = [
        AdditionalItem(item_id=row.container_id, quantity=row.quantity, item_type='container')
        for row in AdditionalContainer.query.filter_by(company_id=company_id, date=plan_date)
        .order_by(AdditionalContainer.id)
    ]
    return ingredients, containers


def load_menu_catalog(company_id, menu_id, container_id=None):
    """
    Catalog holding only what one menu detail row needs.

    Raises SQLAlchemyError to the caller; a detail row fails on its own.
    """
    menu = (Menu.query
            .options(selectinload(Menu.price_history))
            .filter_by(company_id=company_id, id=menu_id)
            .first())
    if menu is None:
        return Catalog()

    record = (MenuContainer.query
              .options(selectinload(MenuContainer.ingredients))
              .filter_by(menu_id=menu_id, container_id=container_id)
              .first())
    ingredient_ids = [line.ingredient_id for line in record.ingredients] if record else []
    ingredients = []
    if ingredient_ids:
        ingredients = (Ingredient.query
                       .options(selectinload(Ingredient.supplier_ref))
                       .filter(Ingredient.company_id == company_id, Ingredient.id.in_(ingredient_ids))
                       .all())
    containers = []
    if container_id:
        containers = Container.query.filter_by(company_id=company_id, id=container_id).all()

    return Catalog.build(
        menus=[menu_master(menu)],
        menu_containers=[menu_container_record(record)] if record else [],
        ingredients=[ingredient_master(i) for i in ingredients],
        containers=[container_master(c) for c in containers],
    )
