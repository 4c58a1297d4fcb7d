"""
Engine Records

Plain records the cooking-plan engine reads and produces. Readers turn
database rows into the input records; the aggregators return the output
records, which render themselves to JSON-ready dicts.

Optional fields are None when the value is unknown; to_dict() renders
prices and ratios that cannot be derived as the "-" marker.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional, Set, Tuple

from constants import (
    CONTAINER_UNIT,
    COST_UNAVAILABLE,
    NO_INGREDIENT_DATA,
    UNAVAILABLE,
    UNPRICED,
)


def _or_unavailable(value):
    return UNAVAILABLE if value is None else value


def _iso(value):
    if value is None:
        return None
    return value.isoformat()


# ============================================
# INPUT RECORDS
# ============================================

@dataclass(frozen=True)
class Selection:
    """One (menu, container) pick of a meal plan; container_id None means no container."""
    menu_id: str
    menu_name: str = ''
    container_id: Optional[str] = None
    container_name: Optional[str] = None


@dataclass(frozen=True)
class MealPlanRecord:
    id: str
    date: date
    meal_time: Optional[str]
    name: str
    headcount: int
    selections: Tuple[Selection, ...] = ()

    def to_dict(self):
        return {
            'id': self.id,
            'date': _iso(self.date),
            'meal_time': self.meal_time,
            'name': self.name,
            'headcount': self.headcount,
            'selections': [
                {
                    'menu_id': s.menu_id,
                    'menu_name': s.menu_name,
                    'container_id': s.container_id,
                    'container_name': s.container_name,
                }
                for s in self.selections
            ],
        }


@dataclass(frozen=True)
class IngredientMaster:
    """
    Ingredient as priced by the master.

    price is per package; package_amount is how many `unit` one package
    holds. Either may be missing.
    """
    id: str
    name: str
    unit: Optional[str] = None
    price: Optional[float] = None
    package_amount: Optional[float] = None
    code_name: Optional[str] = None
    supplier: Optional[str] = None
    stock_grade: Optional[str] = None
    calories: Optional[float] = None

    @property
    def unit_price(self):
        """Price of one unit, or None when it cannot be derived."""
        if self.price is None or not self.package_amount or self.package_amount <= 0:
            return None
        return self.price / self.package_amount


@dataclass(frozen=True)
class RecipeLine:
    """Per-serving amount of one ingredient; name/unit are the last known values."""
    ingredient_id: str
    amount: float
    ingredient_name: str = ''
    unit: Optional[str] = None


@dataclass(frozen=True)
class MenuContainerRecord:
    menu_id: str
    container_id: Optional[str]
    ingredients_cost: Optional[float] = None
    ingredients: Tuple[RecipeLine, ...] = ()
    id: Optional[str] = None


@dataclass(frozen=True)
class ContainerMaster:
    id: str
    name: str
    code_name: Optional[str] = None
    price: Optional[float] = None
    parent_container_id: Optional[str] = None

    @property
    def stock_source_id(self):
        """Grouped containers keep their stock on the parent."""
        return self.parent_container_id or self.id


@dataclass(frozen=True)
class PriceHistoryEntry:
    cost_price: Optional[float]
    recorded_at: Optional[datetime] = None


@dataclass(frozen=True)
class MenuMaster:
    id: str
    name: str
    cost_price: Optional[float] = None
    price_history: Tuple[PriceHistoryEntry, ...] = ()


@dataclass(frozen=True)
class StockSnapshot:
    item_id: str
    current_quantity: float
    last_updated: Optional[datetime] = None
    item_type: str = 'ingredient'
    unit: Optional[str] = None


@dataclass(frozen=True)
class AdditionalItem:
    """Ingredient or container added to a day's stock requirements by hand."""
    item_id: str
    quantity: float
    item_type: str = 'ingredient'


@dataclass
class Catalog:
    """
    Master data for one company, indexed the way the aggregators look it up.

    menu_containers is keyed by (menu_id, container_id) where container_id
    is None for the no-container variant. stock is keyed by
    (item_type, item_id). order_quantities maps ingredient_id to the saved
    quantity for the day being planned.
    """
    menus: Dict[str, MenuMaster] = field(default_factory=dict)
    menu_containers: Dict[Tuple[str, Optional[str]], MenuContainerRecord] = field(default_factory=dict)
    ingredients: Dict[str, IngredientMaster] = field(default_factory=dict)
    containers: Dict[str, ContainerMaster] = field(default_factory=dict)
    stock: Dict[Tuple[str, str], StockSnapshot] = field(default_factory=dict)
    order_quantities: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def build(cls, menus=(), menu_containers=(), ingredients=(), containers=(),
              stock=(), order_quantities=None):
        return cls(
            menus={m.id: m for m in menus},
            menu_containers={(mc.menu_id, mc.container_id): mc for mc in menu_containers},
            ingredients={i.id: i for i in ingredients},
            containers={c.id: c for c in containers},
            stock={(s.item_type, s.item_id): s for s in stock},
            order_quantities=dict(order_quantities or {}),
        )

    def recipe(self, menu_id, container_id):
        return self.menu_containers.get((menu_id, container_id))

    def ingredient_stock(self, ingredient_id):
        return self.stock.get(('ingredient', ingredient_id))

    def container_stock(self, container_id):
        return self.stock.get(('container', container_id))


# ============================================
# OUTPUT RECORDS
# ============================================

@dataclass(frozen=True)
class PortionSeed:
    """One (menu, container) occurrence within one meal plan."""
    meal_plan_id: str
    meal_time: str
    menu_id: str
    menu_name: str
    container_id: Optional[str]
    container_name: Optional[str]
    headcount: int


@dataclass
class MenuPortion:
    meal_time: str
    menu_id: str
    menu_name: str
    container_id: Optional[str]
    container_name: Optional[str]
    headcount: int = 0
    source_meal_plan_ids: Set[str] = field(default_factory=set)
    has_ingredient_data: bool = True

    @property
    def key(self):
        return (self.meal_time, self.menu_id, self.container_id)

    def to_dict(self):
        return {
            'meal_time': self.meal_time,
            'menu_id': self.menu_id,
            'menu_name': self.menu_name,
            'container_id': self.container_id,
            'container_name': self.container_name,
            'headcount': self.headcount,
            'source_meal_plan_ids': sorted(self.source_meal_plan_ids),
            'note': None if self.has_ingredient_data else NO_INGREDIENT_DATA,
        }


@dataclass(frozen=True)
class ContainerShare:
    name: str
    headcount: int

    def to_dict(self):
        return {'name': self.name, 'headcount': self.headcount}


@dataclass(frozen=True)
class GroupIngredient:
    ingredient_id: str
    name: str
    unit: Optional[str]
    amount: float

    def to_dict(self):
        return {
            'ingredient_id': self.ingredient_id,
            'name': self.name,
            'unit': self.unit,
            'amount': self.amount,
        }


@dataclass(frozen=True)
class MenuGroup:
    """Print view: one row per menu name per meal time, containers merged."""
    meal_time: str
    menu_name: str
    headcount: int
    containers_info: Tuple[ContainerShare, ...]
    ingredients: Tuple[GroupIngredient, ...]

    def to_dict(self):
        return {
            'meal_time': self.meal_time,
            'menu_name': self.menu_name,
            'headcount': self.headcount,
            'containers_info': [c.to_dict() for c in self.containers_info],
            'ingredients': [i.to_dict() for i in self.ingredients],
        }


@dataclass(frozen=True)
class IngredientRequirement:
    """
    Day total of one ingredient.

    unit_price and total_price are None when the master has no usable
    price or package amount, or no longer exists (available is False).
    """
    ingredient_id: str
    name: str
    unit: Optional[str]
    total_amount: float
    package_amount: Optional[float] = None
    unit_price: Optional[float] = None
    total_price: Optional[float] = None
    code_name: Optional[str] = None
    supplier: Optional[str] = None
    stock_grade: Optional[str] = None
    current_stock: Optional[float] = None
    stock_updated_at: Optional[datetime] = None
    order_quantity: Optional[float] = None
    available: bool = True

    @property
    def units_to_order(self):
        if not self.package_amount or self.package_amount <= 0:
            return None
        return self.total_amount / self.package_amount

    @property
    def priced(self):
        return self.total_price is not None

    def to_dict(self):
        return {
            'ingredient_id': self.ingredient_id,
            'name': self.name,
            'code_name': self.code_name,
            'unit': self.unit,
            'total_amount': self.total_amount,
            'package_amount': self.package_amount,
            'unit_price': _or_unavailable(self.unit_price),
            'total_price': _or_unavailable(self.total_price),
            'units_to_order': _or_unavailable(self.units_to_order),
            'supplier': self.supplier,
            'current_stock': self.current_stock,
            'stock_updated_at': _iso(self.stock_updated_at),
            'order_quantity': self.order_quantity,
            'available': self.available,
            'note': None if self.priced else COST_UNAVAILABLE,
        }


@dataclass(frozen=True)
class ContainerRequirement:
    """Day demand of one container; total_price is 0 when price is unknown."""
    container_id: str
    name: str
    needed_quantity: int
    code_name: Optional[str] = None
    price: Optional[float] = None
    total_price: float = 0.0
    current_stock: Optional[float] = None
    stock_updated_at: Optional[datetime] = None
    stock_source_id: Optional[str] = None
    is_group_stock: bool = False

    @property
    def priced(self):
        return self.price is not None

    def to_dict(self):
        return {
            'container_id': self.container_id,
            'name': self.name,
            'code_name': self.code_name,
            'unit': CONTAINER_UNIT,
            'needed_quantity': self.needed_quantity,
            'price': _or_unavailable(self.price),
            'total_price': self.total_price,
            'priced': self.priced,
            'current_stock': self.current_stock,
            'stock_updated_at': _iso(self.stock_updated_at),
            'stock_source_id': self.stock_source_id,
            'is_group_stock': self.is_group_stock,
            'note': None if self.priced else UNPRICED,
        }


@dataclass(frozen=True)
class CostSummary:
    """Day cost totals; unpriced ingredients are listed, not summed."""
    ingredient_cost: float = 0.0
    container_cost: float = 0.0
    unpriced_ingredient_ids: Tuple[str, ...] = ()
    unpriced_container_ids: Tuple[str, ...] = ()

    @property
    def total_cost(self):
        return self.ingredient_cost + self.container_cost

    def to_dict(self):
        return {
            'ingredient_cost': self.ingredient_cost,
            'container_cost': self.container_cost,
            'total_cost': self.total_cost,
            'unpriced_ingredient_ids': list(self.unpriced_ingredient_ids),
            'unpriced_container_ids': list(self.unpriced_container_ids),
            'complete': not self.unpriced_ingredient_ids and not self.unpriced_container_ids,
        }


@dataclass(frozen=True)
class MealPlanCost:
    """
    Per-serving cost of one plan, optionally extended by its headcount.

    Menu items without a cost and containers without a price are listed
    and left out of the totals.
    """
    meal_plan_id: str
    menu_items: Tuple[dict, ...]
    containers: Tuple[dict, ...]
    menu_cost: float
    container_cost: float
    headcount: Optional[int] = None
    unavailable_menu_ids: Tuple[str, ...] = ()
    unpriced_container_ids: Tuple[str, ...] = ()

    @property
    def total_cost(self):
        return self.menu_cost + self.container_cost

    @property
    def extended_total(self):
        if self.headcount is None:
            return None
        return self.total_cost * self.headcount

    def to_dict(self):
        return {
            'meal_plan_id': self.meal_plan_id,
            'menu_items': list(self.menu_items),
            'containers': list(self.containers),
            'menu_cost': self.menu_cost,
            'container_cost': self.container_cost,
            'total_cost': self.total_cost,
            'headcount': self.headcount,
            'extended_total': self.extended_total,
            'unavailable_menu_ids': list(self.unavailable_menu_ids),
            'unpriced_container_ids': list(self.unpriced_container_ids),
            'complete': not self.unavailable_menu_ids and not self.unpriced_container_ids,
        }


@dataclass(frozen=True)
class CookingPlan:
    """Everything computed for one company and date. Built fresh per read."""
    date: date
    meal_portions: Tuple[dict, ...] = ()
    meal_plans: Tuple[MealPlanRecord, ...] = ()
    menu_portions: Tuple[MenuPortion, ...] = ()
    ingredient_requirements: Tuple[IngredientRequirement, ...] = ()
    container_requirements: Tuple[ContainerRequirement, ...] = ()
    menu_groups: Tuple[MenuGroup, ...] = ()
    meal_time_totals: Tuple[Tuple[str, int], ...] = ()
    cost_summary: CostSummary = field(default_factory=CostSummary)

    @property
    def is_empty(self):
        return not self.meal_plans

    def to_dict(self):
        return {
            'date': _iso(self.date),
            'meal_portions': list(self.meal_portions),
            'meal_plans': [p.to_dict() for p in self.meal_plans],
            'menu_portions': [p.to_dict() for p in self.menu_portions],
            'ingredient_requirements': [r.to_dict() for r in self.ingredient_requirements],
            'container_requirements': [r.to_dict() for r in self.container_requirements],
            'menu_groups': [g.to_dict() for g in self.menu_groups],
            'meal_time_totals': [
                {'meal_time': meal_time, 'headcount': headcount}
                for meal_time, headcount in self.meal_time_totals
            ],
            'cost_summary': self.cost_summary.to_dict(),
        }

