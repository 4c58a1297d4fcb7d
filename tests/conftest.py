import os
import sys
from datetime import date, datetime

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Must be set before the app module reads its configuration
os.environ['FLASK_ENV'] = 'testing'

from app import app as flask_app  # noqa: E402
from models import (  # noqa: E402
    db, Company, Supplier, Ingredient, Container, Menu, MenuPriceHistory, MenuContainer,
    MenuContainerIngredient, MealPlan, MealPlanMenu, StockItem,
)
from services.records import (  # noqa: E402
    Catalog, ContainerMaster, IngredientMaster, MealPlanRecord, MenuContainerRecord,
    MenuMaster, RecipeLine, Selection, StockSnapshot,
)

PLAN_DATE = date(2024, 6, 1)


@pytest.fixture
def app_ctx():
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app_ctx):
    return app_ctx.test_client()


# ============================================
# IN-MEMORY RECORDS
# ============================================

@pytest.fixture
def scenario_plans():
    """Two lunch plans: A (50) picks X and Y in container A; B (30) picks X in container B."""
    plan_a = MealPlanRecord(
        id='plan-a', date=PLAN_DATE, meal_time='lunch', name='Office A', headcount=50,
        selections=(
            Selection('menu-x', 'Bulgogi', 'cont-a', 'Box A'),
            Selection('menu-y', 'Kimchi Stew', 'cont-a', 'Box A'),
        ),
    )
    plan_b = MealPlanRecord(
        id='plan-b', date=PLAN_DATE, meal_time='lunch', name='Office B', headcount=30,
        selections=(Selection('menu-x', 'Bulgogi', 'cont-b', 'Box B'),),
    )
    return [plan_a, plan_b]


@pytest.fixture
def scenario_catalog():
    """
    Rice 0.5/g, beef 20/g, salt without a package amount.

    X in A and X in B: rice 100, beef 50 (cached cost 1050)
    Y in A: rice 80, salt 2 (no cached cost)
    """
    return Catalog.build(
        menus=[
            MenuMaster('menu-x', 'Bulgogi', cost_price=1050.0),
            MenuMaster('menu-y', 'Kimchi Stew'),
        ],
        menu_containers=[
            MenuContainerRecord('menu-x', 'cont-a', 1050.0, (
                RecipeLine('ing-rice', 100, 'Rice', 'g'),
                RecipeLine('ing-beef', 50, 'Beef', 'g'),
            ), id='mc-xa'),
            MenuContainerRecord('menu-y', 'cont-a', None, (
                RecipeLine('ing-rice', 80, 'Rice', 'g'),
                RecipeLine('ing-salt', 2, 'Salt', 'g'),
            ), id='mc-ya'),
            MenuContainerRecord('menu-x', 'cont-b', 1050.0, (
                RecipeLine('ing-rice', 100, 'Rice', 'g'),
                RecipeLine('ing-beef', 50, 'Beef', 'g'),
            ), id='mc-xb'),
        ],
        ingredients=[
            IngredientMaster('ing-rice', 'Rice', 'g', price=5000.0, package_amount=10000.0,
                             code_name='R-01', supplier='Grain Co', stock_grade='A', calories=36000.0),
            IngredientMaster('ing-beef', 'Beef', 'g', price=20000.0, package_amount=1000.0,
                             code_name='B-01', stock_grade='A'),
            IngredientMaster('ing-salt', 'Salt', 'g', price=1000.0, package_amount=0.0),
        ],
        containers=[
            ContainerMaster('cont-a', 'Box A', 'CA', price=300.0),
            ContainerMaster('cont-b', 'Box B', 'CB', price=500.0, parent_container_id='cont-group'),
        ],
        stock=[
            StockSnapshot('ing-rice', 8000.0, datetime(2024, 5, 31, 18, 0)),
            StockSnapshot('cont-group', 100.0, datetime(2024, 5, 31, 18, 0), item_type='container'),
        ],
        order_quantities={'ing-rice': 2.0},
    )


# ============================================
# DATABASE ROWS
# ============================================

@pytest.fixture
def seeded(app_ctx):
    """The same two-plan scenario stored in the database; returns the ids."""
    company = Company(name='LunchLab Kitchen')
    other_company = Company(name='Other Kitchen')
    db.session.add_all([company, other_company])
    db.session.flush()

    supplier = Supplier(company_id=company.id, name='Grain Co')
    db.session.add(supplier)
    db.session.flush()

    rice = Ingredient(company_id=company.id, name='Rice', unit='g', price=5000.0, package_amount=10000.0,
                      code_name='R-01', supplier='free text', supplier_id=supplier.id, stock_grade='A',
                      calories=36000.0)
    beef = Ingredient(company_id=company.id, name='Beef', unit='g', price=20000.0, package_amount=1000.0,
                      code_name='B-01', stock_grade='A')
    salt = Ingredient(company_id=company.id, name='Salt', unit='g', price=1000.0, package_amount=0.0)
    group = Container(company_id=company.id, name='Box Group')
    db.session.add_all([rice, beef, salt, group])
    db.session.flush()

    box_a = Container(company_id=company.id, name='Box A', code_name='CA', price=300.0)
    box_b = Container(company_id=company.id, name='Box B', code_name='CB', price=500.0,
                      parent_container_id=group.id)
    menu_x = Menu(company_id=company.id, name='Bulgogi', cost_price=1050.0)
    menu_y = Menu(company_id=company.id, name='Kimchi Stew')
    db.session.add_all([box_a, box_b, menu_x, menu_y])
    db.session.flush()

    def recipe(menu, container, cost, lines):
        mc = MenuContainer(menu_id=menu.id, container_id=container.id, ingredients_cost=cost)
        db.session.add(mc)
        db.session.flush()
        for position, (ingredient, amount) in enumerate(lines):
            db.session.add(MenuContainerIngredient(
                menu_container_id=mc.id, ingredient_id=ingredient.id,
                ingredient_name=ingredient.name, unit=ingredient.unit,
                amount=amount, position=position,
            ))
        return mc

    mc_xa = recipe(menu_x, box_a, 1050.0, [(rice, 100), (beef, 50)])
    mc_ya = recipe(menu_y, box_a, None, [(rice, 80), (salt, 2)])
    mc_xb = recipe(menu_x, box_b, 1050.0, [(rice, 100), (beef, 50)])
    db.session.add(MenuPriceHistory(menu_id=menu_y.id, cost_price=45.0, recorded_at=datetime(2024, 5, 1)))

    plan_a = MealPlan(company_id=company.id, name='Office A', date=PLAN_DATE, meal_time='lunch')
    plan_b = MealPlan(company_id=company.id, name='Office B', date=PLAN_DATE, meal_time='lunch')
    foreign_plan = MealPlan(company_id=other_company.id, name='Elsewhere', date=PLAN_DATE, meal_time='lunch')
    db.session.add_all([plan_a, plan_b, foreign_plan])
    db.session.flush()
    db.session.add_all([
        MealPlanMenu(meal_plan_id=plan_a.id, menu_id=menu_x.id, menu_name='Bulgogi',
                     container_id=box_a.id, container_name='Box A', position=0),
        MealPlanMenu(meal_plan_id=plan_a.id, menu_id=menu_y.id, menu_name='Kimchi Stew',
                     container_id=box_a.id, container_name='Box A', position=1),
        MealPlanMenu(meal_plan_id=plan_b.id, menu_id=menu_x.id, menu_name='Bulgogi',
                     container_id=box_b.id, container_name='Box B', position=0),
    ])

    db.session.add_all([
        StockItem(company_id=company.id, item_type='ingredient', item_id=rice.id,
                  current_quantity=8000.0, unit='g'),
        StockItem(company_id=company.id, item_type='container', item_id=group.id,
                  current_quantity=100.0, unit='EA'),
    ])
    db.session.commit()

    return {
        'company': company.id,
        'other_company': other_company.id,
        'rice': rice.id,
        'beef': beef.id,
        'salt': salt.id,
        'box_a': box_a.id,
        'box_b': box_b.id,
        'group': group.id,
        'menu_x': menu_x.id,
        'menu_y': menu_y.id,
        'mc_xa': mc_xa.id,
        'mc_ya': mc_ya.id,
        'mc_xb': mc_xb.id,
        'plan_a': plan_a.id,
        'plan_b': plan_b.id,
        'foreign_plan': foreign_plan.id,
    }
