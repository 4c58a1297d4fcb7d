"""
Smoke tests for the cooking-plan service.
Run with: python tests/smoke.py
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault('FLASK_ENV', 'testing')

def test_app_imports():
    """Verify app can be imported without errors."""
    from app import app, db
    assert app is not None
    assert db is not None
    print("OK: App imports successfully")

def test_models_import():
    """Verify models can be imported."""
    from models import MealPlan, MealPortion, Menu, MenuContainer, Ingredient, Container, StockItem
    assert all(m is not None for m in (MealPlan, MealPortion, Menu, MenuContainer, Ingredient, Container, StockItem))
    print("OK: Models import successfully")

def test_services_import():
    """Verify the aggregation services can be imported."""
    from services import build_cooking_plan, batch_menu_details, meal_plan_cost, stock_requirements
    assert callable(build_cooking_plan)
    assert callable(batch_menu_details)
    assert callable(meal_plan_cost)
    assert callable(stock_requirements)
    print("OK: Services import successfully")

def test_validation_utils_import():
    """Verify validation utilities can be imported."""
    from utils import PayloadError, parse_meal_portions_payload, parse_iso_date
    assert issubclass(PayloadError, ValueError)
    assert callable(parse_meal_portions_payload)
    assert callable(parse_iso_date)
    print("OK: Validation utils import successfully")

def test_markers_unchanged():
    """Verify output markers have expected values."""
    from constants import UNAVAILABLE, CONTAINER_UNIT, DETAIL_UNAVAILABLE, MEAL_TIME_ORDER

    # These values are part of the API output and must not change
    assert UNAVAILABLE == '-'
    assert CONTAINER_UNIT == 'EA'
    assert DETAIL_UNAVAILABLE == 'detail unavailable'
    assert sorted(MEAL_TIME_ORDER, key=MEAL_TIME_ORDER.get) == ['breakfast', 'lunch', 'dinner']
    print("OK: Markers unchanged")

def test_app_runs():
    """Verify app can create test client and answers JSON errors."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        response = client.get('/api/companies/not-a-company/cooking-plans?date=2024-06-01')
        assert response.status_code == 404
        assert 'error' in response.get_json()
        print("OK: App answers unknown company with JSON 404")

if __name__ == '__main__':
    print("Running smoke tests...\n")

    tests = [
        test_app_imports,
        test_models_import,
        test_services_import,
        test_validation_utils_import,
        test_markers_unchanged,
        test_app_runs,
    ]

    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{'='*40}")
    if failed:
        print(f"FAILED: {failed}/{len(tests)} tests")
        sys.exit(1)
    else:
        print(f"PASSED: {len(tests)}/{len(tests)} tests")
        sys.exit(0)
