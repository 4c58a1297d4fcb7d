from conftest import PLAN_DATE
from services.containers import aggregate_container_requirements, container_cost_total, distinct_containers
from services.portions import expand_portions
from services.records import Catalog, MealPlanRecord, Selection


def _requirements(plans, catalog):
    return {r.container_id: r for r in aggregate_container_requirements(expand_portions(plans), catalog)}


def test_container_counted_once_per_plan(scenario_plans, scenario_catalog):
    reqs = _requirements(scenario_plans, scenario_catalog)
    # Plan A uses container A for two menus: 50, not 100
    assert reqs['cont-a'].needed_quantity == 50
    assert reqs['cont-b'].needed_quantity == 30


def test_container_summed_across_plans(scenario_catalog):
    plans = [
        MealPlanRecord(id=pid, date=PLAN_DATE, meal_time='lunch', name=pid, headcount=count,
                       selections=(Selection('menu-x', 'Bulgogi', 'cont-a', 'Box A'),))
        for pid, count in (('p1', 20), ('p2', 15))
    ]
    assert _requirements(plans, scenario_catalog)['cont-a'].needed_quantity == 35


def test_price_and_total(scenario_plans, scenario_catalog):
    reqs = _requirements(scenario_plans, scenario_catalog)
    assert reqs['cont-a'].total_price == 300.0 * 50
    assert reqs['cont-b'].total_price == 500.0 * 30
    assert reqs['cont-a'].to_dict()['unit'] == 'EA'

    total, unpriced = container_cost_total(reqs.values())
    assert total == 15000.0 + 15000.0
    assert unpriced == ()


def test_group_stock_read_from_parent(scenario_plans, scenario_catalog):
    reqs = _requirements(scenario_plans, scenario_catalog)
    assert reqs['cont-b'].stock_source_id == 'cont-group'
    assert reqs['cont-b'].is_group_stock
    assert reqs['cont-b'].current_stock == 100.0

    assert reqs['cont-a'].stock_source_id == 'cont-a'
    assert not reqs['cont-a'].is_group_stock
    assert reqs['cont-a'].current_stock is None


def test_deleted_container_keeps_captured_name_and_is_unpriced():
    plan = MealPlanRecord(id='p', date=PLAN_DATE, meal_time='lunch', name='P', headcount=8,
                          selections=(Selection('m', 'Soup', 'cont-old', 'Old Bowl'),))
    req = _requirements([plan], Catalog())['cont-old']

    assert req.name == 'Old Bowl'
    assert req.needed_quantity == 8
    assert req.total_price == 0.0
    assert not req.priced
    assert req.to_dict()['note'] == 'unpriced'
    assert container_cost_total([req]) == (0.0, ('cont-old',))


def test_no_container_selections_are_not_counted(scenario_catalog):
    plan = MealPlanRecord(id='p', date=PLAN_DATE, meal_time='lunch', name='P', headcount=8,
                          selections=(Selection('menu-x', 'Bulgogi', None, None),))
    assert _requirements([plan], scenario_catalog) == {}


def test_distinct_containers_first_seen_order():
    selections = (
        Selection('m1', 'A', 'c2', 'Two'),
        Selection('m2', 'B', None, None),
        Selection('m3', 'C', 'c1', 'One'),
        Selection('m4', 'D', 'c2', 'Two'),
    )
    assert distinct_containers(selections) == [('c2', 'Two'), ('c1', 'One')]
