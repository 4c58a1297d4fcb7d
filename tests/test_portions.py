from conftest import PLAN_DATE
from services.portions import (
    aggregate_menu_portions,
    expand_portions,
    group_menus_by_name,
    meal_time_totals,
)
from services.records import MealPlanRecord, Selection


def _rows(portions):
    return [(p.menu_id, p.container_id, p.headcount) for p in portions]


def test_expand_one_seed_per_selection(scenario_plans):
    seeds = expand_portions(scenario_plans)
    assert [(s.meal_plan_id, s.menu_id, s.container_id, s.headcount) for s in seeds] == [
        ('plan-a', 'menu-x', 'cont-a', 50),
        ('plan-a', 'menu-y', 'cont-a', 50),
        ('plan-b', 'menu-x', 'cont-b', 30),
    ]


def test_expand_plan_without_selections_yields_nothing():
    empty = MealPlanRecord(id='p', date=PLAN_DATE, meal_time='dinner', name='Empty', headcount=10)
    assert expand_portions([empty]) == []


def test_expand_duplicate_selection_in_one_plan_counts_once():
    plan = MealPlanRecord(
        id='p', date=PLAN_DATE, meal_time='lunch', name='Dup', headcount=10,
        selections=(Selection('m', 'Soup', 'c', 'Cup'), Selection('m', 'Soup', 'c', 'Cup')),
    )
    portions = aggregate_menu_portions(expand_portions([plan]))
    assert _rows(portions) == [('m', 'c', 10)]


def test_scenario_menu_portions(scenario_plans, scenario_catalog):
    portions = aggregate_menu_portions(expand_portions(scenario_plans), scenario_catalog)
    assert _rows(portions) == [
        ('menu-x', 'cont-a', 50),
        ('menu-x', 'cont-b', 30),
        ('menu-y', 'cont-a', 50),
    ]
    assert portions[0].source_meal_plan_ids == {'plan-a'}
    assert all(p.has_ingredient_data for p in portions)


def test_same_menu_and_container_merged_across_plans():
    plans = [
        MealPlanRecord(id=pid, date=PLAN_DATE, meal_time='lunch', name=pid, headcount=count,
                       selections=(Selection('m', 'Soup', 'c', 'Cup'),))
        for pid, count in (('p1', 20), ('p2', 15))
    ]
    portions = aggregate_menu_portions(expand_portions(plans))
    assert _rows(portions) == [('m', 'c', 35)]
    assert portions[0].source_meal_plan_ids == {'p1', 'p2'}


def test_reaggregating_the_same_seeds_is_idempotent(scenario_plans):
    seeds = expand_portions(scenario_plans)
    once = aggregate_menu_portions(seeds)
    twice = aggregate_menu_portions(seeds + seeds)
    assert [p.to_dict() for p in once] == [p.to_dict() for p in twice]


def test_no_container_is_its_own_group():
    plan = MealPlanRecord(
        id='p', date=PLAN_DATE, meal_time='lunch', name='Mixed', headcount=12,
        selections=(Selection('m', 'Soup', None, None), Selection('m', 'Soup', 'c', 'Cup')),
    )
    portions = aggregate_menu_portions(expand_portions([plan]))
    assert _rows(portions) == [('m', None, 12), ('m', 'c', 12)]
    assert portions[0].to_dict()['container_id'] is None


def test_missing_recipe_flags_portion(scenario_catalog):
    plan = MealPlanRecord(
        id='p', date=PLAN_DATE, meal_time='lunch', name='New', headcount=5,
        selections=(Selection('menu-x', 'Bulgogi', 'cont-z', 'Tray'),),
    )
    portions = aggregate_menu_portions(expand_portions([plan]), scenario_catalog)
    assert not portions[0].has_ingredient_data
    assert portions[0].to_dict()['note'] == 'no ingredient data'


def test_portions_ordered_by_meal_time_then_name():
    plans = [
        MealPlanRecord(id='d', date=PLAN_DATE, meal_time='dinner', name='D', headcount=1,
                       selections=(Selection('m1', 'Apple', None, None),)),
        MealPlanRecord(id='o', date=PLAN_DATE, meal_time=None, name='O', headcount=1,
                       selections=(Selection('m2', 'Apple', None, None),)),
        MealPlanRecord(id='b', date=PLAN_DATE, meal_time='breakfast', name='B', headcount=1,
                       selections=(Selection('m3', 'Zucchini', None, None), Selection('m4', 'Bread', None, None))),
    ]
    portions = aggregate_menu_portions(expand_portions(plans))
    assert [(p.meal_time, p.menu_name) for p in portions] == [
        ('breakfast', 'Bread'),
        ('breakfast', 'Zucchini'),
        ('dinner', 'Apple'),
        ('other', 'Apple'),
    ]


def test_group_menus_by_name(scenario_plans, scenario_catalog):
    portions = aggregate_menu_portions(expand_portions(scenario_plans), scenario_catalog)
    groups = group_menus_by_name(portions, scenario_catalog)

    bulgogi, stew = groups
    assert bulgogi.menu_name == 'Bulgogi'
    assert bulgogi.headcount == 80
    assert [c.to_dict() for c in bulgogi.containers_info] == [
        {'name': 'Box A', 'headcount': 50},
        {'name': 'Box B', 'headcount': 30},
    ]
    assert [(i.name, i.amount) for i in bulgogi.ingredients] == [('Beef', 4000.0), ('Rice', 8000.0)]

    assert stew.headcount == 50
    assert [(i.name, i.amount) for i in stew.ingredients] == [('Rice', 4000.0), ('Salt', 100.0)]


def test_group_without_container_uses_default_label(scenario_catalog):
    plan = MealPlanRecord(
        id='p', date=PLAN_DATE, meal_time='lunch', name='Bare', headcount=7,
        selections=(Selection('menu-x', 'Bulgogi', None, None),),
    )
    groups = group_menus_by_name(aggregate_menu_portions(expand_portions([plan])), scenario_catalog)
    assert groups[0].containers_info[0].name == 'Default'
    assert groups[0].ingredients == ()


def test_meal_time_totals_count_each_plan_once(scenario_plans):
    breakfast = MealPlanRecord(id='p3', date=PLAN_DATE, meal_time='breakfast', name='Early', headcount=12)
    totals = meal_time_totals([breakfast] + scenario_plans + [scenario_plans[0]])
    assert totals == (('breakfast', 12), ('lunch', 80))
