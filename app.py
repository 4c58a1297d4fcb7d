import logging
from functools import partial

from flask import Flask, abort, jsonify, request, url_for
from flask_migrate import Migrate
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import get_config
from models import (
    db, Company, Container, Ingredient, MealPlan, MealPortion, Menu, MenuContainer,
    MenuPriceHistory, OrderQuantity, AdditionalIngredient, AdditionalContainer,
)
from models.base import utcnow
from services import (
    Selection,
    batch_menu_details,
    build_cooking_plan,
    cached_ingredients_cost,
    meal_plan_cost,
    menu_cost_price,
    menu_detail,
    stock_requirements,
    summarize_dates,
)
from services.readers import (
    MealPlanSourceError,
    load_additional_items,
    load_catalog,
    load_meal_plan,
    load_meal_plans,
    load_menu_catalog,
    load_portion_rows,
)
from utils import (
    PayloadError,
    is_valid_id,
    parse_additional_item_payload,
    parse_batch_details_payload,
    parse_iso_date,
    parse_meal_portions_payload,
    parse_order_quantities_payload,
)

app = Flask(__name__)
app.config.from_object(get_config())
app.json.sort_keys = app.config['JSON_SORT_KEYS']

logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

db.init_app(app)
migrate = Migrate(app, db)


# ============================================
# ERROR HANDLERS
# ============================================

@app.errorhandler(PayloadError)
def handle_payload_error(e):
    return jsonify({'error': e.message, 'details': e.details}), 400


@app.errorhandler(MealPlanSourceError)
def handle_meal_plan_source_error(e):
    logger.error(f"Meal plan source unavailable: {e}")
    return jsonify({'error': 'Meal plans could not be loaded'}), 500


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return jsonify({'error': e.description}), e.code


# ============================================
# HELPERS
# ============================================

def _not_found(description):
    abort(404, description=description)


def get_company_or_404(company_id):
    if not is_valid_id(company_id):
        _not_found('Company not found')
    return db.get_or_404(Company, company_id, description='Company not found')


def _date_arg(name):
    return parse_iso_date(request.args.get(name), field=name)


def _commit():
    """Commit the session; on failure roll back and re-raise."""
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise


def _company_meal_plan_ids(company_id, meal_plan_ids):
    rows = MealPlan.query.with_entities(MealPlan.id).filter(
        MealPlan.company_id == company_id, MealPlan.id.in_(meal_plan_ids)).all()
    return {row[0] for row in rows}


def _check_meal_plans(company_id, portions):
    known = _company_meal_plan_ids(company_id, [meal_plan_id for meal_plan_id, _ in portions])
    unknown = [meal_plan_id for meal_plan_id, _ in portions if meal_plan_id not in known]
    if unknown:
        raise PayloadError('Unknown meal plans', [f"meal plan {meal_plan_id} not found" for meal_plan_id in unknown])


def _save_portions(company_id, plan_date, portions):
    for meal_plan_id, headcount in portions:
        db.session.add(MealPortion(
            company_id=company_id,
            date=plan_date,
            meal_plan_id=meal_plan_id,
            headcount=headcount,
        ))


def _portion_dicts(company_id, plan_date):
    rows = (MealPortion.query
            .filter_by(company_id=company_id, date=plan_date)
            .order_by(MealPortion.meal_plan_id)
            .all())
    return [
        {'id': row.id, 'meal_plan_id': row.meal_plan_id, 'headcount': row.headcount}
        for row in rows
    ]


def compute_cooking_plan(company_id, plan_date):
    meal_plans = load_meal_plans(company_id, plan_date)
    catalog = load_catalog(company_id, plan_date)
    return build_cooking_plan(plan_date, meal_plans, catalog), catalog


# ============================================
# ROUTES - COOKING PLANS
# ============================================

@app.route('/api/companies/<company_id>/cooking-plans', methods=['GET'])
def get_cooking_plans(company_id):
    get_company_or_404(company_id)

    if request.args.get('date'):
        plan_date = _date_arg('date')
        cooking_plan, _ = compute_cooking_plan(company_id, plan_date)
        return jsonify(cooking_plan.to_dict())

    if request.args.get('startDate') and request.args.get('endDate'):
        start_date = _date_arg('startDate')
        end_date = _date_arg('endDate')
        if start_date > end_date:
            raise PayloadError('Invalid date range', ['startDate must not be after endDate'])
        rows = load_portion_rows(company_id, start_date, end_date)
        return jsonify({'cooking_plans': summarize_dates(rows)})

    raise PayloadError('Missing date', ['pass date, or startDate and endDate'])


@app.route('/api/companies/<company_id>/cooking-plans', methods=['POST'])
def create_cooking_plan(company_id):
    get_company_or_404(company_id)
    plan_date, portions = parse_meal_portions_payload(request.get_json(silent=True))
    _check_meal_plans(company_id, portions)

    MealPortion.query.filter(
        MealPortion.company_id == company_id,
        MealPortion.date == plan_date,
        MealPortion.meal_plan_id.in_([meal_plan_id for meal_plan_id, _ in portions]),
    ).delete(synchronize_session=False)
    _save_portions(company_id, plan_date, portions)
    _commit()
    logger.info(f"Saved {len(portions)} meal portions for company {company_id} on {plan_date}")

    response = jsonify({'date': plan_date.isoformat(), 'meal_portions': _portion_dicts(company_id, plan_date)})
    response.status_code = 201
    response.headers['Location'] = url_for('get_cooking_plans', company_id=company_id, date=plan_date.isoformat())
    return response


@app.route('/api/companies/<company_id>/cooking-plans', methods=['PUT'])
def update_cooking_plan(company_id):
    get_company_or_404(company_id)
    plan_date, portions = parse_meal_portions_payload(request.get_json(silent=True))
    _check_meal_plans(company_id, portions)

    existing = MealPortion.query.filter_by(company_id=company_id, date=plan_date)
    if existing.count() == 0:
        _not_found(f"No cooking plan for {plan_date.isoformat()}")

    existing.delete(synchronize_session=False)
    _save_portions(company_id, plan_date, portions)
    _commit()
    logger.info(f"Replaced meal portions for company {company_id} on {plan_date}")

    return jsonify({'date': plan_date.isoformat(), 'meal_portions': _portion_dicts(company_id, plan_date)})


@app.route('/api/companies/<company_id>/cooking-plans', methods=['DELETE'])
def delete_cooking_plan(company_id):
    get_company_or_404(company_id)
    plan_date = _date_arg('date')

    deleted = MealPortion.query.filter_by(company_id=company_id, date=plan_date).delete(synchronize_session=False)
    _commit()
    logger.info(f"Deleted {deleted} meal portions for company {company_id} on {plan_date}")
    return jsonify({'date': plan_date.isoformat(), 'deleted': deleted})


# ============================================
# ROUTES - ORDER QUANTITIES
# ============================================

def _order_quantity_dicts(company_id, plan_date):
    rows = (OrderQuantity.query
            .filter_by(company_id=company_id, date=plan_date)
            .order_by(OrderQuantity.ingredient_id)
            .all())
    return [{'ingredient_id': row.ingredient_id, 'order_quantity': row.order_quantity} for row in rows]


@app.route('/api/companies/<company_id>/cooking-plans/<date_str>/order-quantities', methods=['GET'])
def get_order_quantities(company_id, date_str):
    get_company_or_404(company_id)
    plan_date = parse_iso_date(date_str)
    return jsonify({'date': date_str, 'order_quantities': _order_quantity_dicts(company_id, plan_date)})


@app.route('/api/companies/<company_id>/cooking-plans/<date_str>/order-quantities', methods=['PUT'])
def save_order_quantities(company_id, date_str):
    get_company_or_404(company_id)
    plan_date = parse_iso_date(date_str)
    items = parse_order_quantities_payload(request.get_json(silent=True))

    for ingredient_id, quantity in items:
        row = OrderQuantity.query.filter_by(
            company_id=company_id, date=plan_date, ingredient_id=ingredient_id).first()
        if row:
            row.order_quantity = quantity
        else:
            db.session.add(OrderQuantity(
                company_id=company_id, date=plan_date,
                ingredient_id=ingredient_id, order_quantity=quantity,
            ))
    _commit()

    return jsonify({'date': date_str, 'order_quantities': _order_quantity_dicts(company_id, plan_date)})


# ============================================
# ROUTES - ADDITIONAL ITEMS
# ============================================

ADDITIONAL_KINDS = {
    'additional-ingredients': (AdditionalIngredient, Ingredient, 'ingredient_id'),
    'additional-containers': (AdditionalContainer, Container, 'container_id'),
}


def _additional_kind_or_404(kind):
    if kind not in ADDITIONAL_KINDS:
        _not_found('Not found')
    return ADDITIONAL_KINDS[kind]


def _additional_dicts(model, id_field, company_id, plan_date):
    rows = model.query.filter_by(company_id=company_id, date=plan_date).order_by(model.id).all()
    return [
        {
            id_field: getattr(row, id_field),
            'name': row.ingredient.name if id_field == 'ingredient_id' else row.container.name,
            'quantity': row.quantity,
        }
        for row in rows
    ]


@app.route('/api/companies/<company_id>/cooking-plans/<date_str>/<kind>', methods=['GET'])
def list_additional_items(company_id, date_str, kind):
    get_company_or_404(company_id)
    model, _, id_field = _additional_kind_or_404(kind)
    plan_date = parse_iso_date(date_str)
    return jsonify({'date': date_str, 'items': _additional_dicts(model, id_field, company_id, plan_date)})


@app.route('/api/companies/<company_id>/cooking-plans/<date_str>/<kind>', methods=['POST'])
def add_additional_item(company_id, date_str, kind):
    get_company_or_404(company_id)
    model, master_model, id_field = _additional_kind_or_404(kind)
    plan_date = parse_iso_date(date_str)
    item_id, quantity = parse_additional_item_payload(request.get_json(silent=True), id_field)

    if master_model.query.filter_by(company_id=company_id, id=item_id).first() is None:
        raise PayloadError('Unknown item', [f"{id_field} {item_id} not found"])

    row = model.query.filter_by(company_id=company_id, date=plan_date, **{id_field: item_id}).first()
    if row:
        row.quantity = quantity
    else:
        db.session.add(model(company_id=company_id, date=plan_date, quantity=quantity, **{id_field: item_id}))
    _commit()

    return jsonify({'date': date_str, 'items': _additional_dicts(model, id_field, company_id, plan_date)}), 201


@app.route('/api/companies/<company_id>/cooking-plans/<date_str>/<kind>/<item_id>', methods=['DELETE'])
def delete_additional_item(company_id, date_str, kind, item_id):
    get_company_or_404(company_id)
    model, _, id_field = _additional_kind_or_404(kind)
    plan_date = parse_iso_date(date_str)

    row = model.query.filter_by(company_id=company_id, date=plan_date, **{id_field: item_id}).first()
    if row is None:
        _not_found('Item not found')
    db.session.delete(row)
    _commit()
    return jsonify({'date': date_str, 'deleted': item_id})


@app.route('/api/companies/<company_id>/cooking-plans/<date_str>/stock-requirements', methods=['GET'])
def get_stock_requirements(company_id, date_str):
    get_company_or_404(company_id)
    plan_date = parse_iso_date(date_str)

    cooking_plan, catalog = compute_cooking_plan(company_id, plan_date)
    additional_ingredients, additional_containers = load_additional_items(company_id, plan_date)

    result = {'date': date_str}
    if cooking_plan.is_empty and not additional_ingredients and not additional_containers:
        result.update({'ingredients': [], 'containers': [], 'message': 'No cooking plan for this date'})
        return jsonify(result)

    result.update(stock_requirements(cooking_plan, catalog, additional_ingredients, additional_containers))
    return jsonify(result)


# ============================================
# ROUTES - MEAL PLANS
# ============================================

def _fetch_menu_detail(company_id, selection):
    # Runs in a worker thread: needs its own app context and session
    with app.app_context():
        catalog = load_menu_catalog(company_id, selection.menu_id, selection.container_id)
        return menu_detail(catalog, selection.menu_id, selection.container_id)


@app.route('/api/companies/<company_id>/meal-plans/menus/batch-details', methods=['POST'])
def batch_details(company_id):
    get_company_or_404(company_id)
    pairs = parse_batch_details_payload(request.get_json(silent=True))
    selections = [Selection(menu_id=menu_id, container_id=container_id) for menu_id, container_id in pairs]

    rows = batch_menu_details(
        selections,
        partial(_fetch_menu_detail, company_id),
        max_workers=app.config['DETAIL_FETCH_WORKERS'],
        timeout=app.config['DETAIL_FETCH_TIMEOUT'],
    )
    return jsonify({'menus': rows})


@app.route('/api/companies/<company_id>/meal-plans/<meal_plan_id>/cost', methods=['GET'])
def get_meal_plan_cost(company_id, meal_plan_id):
    get_company_or_404(company_id)
    plan_date = _date_arg('date') if request.args.get('date') else None

    plan, headcount = load_meal_plan(company_id, meal_plan_id, plan_date)
    if plan is None:
        _not_found('Meal plan not found')

    catalog = load_catalog(company_id)
    return jsonify(meal_plan_cost(plan, catalog, headcount).to_dict())


# ============================================
# ROUTES - MENU COSTS
# ============================================

@app.route('/api/companies/<company_id>/menu-containers/recalculate-costs', methods=['POST'])
def recalculate_menu_container_costs(company_id):
    """
    Refresh cached menu-container ingredient costs from their recipes.

    By default only rows without a cached cost (null or 0) are refreshed;
    ?all=true refreshes every row. Each touched menu gets its cost_price
    recomputed and a price-history entry when it changed; a menu whose
    containers give no positive total keeps its cost_price.
    """
    get_company_or_404(company_id)
    refresh_all = request.args.get('all', '').lower() in ('1', 'true', 'yes')
    catalog = load_catalog(company_id)

    query = MenuContainer.query.join(Menu).filter(Menu.company_id == company_id)
    if not refresh_all:
        query = query.filter(or_(MenuContainer.ingredients_cost.is_(None), MenuContainer.ingredients_cost == 0))

    details = []
    touched_menu_ids = set()
    for row in query.all():
        record = catalog.recipe(row.menu_id, row.container_id or None)
        cost = cached_ingredients_cost(record, catalog.ingredients) if record else None
        if cost is None:
            details.append({'menu_container_id': row.id, 'success': False, 'reason': 'no priced ingredients'})
            continue
        row.ingredients_cost = cost
        touched_menu_ids.add(row.menu_id)
        details.append({'menu_container_id': row.id, 'menu_id': row.menu_id,
                        'ingredients_cost': cost, 'success': True})

    for menu_id in sorted(touched_menu_ids):
        menu = db.session.get(Menu, menu_id)
        total = menu_cost_price(mc.ingredients_cost for mc in menu.menu_containers)
        if total > 0 and menu.cost_price != total:
            menu.cost_price = total
            db.session.add(MenuPriceHistory(menu_id=menu.id, cost_price=total, recorded_at=utcnow()))

    _commit()
    updated = sum(1 for d in details if d['success'])
    logger.info(f"Recalculated {updated} menu container costs for company {company_id}")
    return jsonify({'updated': updated, 'details': details})


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db():
    with app.app_context():
        # Enable SQLite foreign key enforcement
        from sqlalchemy import event
        from sqlalchemy.engine import Engine
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()


if __name__ == '__main__':
    init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
