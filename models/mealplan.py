"""
Meal Plan Models

Contains the MealPlan model and its ordered menu/container selections.
"""

from .base import db, new_id, utcnow


class MealPlan(db.Model):
    """Dated, meal-time scoped selection of menus (edited through the calendar)."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False, default='')
    date = db.Column(db.Date, nullable=False, index=True)
    meal_time = db.Column(db.String(20), nullable=True)  # 'breakfast', 'lunch', 'dinner'
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    menus = db.relationship('MealPlanMenu', backref='meal_plan', lazy=True,
                            cascade='all, delete-orphan', order_by='MealPlanMenu.position')


class MealPlanMenu(db.Model):
    """
    One (menu, container) selection of a meal plan.

    menu_id/container_id are plain references with names captured at
    selection time; container_id is empty when the menu is served
    without a tracked container.
    """
    id = db.Column(db.Integer, primary_key=True)
    meal_plan_id = db.Column(db.String(36), db.ForeignKey('meal_plan.id', ondelete='CASCADE'), nullable=False, index=True)
    menu_id = db.Column(db.String(36), nullable=False, index=True)
    menu_name = db.Column(db.String(200), nullable=False, default='')
    container_id = db.Column(db.String(36), nullable=True, index=True)
    container_name = db.Column(db.String(200), nullable=True)
    position = db.Column(db.Integer, nullable=False, default=0)
