"""
Cooking Plan Models

Contains the per-day records a cooking plan is computed from or
annotated with: meal portions (headcounts), saved order quantities and
manually added ingredients/containers.
"""

from .base import db, new_id, utcnow


class MealPortion(db.Model):
    """Headcount of one meal plan on one date."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    meal_plan_id = db.Column(db.String(36), db.ForeignKey('meal_plan.id', ondelete='CASCADE'), nullable=False, index=True)
    headcount = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    meal_plan = db.relationship('MealPlan')


class OrderQuantity(db.Model):
    """Quantity the kitchen decided to order for an ingredient on a date."""
    __table_args__ = (db.UniqueConstraint('company_id', 'date', 'ingredient_id'),)

    id = db.Column(db.Integer, primary_key=True)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    ingredient_id = db.Column(db.String(36), nullable=False)
    order_quantity = db.Column(db.Float, nullable=False, default=0.0)


class AdditionalIngredient(db.Model):
    """Ingredient added to a day's stock requirements by hand."""
    __tablename__ = 'cooking_plan_additional_ingredient'
    __table_args__ = (db.UniqueConstraint('company_id', 'date', 'ingredient_id'),)

    id = db.Column(db.Integer, primary_key=True)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    ingredient_id = db.Column(db.String(36), db.ForeignKey('ingredient.id', ondelete='CASCADE'), nullable=False)
    quantity = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    ingredient = db.relationship('Ingredient')


class AdditionalContainer(db.Model):
    """Container added to a day's stock requirements by hand."""
    __tablename__ = 'cooking_plan_additional_container'
    __table_args__ = (db.UniqueConstraint('company_id', 'date', 'container_id'),)

    id = db.Column(db.Integer, primary_key=True)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    container_id = db.Column(db.String(36), db.ForeignKey('container.id', ondelete='CASCADE'), nullable=False)
    quantity = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    container = db.relationship('Container')
