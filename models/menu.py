"""
Menu Models

Contains the Menu, its price history and the menu-container join that
holds the per-serving recipe of a menu in one container.
"""

from .base import db, new_id, utcnow


class Menu(db.Model):
    """Menu with a cost price and its per-container recipes."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    cost_price = db.Column(db.Float, nullable=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    price_history = db.relationship('MenuPriceHistory', backref='menu', lazy=True, cascade='all, delete-orphan')
    menu_containers = db.relationship('MenuContainer', backref='menu', lazy=True, cascade='all, delete-orphan')


class MenuPriceHistory(db.Model):
    """Cost price snapshots of a menu; recorded_at may be missing on imported rows."""
    id = db.Column(db.Integer, primary_key=True)
    menu_id = db.Column(db.String(36), db.ForeignKey('menu.id', ondelete='CASCADE'), nullable=False, index=True)
    cost_price = db.Column(db.Float, nullable=True)
    recorded_at = db.Column(db.DateTime(timezone=True), nullable=True)


class MenuContainer(db.Model):
    """Join linking a menu to a container (or to no container) with a cached ingredient cost."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    menu_id = db.Column(db.String(36), db.ForeignKey('menu.id', ondelete='CASCADE'), nullable=False, index=True)
    # Plain reference: deleting a container keeps its recipes
    container_id = db.Column(db.String(36), nullable=True, index=True)
    ingredients_cost = db.Column(db.Float, nullable=True)

    ingredients = db.relationship('MenuContainerIngredient', backref='menu_container', lazy=True,
                                  cascade='all, delete-orphan', order_by='MenuContainerIngredient.position')


class MenuContainerIngredient(db.Model):
    """
    One recipe line: amount of an ingredient per serving.

    ingredient_id is a plain reference; the name and unit are copied at
    entry time so the line survives deletion of the ingredient.
    """
    id = db.Column(db.Integer, primary_key=True)
    menu_container_id = db.Column(db.String(36), db.ForeignKey('menu_container.id', ondelete='CASCADE'),
                                  nullable=False, index=True)
    ingredient_id = db.Column(db.String(36), nullable=False, index=True)
    ingredient_name = db.Column(db.String(200), nullable=False, default='')
    unit = db.Column(db.String(20), nullable=True)
    amount = db.Column(db.Float, nullable=False, default=0.0)
    position = db.Column(db.Integer, nullable=False, default=0)
