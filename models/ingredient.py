"""
Ingredient Model

Contains the Ingredient master used for recipe costing and stock.
"""

from .base import db, new_id, utcnow


class Ingredient(db.Model):
    """
    Ingredient bought in packages.

    Pricing:
    - price is what one package costs
    - package_amount is how many units (unit) one package holds
    - the price of one unit is price / package_amount; it is unknown
      when package_amount is missing or zero
    """
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    code_name = db.Column(db.String(50), nullable=True, index=True)
    unit = db.Column(db.String(20), default='g')

    price = db.Column(db.Float, nullable=True)
    package_amount = db.Column(db.Float, nullable=True)

    # Free-text supplier, used when supplier_id does not resolve
    supplier = db.Column(db.String(200), nullable=True)
    supplier_id = db.Column(db.String(36), db.ForeignKey('supplier.id', ondelete='SET NULL'), nullable=True)

    # Only ingredients with a stock grade appear in stock requirements
    stock_grade = db.Column(db.String(20), nullable=True)

    # Calories per package
    calories = db.Column(db.Float, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    supplier_ref = db.relationship('Supplier')
