"""
Stock Model

Contains the StockItem model: on-hand quantity of an ingredient or a
container.
"""

from .base import db, utcnow


class StockItem(db.Model):
    """Current on-hand quantity of one ingredient or container."""
    __table_args__ = (db.UniqueConstraint('company_id', 'item_type', 'item_id'),)

    id = db.Column(db.Integer, primary_key=True)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    item_type = db.Column(db.String(20), nullable=False)  # 'ingredient' or 'container'
    item_id = db.Column(db.String(36), nullable=False, index=True)
    current_quantity = db.Column(db.Float, nullable=False, default=0.0)
    unit = db.Column(db.String(20), nullable=True)
    last_updated = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)
