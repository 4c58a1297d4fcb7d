"""
Container Model

Contains the Container master (physical serving vessels).
"""

from .base import db, new_id, utcnow


class Container(db.Model):
    """Serving vessel with a unit price; stock may be tracked on a parent group."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    code_name = db.Column(db.String(50), nullable=True, index=True)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Float, nullable=True)

    # Stock for grouped containers is counted on the parent
    parent_container_id = db.Column(db.String(36), db.ForeignKey('container.id', ondelete='SET NULL'), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
