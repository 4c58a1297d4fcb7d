"""
Company Models

Contains the Company (tenant) and Supplier models. Every other record
is scoped by company_id.
"""

from .base import db, new_id, utcnow


class Company(db.Model):
    """Tenant owning menus, containers, ingredients and meal plans."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(200), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)


class Supplier(db.Model):
    """Ingredient supplier; its name wins over an ingredient's free-text supplier."""
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company_id = db.Column(db.String(36), db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
