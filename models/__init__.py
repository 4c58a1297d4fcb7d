"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .company import Company, Supplier
from .ingredient import Ingredient
from .container import Container
from .menu import Menu, MenuPriceHistory, MenuContainer, MenuContainerIngredient
from .mealplan import MealPlan, MealPlanMenu
from .cooking_plan import MealPortion, OrderQuantity, AdditionalIngredient, AdditionalContainer
from .stock import StockItem

__all__ = [
    'db',
    'Company',
    'Supplier',
    'Ingredient',
    'Container',
    'Menu',
    'MenuPriceHistory',
    'MenuContainer',
    'MenuContainerIngredient',
    'MealPlan',
    'MealPlanMenu',
    'MealPortion',
    'OrderQuantity',
    'AdditionalIngredient',
    'AdditionalContainer',
    'StockItem',
]
