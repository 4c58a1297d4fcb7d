"""Initial cooking plan schema

Revision ID: 4b9d2e7c1a30
Revises:
Create Date: 2026-10-19 09:12:41.518204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b9d2e7c1a30'
down_revision = None
branch_labels = None
depends_on = None


def _company_fk():
    return sa.ForeignKeyConstraint(['company_id'], ['company.id'], ondelete='CASCADE')


def upgrade():
    op.create_table(
        'company',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'supplier',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        _company_fk(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_supplier_company_id', 'supplier', ['company_id'])

    op.create_table(
        'ingredient',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('code_name', sa.String(length=50), nullable=True),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('package_amount', sa.Float(), nullable=True),
        sa.Column('supplier', sa.String(length=200), nullable=True),
        sa.Column('supplier_id', sa.String(length=36), nullable=True),
        sa.Column('stock_grade', sa.String(length=20), nullable=True),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        _company_fk(),
        sa.ForeignKeyConstraint(['supplier_id'], ['supplier.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_ingredient_company_id', 'ingredient', ['company_id'])
    op.create_index('ix_ingredient_name', 'ingredient', ['name'])
    op.create_index('ix_ingredient_code_name', 'ingredient', ['code_name'])

    op.create_table(
        'container',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('code_name', sa.String(length=50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('parent_container_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        _company_fk(),
        sa.ForeignKeyConstraint(['parent_container_id'], ['container.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_container_company_id', 'container', ['company_id'])
    op.create_index('ix_container_code_name', 'container', ['code_name'])

    op.create_table(
        'menu',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cost_price', sa.Float(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        _company_fk(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_menu_company_id', 'menu', ['company_id'])
    op.create_index('ix_menu_name', 'menu', ['name'])

    op.create_table(
        'menu_price_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('menu_id', sa.String(length=36), nullable=False),
        sa.Column('cost_price', sa.Float(), nullable=True),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['menu_id'], ['menu.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_menu_price_history_menu_id', 'menu_price_history', ['menu_id'])

    op.create_table(
        'menu_container',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('menu_id', sa.String(length=36), nullable=False),
        sa.Column('container_id', sa.String(length=36), nullable=True),
        sa.Column('ingredients_cost', sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(['menu_id'], ['menu.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_menu_container_menu_id', 'menu_container', ['menu_id'])
    op.create_index('ix_menu_container_container_id', 'menu_container', ['container_id'])

    op.create_table(
        'menu_container_ingredient',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('menu_container_id', sa.String(length=36), nullable=False),
        sa.Column('ingredient_id', sa.String(length=36), nullable=False),
        sa.Column('ingredient_name', sa.String(length=200), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['menu_container_id'], ['menu_container.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_menu_container_ingredient_menu_container_id', 'menu_container_ingredient',
                    ['menu_container_id'])
    op.create_index('ix_menu_container_ingredient_ingredient_id', 'menu_container_ingredient', ['ingredient_id'])

    op.create_table(
        'meal_plan',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('meal_time', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        _company_fk(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_meal_plan_company_id', 'meal_plan', ['company_id'])
    op.create_index('ix_meal_plan_date', 'meal_plan', ['date'])

    op.create_table(
        'meal_plan_menu',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('meal_plan_id', sa.String(length=36), nullable=False),
        sa.Column('menu_id', sa.String(length=36), nullable=False),
        sa.Column('menu_name', sa.String(length=200), nullable=False),
        sa.Column('container_id', sa.String(length=36), nullable=True),
        sa.Column('container_name', sa.String(length=200), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['meal_plan_id'], ['meal_plan.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_meal_plan_menu_meal_plan_id', 'meal_plan_menu', ['meal_plan_id'])
    op.create_index('ix_meal_plan_menu_menu_id', 'meal_plan_menu', ['menu_id'])
    op.create_index('ix_meal_plan_menu_container_id', 'meal_plan_menu', ['container_id'])

    op.create_table(
        'meal_portion',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('meal_plan_id', sa.String(length=36), nullable=False),
        sa.Column('headcount', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        _company_fk(),
        sa.ForeignKeyConstraint(['meal_plan_id'], ['meal_plan.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_meal_portion_company_id', 'meal_portion', ['company_id'])
    op.create_index('ix_meal_portion_date', 'meal_portion', ['date'])
    op.create_index('ix_meal_portion_meal_plan_id', 'meal_portion', ['meal_plan_id'])

    op.create_table(
        'order_quantity',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('ingredient_id', sa.String(length=36), nullable=False),
        sa.Column('order_quantity', sa.Float(), nullable=False),
        _company_fk(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('company_id', 'date', 'ingredient_id'),
    )
    op.create_index('ix_order_quantity_company_id', 'order_quantity', ['company_id'])
    op.create_index('ix_order_quantity_date', 'order_quantity', ['date'])

    for table, item_column, master in (
        ('cooking_plan_additional_ingredient', 'ingredient_id', 'ingredient'),
        ('cooking_plan_additional_container', 'container_id', 'container'),
    ):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('company_id', sa.String(length=36), nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column(item_column, sa.String(length=36), nullable=False),
            sa.Column('quantity', sa.Float(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
            _company_fk(),
            sa.ForeignKeyConstraint([item_column], [f'{master}.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('company_id', 'date', item_column),
        )
        op.create_index(f'ix_{table}_company_id', table, ['company_id'])
        op.create_index(f'ix_{table}_date', table, ['date'])

    op.create_table(
        'stock_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=False),
        sa.Column('item_type', sa.String(length=20), nullable=False),
        sa.Column('item_id', sa.String(length=36), nullable=False),
        sa.Column('current_quantity', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=True),
        _company_fk(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('company_id', 'item_type', 'item_id'),
    )
    op.create_index('ix_stock_item_company_id', 'stock_item', ['company_id'])
    op.create_index('ix_stock_item_item_id', 'stock_item', ['item_id'])


def downgrade():
    for table in (
        'stock_item',
        'cooking_plan_additional_container',
        'cooking_plan_additional_ingredient',
        'order_quantity',
        'meal_portion',
        'meal_plan_menu',
        'meal_plan',
        'menu_container_ingredient',
        'menu_container',
        'menu_price_history',
        'menu',
        'container',
        'ingredient',
        'supplier',
        'company',
    ):
        op.drop_table(table)
