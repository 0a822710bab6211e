"""create catalog and order tables

Revision ID: create_catalog_and_order_tables
Revises:
Create Date: 2025-06-01 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_catalog_and_order_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'base_dishes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'sizes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('max_ingredients', sa.Integer(), nullable=False),
        sa.CheckConstraint('price >= 0', name='ck_size_price_non_negative'),
        sa.CheckConstraint('max_ingredients >= 0', name='ck_size_max_ingredients_non_negative'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'ingredients',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('availability', sa.Integer(), nullable=True),
        sa.CheckConstraint('price >= 0', name='ck_ingredient_price_non_negative'),
        sa.CheckConstraint('availability IS NULL OR availability >= 0',
                           name='ck_ingredient_availability_non_negative'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'ingredient_dependencies',
        sa.Column('ingredient_id', sa.Integer(), nullable=False),
        sa.Column('depends_on_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['ingredient_id'], ['ingredients.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['depends_on_id'], ['ingredients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('ingredient_id', 'depends_on_id')
    )

    op.create_table(
        'ingredient_incompatibilities',
        sa.Column('ingredient1_id', sa.Integer(), nullable=False),
        sa.Column('ingredient2_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['ingredient1_id'], ['ingredients.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['ingredient2_id'], ['ingredients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('ingredient1_id', 'ingredient2_id')
    )

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('dish_id', sa.Integer(), nullable=False),
        sa.Column('size_id', sa.Integer(), nullable=False),
        sa.Column('total', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['dish_id'], ['base_dishes.id']),
        sa.ForeignKeyConstraint(['size_id'], ['sizes.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index(op.f('ix_orders_user_id'), 'orders', ['user_id'], unique=False)

    op.create_table(
        'order_ingredients',
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('ingredient_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.ForeignKeyConstraint(['ingredient_id'], ['ingredients.id']),
        sa.PrimaryKeyConstraint('order_id', 'ingredient_id')
    )


def downgrade():
    # Drop tables in reverse order
    op.drop_table('order_ingredients')
    op.drop_index(op.f('ix_orders_user_id'), table_name='orders')
    op.drop_table('orders')
    op.drop_table('ingredient_incompatibilities')
    op.drop_table('ingredient_dependencies')
    op.drop_table('ingredients')
    op.drop_table('sizes')
    op.drop_table('base_dishes')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
