"""create product and cart tables

Revision ID: 0001_create_product_and_cart
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = '0001_create_product_and_cart'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'product',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('item_name', sa.String(length=255), nullable=False),
        sa.Column('item_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('item_description', sa.Text(), nullable=False),
        sa.Column('item_rating', sa.Integer(), nullable=False),
        sa.Column('item_image', sa.String(length=1024), nullable=False),
        sa.CheckConstraint('item_price >= 0', name='ck_product_price_nonneg'),
    )
    # product_id as primary key: one cart line per product
    op.create_table(
        'cart',
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('product.id', ondelete='CASCADE'),
                  primary_key=True, autoincrement=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.CheckConstraint('quantity > 0', name='ck_cart_quantity_pos'),
    )


def downgrade():
    op.drop_table('cart')
    op.drop_table('product')
