"""Create stores, admins, products and product_compositions tables.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the catalog tables."""
    op.create_table(
        'stores',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    op.create_table(
        'admins',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('phone', sa.String(32), nullable=True, unique=True),
        sa.Column('name', sa.String(200), nullable=True),
        sa.Column('store_id', sa.String(36),
                  sa.ForeignKey('stores.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('store_id', sa.String(36),
                  sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('shape', sa.String(20), nullable=False, index=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price_cents', sa.Integer(), nullable=False, server_default='0'),
        # Flowers only
        sa.Column('variety', sa.String(100), nullable=True),
        sa.Column('colors', postgresql.JSONB(), nullable=True),
        sa.Column('origin_country', sa.String(100), nullable=True),
        sa.Column('fragrance_intensity', sa.String(20), nullable=True),
        # Bouquets, baskets and packages only
        sa.Column('flowers_count', sa.Integer(), nullable=True),
        sa.Column('is_packaging_required', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('packaging_mode', sa.String(30), nullable=False, server_default='none'),
        sa.Column('packaging_color', sa.String(20), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    op.create_table(
        'product_compositions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('parent_id', sa.String(36),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('child_id', sa.String(36),
                  sa.ForeignKey('products.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('store_id', sa.String(36),
                  sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint('quantity > 0', name='ck_product_compositions_quantity_positive'),
    )


def downgrade() -> None:
    """Drop the catalog tables."""
    op.drop_table('product_compositions')
    op.drop_table('products')
    op.drop_table('admins')
    op.drop_table('stores')
