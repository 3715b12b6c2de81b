"""Create products and product_images tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

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
    """Create products and product_images tables."""
    # Products table
    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('slug', sa.Text(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sizes', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('gender', sa.String(20), nullable=False, server_default='unisex'),
        sa.Column('tags', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Slug is the public, unique handle of a product
    op.create_unique_constraint(
        'uq_products_slug',
        'products',
        ['slug'],
    )

    # Case-insensitive title lookup
    op.create_index(
        'ix_products_lower_title',
        'products',
        [sa.text('lower(title)')],
    )

    # Product images table
    op.create_table(
        'product_images',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('product_id', postgresql.UUID(as_uuid=False),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True),
    )


def downgrade() -> None:
    """Drop products and product_images tables."""
    op.drop_table('product_images')
    op.drop_index('ix_products_lower_title', table_name='products')
    op.drop_table('products')
