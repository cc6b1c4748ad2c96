# alembic/versions/001_initial.py

"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create holdings table
    op.create_table('holdings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('symbol', sa.String(length=20), nullable=False),
        sa.Column('asset_name', sa.String(length=200), nullable=False),
        sa.Column('asset_type', sa.String(length=10), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=18, scale=8), nullable=False),
        sa.Column('purchase_price', sa.Numeric(precision=18, scale=8), nullable=False),
        sa.Column('purchase_date', sa.Date(), nullable=False),
        sa.Column('current_price', sa.Numeric(precision=18, scale=8), nullable=True),
        sa.Column('last_price_update', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_holdings_symbol', 'holdings', ['symbol'])
    op.create_index('ix_holdings_asset_type', 'holdings', ['asset_type'])


def downgrade():
    op.drop_index('ix_holdings_asset_type', table_name='holdings')
    op.drop_index('ix_holdings_symbol', table_name='holdings')
    op.drop_table('holdings')
