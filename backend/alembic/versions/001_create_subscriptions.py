"""create subscriptions table

Revision ID: 001
Revises: 
Create Date: 2026-10-19 09:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "001"
down_revision = None


def upgrade() -> None:
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.Enum('USD', 'EUR', name='currency'), nullable=False),
        sa.Column('renewal_date', sa.Date(), nullable=False),
        sa.Column('frequency', sa.Enum('monthly', 'annual', name='frequency'), nullable=False),
        sa.Column('status', sa.Enum('active', 'inactive', name='subscriptionstatus'), nullable=False),
        sa.Column('tags', sa.Text(), nullable=False, server_default=''),
        sa.Column('added_at', sa.DateTime(), nullable=False),
        sa.Column('last_modified_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_subscriptions_renewal_date', 'subscriptions', ['renewal_date'])
    op.create_index('ix_subscriptions_status', 'subscriptions', ['status'])


def downgrade() -> None:
    op.drop_index('ix_subscriptions_status', table_name='subscriptions')
    op.drop_index('ix_subscriptions_renewal_date', table_name='subscriptions')
    op.drop_table('subscriptions')
