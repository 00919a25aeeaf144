"""create ai_settings table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 12:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "002"
down_revision = "001"


def upgrade() -> None:
    op.create_table(
        'ai_settings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('provider', sa.String(50), nullable=True),
        sa.Column('model', sa.String(200), nullable=True),
        sa.Column('vision_model', sa.String(200), nullable=True),
        sa.Column('openai_api_key', sa.String(500), nullable=True),
        sa.Column('openrouter_api_key', sa.String(500), nullable=True),
        sa.Column('anthropic_api_key', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('ai_settings')
