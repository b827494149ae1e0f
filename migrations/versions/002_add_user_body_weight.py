"""Add body weight to users table

Revision ID: 002_add_user_body_weight
Revises: 001_create_users_and_workouts
Create Date: 2026-10-19

Lets calorie estimates use the user's own body weight instead of the
assumed 70 kg when USE_PROFILE_WEIGHT is enabled.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

revision = '002_add_user_body_weight'
down_revision = '001_create_users_and_workouts'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    inspector = inspect(bind)
    columns = [c['name'] for c in inspector.get_columns('users')]
    if 'weight' not in columns:
        op.add_column('users', sa.Column('weight', sa.Float(), nullable=True))


def downgrade():
    op.drop_column('users', 'weight')
