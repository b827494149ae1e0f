"""Create users and workout tables

Revision ID: 001_create_users_and_workouts
Revises:
Create Date: 2026-10-19 09:30:00.000000

Safe for databases created by db.create_all() - tables that already exist
are left alone.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_create_users_and_workouts'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = inspector.get_table_names()

    if 'users' not in existing_tables:
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=120), nullable=False),
            sa.Column('password_hash', sa.String(length=255), nullable=False),
            sa.Column('img', sa.String(length=500), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('email')
        )
        print("[MIGRATION] Created users table")
    else:
        print("[MIGRATION] users table already exists, skipping creation")

    if 'workout' not in existing_tables:
        op.create_table('workout',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('category', sa.String(length=100), nullable=False),
            sa.Column('workout_name', sa.String(length=100), nullable=False),
            sa.Column('sets', sa.Integer(), nullable=False),
            sa.Column('reps', sa.Integer(), nullable=False),
            sa.Column('weight', sa.Float(), nullable=False),
            sa.Column('duration', sa.Float(), nullable=False),
            sa.Column('calories_burned', sa.Float(), nullable=False),
            sa.Column('date', sa.DateTime(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_workout_date', 'workout', ['date'])
        print("[MIGRATION] Created workout table")
    else:
        print("[MIGRATION] workout table already exists, skipping creation")


def downgrade():
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = inspector.get_table_names()

    if 'workout' in existing_tables:
        op.drop_index('ix_workout_date', table_name='workout')
        op.drop_table('workout')
    if 'users' in existing_tables:
        op.drop_table('users')
    print("[MIGRATION] Dropped users and workout tables")
