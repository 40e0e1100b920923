"""Create users table

Revision ID: 001_create_users
Revises:
Create Date: 2026-10-19 12:00:00.000000

Creates the users table with the column names used by the existing
storefront database, so it can also be stamped against a live one:
    alembic stamp 001_create_users

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_create_users'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_name', sa.String(length=100), nullable=False),
        sa.Column('user_email', sa.String(length=255), nullable=False),
        sa.Column('user_password', sa.String(length=255), nullable=False),
        sa.Column('user_contact_no', sa.String(length=20), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('user_id'),
    )
    # Unique index backs the duplicate-email check in signup
    op.create_index('ix_users_user_email', 'users', ['user_email'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_users_user_email', table_name='users')
    op.drop_table('users')
