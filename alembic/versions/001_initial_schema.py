"""initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-17 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.Column(
            'role',
            sa.Enum('admin', 'worker', 'user', name='user_role'),
            nullable=False,
            server_default='user'
        ),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('passport_number', sa.String(length=50), nullable=True),
        sa.Column('nationality', sa.String(length=100), nullable=True),
        sa.Column('date_of_birth', sa.DateTime(), nullable=True),
        sa.Column('contact_number', sa.String(length=50), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        # Partial updates are raw UPDATE statements; the server keeps updated_at current
        sa.Column(
            'updated_at',
            sa.DateTime(),
            nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP')
        ),
        sa.PrimaryKeyConstraint('user_id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_passport_number'), 'users', ['passport_number'], unique=True)
    op.create_index(op.f('ix_users_contact_number'), 'users', ['contact_number'], unique=False)

    # Create routes table
    op.create_table(
        'routes',
        sa.Column('route_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('origin', sa.String(length=100), nullable=False),
        sa.Column('destination', sa.String(length=100), nullable=False),
        sa.Column('distance', sa.Float(), nullable=False),
        sa.Column('estimated_duration', sa.String(length=10), nullable=False),
        sa.PrimaryKeyConstraint('route_id')
    )

    # Create tickets table
    op.create_table(
        'tickets',
        sa.Column('ticket_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('route_id', sa.Integer(), nullable=True),
        sa.Column('seat_number', sa.String(length=10), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], name='tickets_user_fk'),
        sa.ForeignKeyConstraint(['route_id'], ['routes.route_id'], name='tickets_route_fk'),
        sa.PrimaryKeyConstraint('ticket_id')
    )
    op.create_index(op.f('ix_tickets_user_id'), 'tickets', ['user_id'], unique=False)
    op.create_index(op.f('ix_tickets_route_id'), 'tickets', ['route_id'], unique=False)


def downgrade() -> None:
    # Drop FKs before their indexes (MySQL backs FKs with indexes)
    op.drop_constraint('tickets_user_fk', 'tickets', type_='foreignkey')
    op.drop_constraint('tickets_route_fk', 'tickets', type_='foreignkey')
    op.drop_index(op.f('ix_tickets_route_id'), table_name='tickets')
    op.drop_index(op.f('ix_tickets_user_id'), table_name='tickets')
    op.drop_table('tickets')

    op.drop_table('routes')

    op.drop_index(op.f('ix_users_contact_number'), table_name='users')
    op.drop_index(op.f('ix_users_passport_number'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
