"""Create users, events, friends, assistances and messages tables

Revision ID: b7e2c1d90a3f
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'b7e2c1d90a3f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('eventStart_date', sa.DateTime(), nullable=False),
        sa.Column('eventEnd_date', sa.DateTime(), nullable=False),
        sa.Column('n_participators', sa.Integer(), nullable=True),
        sa.Column('type', sa.String(100), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_events_owner_id', 'events', ['owner_id'])

    # One row per unordered pair: pair_low/pair_high hold min/max of both ids
    op.create_table(
        'friends',
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), primary_key=True),
        sa.Column('user_id_friend', sa.Integer(), sa.ForeignKey('users.id'), primary_key=True),
        sa.Column('status', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('pair_low', sa.Integer(), nullable=False),
        sa.Column('pair_high', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('pair_low', 'pair_high', name='unique_friendship_pair'),
    )
    op.create_index('ix_friends_user_id_friend', 'friends', ['user_id_friend'])

    op.create_table(
        'assistances',
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), primary_key=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id'), primary_key=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('punctuation', sa.Integer(), nullable=True),
        sa.CheckConstraint(
            'punctuation IS NULL OR (punctuation >= 0 AND punctuation <= 10)',
            name='assistance_punctuation_range'
        ),
    )
    op.create_index('ix_assistances_event_id', 'assistances', ['event_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('user_id_send', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('user_id_received', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_messages_user_id_send', 'messages', ['user_id_send'])
    op.create_index('ix_messages_user_id_received', 'messages', ['user_id_received'])


def downgrade() -> None:
    op.drop_table('messages')
    op.drop_table('assistances')
    op.drop_table('friends')
    op.drop_table('events')
    op.drop_table('users')
