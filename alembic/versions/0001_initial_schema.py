"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates:
- users, profiles and sessions (accounts and login)
- partnerships with a partial unique index on the active pair
- household tables: tasks, shopping_items, movies, goals, expenses,
  events, wishes, memories

Note: After running this migration, create an account with:
    python -m app.cli create-user --email you@example.com
"""
from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_WHERE = sa.text("status IN ('pending', 'accepted')")

# Household tables that only differ in their payload columns
OWNED_TABLES = [
    'tasks', 'shopping_items', 'movies', 'goals', 'expenses', 'events', 'wishes', 'memories',
]


def _owned_table(name, *columns):
    op.create_table(
        name,
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        *columns,
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(f'idx_{name}_user_id', name, ['user_id'], unique=False)


def upgrade() -> None:
    # Accounts
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('avatar_url', sa.String(1024), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('token', sa.String(64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('user_agent', sa.String(512), nullable=True),
        sa.Column('ip_address', sa.String(45), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_sessions_token'), 'sessions', ['token'], unique=True)

    # Partnerships
    op.create_table(
        'partnerships',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_a', sa.Uuid(), nullable=False),
        sa.Column('user_b', sa.Uuid(), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('invited_by', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('dissolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_a'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_b'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['invited_by'], ['users.id'], ondelete='CASCADE'),
        sa.CheckConstraint('user_a <> user_b', name='ck_partnerships_distinct_users'),
        sa.CheckConstraint(
            'invited_by = user_a OR invited_by = user_b',
            name='ck_partnerships_inviter_is_member',
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected', 'dissolved')",
            name='ck_partnerships_status',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_partnerships_user_a', 'partnerships', ['user_a'], unique=False)
    op.create_index('idx_partnerships_user_b', 'partnerships', ['user_b'], unique=False)
    op.create_index(
        'uq_partnerships_active_pair',
        'partnerships',
        ['user_a', 'user_b'],
        unique=True,
        postgresql_where=ACTIVE_WHERE,
        sqlite_where=ACTIVE_WHERE,
    )

    # Household data
    _owned_table(
        'tasks',
        sa.Column('text', sa.String(500), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    _owned_table(
        'shopping_items',
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('estimated_price', sa.Numeric(12, 2), nullable=True),
        sa.Column('purchased', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    _owned_table(
        'movies',
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('poster_url', sa.String(1024), nullable=True),
        sa.Column('kinopoisk_id', sa.String(32), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('watched', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('rating', sa.Numeric(3, 1), nullable=True),
        sa.Column('genres', sa.JSON(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
    )
    _owned_table(
        'goals',
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('target_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('current_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
    )
    _owned_table(
        'expenses',
        sa.Column('description', sa.String(500), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False, server_default=sa.func.current_date()),
        sa.Column('category', sa.String(50), nullable=False, server_default='other'),
    )
    op.create_index('idx_expenses_date', 'expenses', ['date'], unique=False)
    _owned_table(
        'events',
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('event_date', sa.Date(), nullable=False),
        sa.Column('event_time', sa.Time(), nullable=True),
        sa.Column('color', sa.String(7), nullable=False, server_default='#b8a9a1'),
    )
    op.create_index('idx_events_event_date', 'events', ['event_date'], unique=False)
    _owned_table(
        'wishes',
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=True),
        sa.Column('priority', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(1024), nullable=True),
        sa.Column('reserved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('purchased', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    _owned_table(
        'memories',
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(1024), nullable=True),
        sa.Column('happened_at', sa.Date(), nullable=False),
    )


def downgrade() -> None:
    op.drop_index('idx_events_event_date', table_name='events')
    op.drop_index('idx_expenses_date', table_name='expenses')
    for name in reversed(OWNED_TABLES):
        op.drop_index(f'idx_{name}_user_id', table_name=name)
        op.drop_table(name)

    op.drop_index('uq_partnerships_active_pair', table_name='partnerships')
    op.drop_index('idx_partnerships_user_b', table_name='partnerships')
    op.drop_index('idx_partnerships_user_a', table_name='partnerships')
    op.drop_table('partnerships')

    op.drop_index(op.f('ix_sessions_token'), table_name='sessions')
    op.drop_table('sessions')
    op.drop_table('profiles')
    op.drop_table('users')
