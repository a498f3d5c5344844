"""initial schema

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

REWARD_TYPES = ('DISCOUNT', 'VOUCHER', 'PRODUCT', 'SERVICE')
REWARD_CATEGORIES = ('DINING', 'SHOPPING', 'ENTERTAINMENT', 'TRAVEL', 'EDUCATION', 'HEALTH', 'SERVICES', 'OTHER')
ENUM_NAMES = (
    'userrole', 'eventcategory', 'eventstatus', 'actionstatus',
    'requeststatus', 'rewardtype', 'rewardcategory', 'redemptionstatus',
)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'COMPANY', 'VOLUNTEER', name='userrole'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('interests', sa.JSON(), nullable=False),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        sa.Column('credits_total', sa.Integer(), nullable=False),
        sa.Column('volunteer_level', sa.Integer(), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('events',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('category', sa.Enum(
            'ENVIRONMENTAL', 'EDUCATION', 'HEALTHCARE', 'SOCIAL', 'CULTURAL', 'SPORTS', 'TECH',
            'COMMUNITY_DEVELOPMENT', 'ANIMAL_WELFARE', 'DISASTER_RELIEF', 'OTHER',
            name='eventcategory'), nullable=False),
        sa.Column('credits', sa.Integer(), nullable=False),
        sa.Column('max_participants', sa.Integer(), nullable=False),
        sa.Column('remaining_slots', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'COMPLETED', 'CANCELLED', name='eventstatus'), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(), nullable=True),
        sa.Column('credits_have_been_claimed', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_events_id', 'events', ['id'])
    op.create_index('ix_events_created_by', 'events', ['created_by'])

    op.create_table('event_actions',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('required_volunteers', sa.Integer(), nullable=False),
        sa.Column('credits', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('OPEN', 'FULL', 'COMPLETED', name='actionstatus'), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_event_actions_id', 'event_actions', ['id'])
    op.create_index('ix_event_actions_event_id', 'event_actions', ['event_id'])

    op.create_table('action_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('action_id', sa.Integer(), nullable=False),
        sa.Column('volunteer_id', sa.Integer(), nullable=False),
        sa.Column('volunteer_name', sa.String(255), nullable=False),
        sa.Column('assigned_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['action_id'], ['event_actions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['volunteer_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('action_id', 'volunteer_id', name='uq_action_assignment_volunteer')
    )
    op.create_index('ix_action_assignments_id', 'action_assignments', ['id'])
    op.create_index('ix_action_assignments_action_id', 'action_assignments', ['action_id'])
    op.create_index('ix_action_assignments_volunteer_id', 'action_assignments', ['volunteer_id'])

    op.create_table('event_requests',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('volunteer_id', sa.Integer(), nullable=False),
        sa.Column('volunteer_name', sa.String(255), nullable=False),
        sa.Column('status', sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='requeststatus'), nullable=False),
        sa.Column('applied_at', sa.DateTime(), nullable=False),
        sa.Column('action_id', sa.Integer(), nullable=True),
        sa.Column('processed_at', sa.DateTime(), nullable=True),
        sa.Column('processed_by', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['volunteer_id'], ['users.id']),
        sa.ForeignKeyConstraint(['action_id'], ['event_actions.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['processed_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'volunteer_id', name='uq_event_request_volunteer')
    )
    op.create_index('ix_event_requests_id', 'event_requests', ['id'])
    op.create_index('ix_event_requests_event_id', 'event_requests', ['event_id'])
    op.create_index('ix_event_requests_volunteer_id', 'event_requests', ['volunteer_id'])

    op.create_table('credit_history',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('event_title', sa.String(255), nullable=False),
        sa.Column('action_title', sa.String(255), nullable=False),
        sa.Column('credits_earned', sa.Integer(), nullable=False),
        sa.Column('earned_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'event_id', name='uq_credit_history_user_event')
    )
    op.create_index('ix_credit_history_id', 'credit_history', ['id'])
    op.create_index('ix_credit_history_user_id', 'credit_history', ['user_id'])
    op.create_index('ix_credit_history_event_id', 'credit_history', ['event_id'])

    op.create_table('rewards',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('partner_name', sa.String(255), nullable=False),
        sa.Column('partner_id', sa.Integer(), nullable=False),
        sa.Column('credit_cost', sa.Integer(), nullable=False),
        sa.Column('reward_type', sa.Enum(*REWARD_TYPES, name='rewardtype'), nullable=False),
        sa.Column('category', sa.Enum(*REWARD_CATEGORIES, name='rewardcategory'), nullable=False),
        sa.Column('valid_until', sa.DateTime(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('available_quantity', sa.Integer(), nullable=True),
        sa.Column('times_redeemed', sa.Integer(), nullable=False),
        sa.Column('terms_and_conditions', sa.Text(), nullable=False),
        sa.Column('redemption_instructions', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('min_age', sa.Integer(), nullable=True),
        sa.Column('max_redemptions_per_user', sa.Integer(), nullable=True),
        sa.Column('location_restriction', sa.String(255), nullable=True),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['partner_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_rewards_id', 'rewards', ['id'])
    op.create_index('ix_rewards_partner_id', 'rewards', ['partner_id'])

    # rewardtype/rewardcategory already exist on postgres, reuse them
    op.create_table('redeemed_rewards',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('reward_id', sa.Integer(), nullable=False),
        sa.Column('reward_title', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('reward_type', postgresql.ENUM(*REWARD_TYPES, name='rewardtype', create_type=False), nullable=False),
        sa.Column('category', postgresql.ENUM(*REWARD_CATEGORIES, name='rewardcategory', create_type=False), nullable=False),
        sa.Column('partner_name', sa.String(255), nullable=False),
        sa.Column('redemption_code', sa.String(32), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=False),
        sa.Column('terms_and_conditions', sa.Text(), nullable=False),
        sa.Column('credit_cost', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'USED', 'EXPIRED', name='redemptionstatus'), nullable=False),
        sa.Column('redeemed_at', sa.DateTime(), nullable=False),
        sa.Column('valid_until', sa.DateTime(), nullable=False),
        sa.Column('used_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_redeemed_rewards_id', 'redeemed_rewards', ['id'])
    op.create_index('ix_redeemed_rewards_user_id', 'redeemed_rewards', ['user_id'])
    op.create_index('ix_redeemed_rewards_reward_id', 'redeemed_rewards', ['reward_id'])
    op.create_index('ix_redeemed_rewards_redemption_code', 'redeemed_rewards', ['redemption_code'])

    op.create_table('chat_messages',
        sa.Column('id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('sender_name', sa.String(255), nullable=False),
        sa.Column('sender_avatar', sa.String(500), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_chat_messages_id', 'chat_messages', ['id'])
    op.create_index('ix_chat_messages_event_id', 'chat_messages', ['event_id'])
    op.create_index('ix_chat_messages_sender_id', 'chat_messages', ['sender_id'])
    op.create_index('ix_chat_messages_timestamp', 'chat_messages', ['timestamp'])


def downgrade() -> None:
    for table in (
        'chat_messages', 'redeemed_rewards', 'rewards', 'credit_history',
        'event_requests', 'action_assignments', 'event_actions', 'events', 'users',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name in ENUM_NAMES:
            op.execute(f'DROP TYPE IF EXISTS {name}')
