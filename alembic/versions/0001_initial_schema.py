"""initial studypod schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def _uuid_pk():
    return sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True)


def _index_base(table: str) -> None:
    op.create_index(op.f(f'ix_{table}_id'), table, ['id'])
    op.create_index(op.f(f'ix_{table}_created_at'), table, ['created_at'])
    op.create_index(op.f(f'ix_{table}_is_deleted'), table, ['is_deleted'])


def upgrade() -> None:
    op.create_table('users',
        _uuid_pk(),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('auth_provider', sa.String(20), nullable=False, server_default='email'),
        sa.Column('first_name', sa.String(100)),
        sa.Column('last_name', sa.String(100)),
        sa.Column('profile_image_url', sa.String(500)),
        sa.Column('linkedin_id', sa.String(200)),
        sa.Column('github_id', sa.String(100)),
        sa.Column('role', sa.String(20)),
        sa.Column('study_goals', sa.JSON()),
        sa.Column('preferred_subjects', sa.JSON()),
        sa.Column('learning_pace', sa.String(20)),
        sa.Column('availability', sa.JSON()),
        sa.Column('study_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('global_rank', sa.Integer()),
        sa.Column('total_study_time', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('completed_pods', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    _index_base('users')
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table('study_pods',
        _uuid_pk(),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('goal', sa.Text()),
        sa.Column('learning_pace', sa.String(20)),
        sa.Column('schedule', sa.JSON()),
        sa.Column('max_members', sa.Integer(), nullable=False, server_default='8'),
        sa.Column('current_members', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('creator_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id')),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    _index_base('study_pods')
    op.create_index(op.f('ix_study_pods_subject'), 'study_pods', ['subject'])
    op.create_index(op.f('ix_study_pods_learning_pace'), 'study_pods', ['learning_pace'])
    op.create_index(op.f('ix_study_pods_creator_id'), 'study_pods', ['creator_id'])

    op.create_table('pod_memberships',
        _uuid_pk(),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('pod_id', sa.Uuid(as_uuid=True), sa.ForeignKey('study_pods.id'), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='member'),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('progress', sa.Numeric(5, 2), server_default='0'),
        sa.Column('streak', sa.Integer(), server_default='0'),
        sa.Column('rank', sa.Integer()),
        *_timestamps(),
    )
    _index_base('pod_memberships')
    op.create_index(op.f('ix_pod_memberships_user_id'), 'pod_memberships', ['user_id'])
    op.create_index(op.f('ix_pod_memberships_pod_id'), 'pod_memberships', ['pod_id'])
    op.create_index('idx_pod_membership_unique', 'pod_memberships', ['pod_id', 'user_id'], unique=True)

    op.create_table('study_sessions',
        _uuid_pk(),
        sa.Column('pod_id', sa.Uuid(as_uuid=True), sa.ForeignKey('study_pods.id'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('topic', sa.String(200)),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('attendee_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    _index_base('study_sessions')
    op.create_index(op.f('ix_study_sessions_pod_id'), 'study_sessions', ['pod_id'])
    op.create_index('idx_study_session_pod_time', 'study_sessions', ['pod_id', 'scheduled_at'])

    op.create_table('session_attendance',
        _uuid_pk(),
        sa.Column('session_id', sa.Uuid(as_uuid=True), sa.ForeignKey('study_sessions.id'), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('attended_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('study_time_minutes', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    _index_base('session_attendance')
    op.create_index(op.f('ix_session_attendance_session_id'), 'session_attendance', ['session_id'])
    op.create_index(op.f('ix_session_attendance_user_id'), 'session_attendance', ['user_id'])

    op.create_table('badges',
        _uuid_pk(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('icon', sa.String(100), nullable=False),
        sa.Column('category', sa.String(30)),
        sa.Column('requirements', sa.JSON()),
        *_timestamps(),
    )
    _index_base('badges')

    op.create_table('user_badges',
        _uuid_pk(),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('badge_id', sa.Uuid(as_uuid=True), sa.ForeignKey('badges.id'), nullable=False),
        sa.Column('earned_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('progress', sa.JSON()),
        *_timestamps(),
    )
    _index_base('user_badges')
    op.create_index(op.f('ix_user_badges_user_id'), 'user_badges', ['user_id'])
    op.create_index(op.f('ix_user_badges_badge_id'), 'user_badges', ['badge_id'])

    op.create_table('ai_interactions',
        _uuid_pk(),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('response', sa.Text(), nullable=False),
        sa.Column('context', sa.String(200)),
        sa.Column('rating', sa.Integer()),
        *_timestamps(),
    )
    _index_base('ai_interactions')
    op.create_index(op.f('ix_ai_interactions_user_id'), 'ai_interactions', ['user_id'])
    op.create_index('idx_ai_interaction_user_time', 'ai_interactions', ['user_id', 'created_at'])

    op.create_table('pod_files',
        _uuid_pk(),
        sa.Column('pod_id', sa.Uuid(as_uuid=True), sa.ForeignKey('study_pods.id'), nullable=False),
        sa.Column('uploaded_by', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_type', sa.String(50), nullable=False),
        sa.Column('file_size', sa.Integer()),
        sa.Column('file_url', sa.String(1000), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('download_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    _index_base('pod_files')
    op.create_index(op.f('ix_pod_files_pod_id'), 'pod_files', ['pod_id'])
    op.create_index(op.f('ix_pod_files_uploaded_by'), 'pod_files', ['uploaded_by'])

    # Integer identity: created_at ties fall back to insertion order
    op.create_table('chat_messages',
        sa.Column('id', sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column('pod_id', sa.Uuid(as_uuid=True), sa.ForeignKey('study_pods.id'), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('message_type', sa.String(20), nullable=False, server_default='text'),
        sa.Column('metadata', sa.JSON()),
        *_timestamps(),
    )
    op.create_index(op.f('ix_chat_messages_created_at'), 'chat_messages', ['created_at'])
    op.create_index(op.f('ix_chat_messages_is_deleted'), 'chat_messages', ['is_deleted'])
    op.create_index(op.f('ix_chat_messages_pod_id'), 'chat_messages', ['pod_id'])
    op.create_index(op.f('ix_chat_messages_user_id'), 'chat_messages', ['user_id'])
    op.create_index('idx_chat_message_pod_time', 'chat_messages', ['pod_id', 'created_at', 'id'])


def downgrade() -> None:
    for table in (
        'chat_messages',
        'pod_files',
        'ai_interactions',
        'user_badges',
        'badges',
        'session_attendance',
        'study_sessions',
        'pod_memberships',
        'study_pods',
        'users',
    ):
        op.drop_table(table)
