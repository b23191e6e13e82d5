"""pod video calls

Revision ID: 0002_video_calls
Revises: 0001_initial_schema
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '0002_video_calls'
down_revision = '0001_initial_schema'
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def _index_base(table: str) -> None:
    op.create_index(op.f(f'ix_{table}_id'), table, ['id'])
    op.create_index(op.f(f'ix_{table}_created_at'), table, ['created_at'])
    op.create_index(op.f(f'ix_{table}_is_deleted'), table, ['is_deleted'])


def upgrade() -> None:
    op.create_table('video_call_sessions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('pod_id', sa.Uuid(as_uuid=True), sa.ForeignKey('study_pods.id'), nullable=False),
        sa.Column('host_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('meeting_url', sa.String(1000)),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('scheduled_at', sa.DateTime(timezone=True)),
        sa.Column('started_at', sa.DateTime(timezone=True)),
        sa.Column('ended_at', sa.DateTime(timezone=True)),
        sa.Column('participant_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('max_participants', sa.Integer(), nullable=False, server_default='8'),
        sa.Column('recording_url', sa.String(1000)),
        *_timestamps(),
    )
    _index_base('video_call_sessions')
    op.create_index(op.f('ix_video_call_sessions_pod_id'), 'video_call_sessions', ['pod_id'])
    op.create_index(op.f('ix_video_call_sessions_host_id'), 'video_call_sessions', ['host_id'])
    op.create_index('idx_video_call_pod_active', 'video_call_sessions', ['pod_id', 'is_active'])

    op.create_table('video_call_participants',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('session_id', sa.Uuid(as_uuid=True), sa.ForeignKey('video_call_sessions.id'), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('left_at', sa.DateTime(timezone=True)),
        sa.Column('duration', sa.Integer()),
        *_timestamps(),
    )
    _index_base('video_call_participants')
    op.create_index(op.f('ix_video_call_participants_session_id'), 'video_call_participants', ['session_id'])
    op.create_index(op.f('ix_video_call_participants_user_id'), 'video_call_participants', ['user_id'])


def downgrade() -> None:
    op.drop_table('video_call_participants')
    op.drop_table('video_call_sessions')
