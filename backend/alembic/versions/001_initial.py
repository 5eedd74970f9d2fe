"""Initial migration - credentials, activities and roster

Revision ID: 001_initial
Revises:
Create Date: 2025-12-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Strava OAuth credentials, one row per identity
    op.create_table(
        'strava_auth_tokens',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('token_type', sa.String(32), nullable=False),
        sa.Column('access_token', sa.Text(), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.Integer(), nullable=False),
        sa.Column('expires_in', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    # Club activities keyed by content hash
    op.create_table(
        'bullshark_activities',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('athlete_name', sa.String(255), nullable=True),
        sa.Column('distance', sa.Float(), nullable=True),
        sa.Column('moving_time', sa.BigInteger(), nullable=True),
        sa.Column('elapsed_time', sa.BigInteger(), nullable=True),
        sa.Column('sport_type', sa.String(50), nullable=True),
        sa.Column('resource_state', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('total_elevation_gain', sa.Float(), nullable=True),
        sa.Column('workout_type', sa.Integer(), nullable=True),
        sa.Column('device_name', sa.String(255), nullable=True),
    )
    op.create_index('ix_bullshark_activities_date', 'bullshark_activities', ['date'])

    # Athlete roster
    op.create_table(
        'athletes',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('team', sa.String(32), nullable=False),
        sa.Column('event', sa.String(255), nullable=True),
    )
    op.create_index('ix_athletes_name', 'athletes', ['name'])


def downgrade() -> None:
    op.drop_index('ix_athletes_name', 'athletes')
    op.drop_table('athletes')
    op.drop_index('ix_bullshark_activities_date', 'bullshark_activities')
    op.drop_table('bullshark_activities')
    op.drop_table('strava_auth_tokens')
