"""Add civic tables: civic_services, civic_meetings, civic_statistics,
civic_pages, data_freshness

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'civic_services',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('department', sa.String(255)),
        sa.Column('category', sa.String(100)),
        sa.Column('online_access', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_civic_services_name', 'civic_services', ['name'])
    op.create_index('ix_civic_services_department', 'civic_services', ['department'])
    op.create_index('ix_civic_services_category', 'civic_services', ['category'])
    op.create_index('ix_civic_services_last_updated', 'civic_services', ['last_updated'])

    op.create_table(
        'civic_meetings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('committee', sa.String(255)),
        sa.Column('meeting_date', sa.Date()),
        sa.Column('status', sa.String(50)),
        sa.Column('public_access', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('attendee_count', sa.Integer(), server_default='0'),
        sa.Column('decision_count', sa.Integer(), server_default='0'),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_civic_meetings_committee', 'civic_meetings', ['committee'])
    op.create_index('ix_civic_meetings_meeting_date', 'civic_meetings', ['meeting_date'])
    op.create_index('ix_civic_meetings_status', 'civic_meetings', ['status'])

    op.create_table(
        'civic_statistics',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('subcategory', sa.String(100)),
        sa.Column('metric', sa.String(100), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(50)),
        sa.Column('period', sa.String(50)),
        sa.Column('date_recorded', sa.Date()),
        sa.Column('source_document', sa.String(1000)),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_civic_statistics_category', 'civic_statistics', ['category'])
    op.create_index('ix_civic_statistics_subcategory', 'civic_statistics', ['subcategory'])
    op.create_index('ix_civic_statistics_metric', 'civic_statistics', ['metric'])
    op.create_index('ix_civic_statistics_period', 'civic_statistics', ['period'])

    op.create_table(
        'civic_pages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('url', sa.String(1000), nullable=False, unique=True),
        sa.Column('title', sa.String(500)),
        sa.Column('description', sa.Text()),
        sa.Column('category', sa.String(100)),
        sa.Column('content_length', sa.Integer(), server_default='0'),
        sa.Column('quality_score', sa.Float(), server_default='0'),
        sa.Column('crawled_at', sa.DateTime()),
        sa.Column('indexed_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_civic_pages_category', 'civic_pages', ['category'])
    op.create_index('ix_civic_pages_quality_score', 'civic_pages', ['quality_score'])

    op.create_table(
        'data_freshness',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('data_type', sa.String(50), nullable=False, unique=True),
        sa.Column('record_count', sa.Integer(), server_default='0'),
        sa.Column('last_import', sa.DateTime()),
        sa.Column('data_age_days', sa.Integer(), server_default='0'),
        sa.Column('freshness_status', sa.String(20), server_default='unknown'),
    )
    op.create_index('ix_data_freshness_last_import', 'data_freshness', ['last_import'])


def downgrade():
    op.drop_table('data_freshness')
    op.drop_table('civic_pages')
    op.drop_table('civic_statistics')
    op.drop_table('civic_meetings')
    op.drop_table('civic_services')
