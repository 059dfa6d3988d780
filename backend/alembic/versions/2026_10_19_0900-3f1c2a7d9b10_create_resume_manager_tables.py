"""create_resume_manager_tables

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a7d9b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _enum(name, *values):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True, length=32)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True)),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'resumes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', JSON_TYPE, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_resumes_user_id', 'resumes', ['user_id'])

    # 1. 사용자당 활성 이력서 1개 (partial unique index)
    op.create_index(
        'uq_resumes_one_active_per_user',
        'resumes',
        ['user_id'],
        unique=True,
        postgresql_where=sa.text('is_active'),
        sqlite_where=sa.text('is_active'),
    )

    op.create_table(
        'documents',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('resume_id', sa.Uuid(), sa.ForeignKey('resumes.id', ondelete='CASCADE')),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('type', _enum('document_type', 'certificate', 'project', 'education', 'experience', 'skill'),
                  nullable=False),
        sa.Column('file_path', sa.String(500), nullable=False),
        sa.Column('extracted_content', JSON_TYPE),
        sa.Column('status', _enum('document_status', 'pending', 'processing', 'completed', 'error'),
                  nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'file_path', name='uq_documents_user_file_path'),
    )
    op.create_index('ix_documents_user_id', 'documents', ['user_id'])
    op.create_index('idx_documents_user_created', 'documents', ['user_id', 'created_at'])

    op.create_table(
        'resume_versions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('resume_id', sa.Uuid(), sa.ForeignKey('resumes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('version_number', sa.Integer(), nullable=False),
        sa.Column('content', JSON_TYPE, nullable=False),
        sa.Column('pdf_path', sa.String(500)),
        sa.Column('docx_path', sa.String(500)),
        sa.Column('changes_description', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('resume_id', 'version_number', name='uq_resume_versions_number'),
    )
    op.create_index('ix_resume_versions_resume_id', 'resume_versions', ['resume_id'])

    op.create_table(
        'processing_jobs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('kind', _enum('job_kind', 'document_extraction', 'resume_export'), nullable=False),
        sa.Column('status', _enum('job_status', 'queued', 'running', 'succeeded', 'failed'), nullable=False),
        sa.Column('document_id', sa.Uuid(), sa.ForeignKey('documents.id', ondelete='CASCADE')),
        sa.Column('version_id', sa.Uuid(), sa.ForeignKey('resume_versions.id', ondelete='CASCADE')),
        sa.Column('format', _enum('export_format', 'pdf', 'docx')),
        sa.Column('result', JSON_TYPE),
        sa.Column('error', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_processing_jobs_user_id', 'processing_jobs', ['user_id'])
    op.create_index('idx_processing_jobs_queue', 'processing_jobs', ['status', 'kind', 'created_at'])


def downgrade() -> None:
    op.drop_table('processing_jobs')
    op.drop_table('resume_versions')
    op.drop_table('documents')
    op.drop_index('uq_resumes_one_active_per_user', table_name='resumes')
    op.drop_table('resumes')
    op.drop_table('users')
