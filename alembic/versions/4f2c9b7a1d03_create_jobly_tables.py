"""create_jobly_tables

Creates companies, jobs, users and applications.

Deletes cascade: a company takes its jobs with it, and jobs or users take
their applications with them.

Revision ID: 4f2c9b7a1d03
Revises:
Create Date: 2026-10-18 09:12:40.118302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2c9b7a1d03'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'companies',
        sa.Column('handle', sa.String(25), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False, unique=True),
        sa.Column('num_employees', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('logo_url', sa.Text(), nullable=True),
        sa.CheckConstraint('num_employees >= 0', name='ck_companies_num_employees'),
    )

    op.create_table(
        'users',
        sa.Column('username', sa.String(25), primary_key=True),
        sa.Column('password', sa.Text(), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('salary', sa.Integer(), nullable=True),
        sa.Column('equity', sa.Numeric(), nullable=True),
        sa.Column(
            'company_handle',
            sa.String(25),
            sa.ForeignKey('companies.handle', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.CheckConstraint('salary >= 0', name='ck_jobs_salary'),
        sa.CheckConstraint('equity <= 1.0', name='ck_jobs_equity'),
    )
    op.create_index('ix_jobs_company_handle', 'jobs', ['company_handle'])

    op.create_table(
        'applications',
        sa.Column(
            'username',
            sa.String(25),
            sa.ForeignKey('users.username', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column(
            'job_id',
            sa.Integer(),
            sa.ForeignKey('jobs.id', ondelete='CASCADE'),
            primary_key=True,
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('applications')
    op.drop_index('ix_jobs_company_handle', table_name='jobs')
    op.drop_table('jobs')
    op.drop_table('users')
    op.drop_table('companies')
