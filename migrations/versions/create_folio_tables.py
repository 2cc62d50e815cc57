"""Create projects, page_groups and project_page_groups

Revision ID: create_folio_tables
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_folio_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'projects',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('root_language', sa.String(10), nullable=False),
        sa.Column('translation_languages', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(50), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_projects_file_name', 'projects', ['file_name'])
    op.create_index('ix_projects_created_at', 'projects', ['created_at'])

    op.create_table(
        'page_groups',
        sa.Column('id', sa.String(255), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('root_language', sa.String(10), nullable=False),
        sa.Column('root_text', sa.Text(), nullable=False, server_default=''),
        sa.Column('translations', sa.JSON(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('image_blob_id', sa.String(255), nullable=True),
        sa.Column('status', sa.String(50), nullable=False, server_default='draft'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_page_groups_created_at', 'page_groups', ['created_at'])

    op.create_table(
        'project_page_groups',
        sa.Column('project_id', sa.String(255), nullable=False),
        sa.Column('page_group_id', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['page_group_id'], ['page_groups.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('project_id', 'page_group_id')
    )
    op.create_index('ix_project_page_groups_page_group_id', 'project_page_groups', ['page_group_id'])


def downgrade():
    op.drop_index('ix_project_page_groups_page_group_id', table_name='project_page_groups')
    op.drop_table('project_page_groups')
    op.drop_index('ix_page_groups_created_at', table_name='page_groups')
    op.drop_table('page_groups')
    op.drop_index('ix_projects_created_at', table_name='projects')
    op.drop_index('ix_projects_file_name', table_name='projects')
    op.drop_table('projects')
