"""create_patents_table

Revision ID: 3f1c9a2b7d4e
Revises:
Create Date: 2026-10-17 10:12:31.208114

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d4e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

patent_status = sa.Enum('Active', 'Pending', 'Expired', name='patent_status')


def upgrade() -> None:
    """Create the patents table and its search indexes."""
    op.create_table(
        'patents',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('abstract', sa.Text(), nullable=False),
        sa.Column('inventors', sa.JSON(), nullable=False),
        sa.Column('inventors_text', sa.String(), nullable=False),
        sa.Column('publication_date', sa.Date(), nullable=False),
        sa.Column('relevance_score', sa.Float(), nullable=False),
        sa.Column('assignee', sa.String(), nullable=True),
        sa.Column('status', patent_status, nullable=True),
        sa.Column('cpc_codes', sa.JSON(), nullable=False),
        sa.Column('claims', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_patents_id', 'patents', ['id'])
    op.create_index('ix_patents_inventors_text', 'patents', ['inventors_text'])
    op.create_index('ix_patents_publication_date', 'patents', ['publication_date'])
    op.create_index('ix_patents_relevance_score', 'patents', ['relevance_score'])


def downgrade() -> None:
    """Drop the patents table."""
    op.drop_index('ix_patents_relevance_score', table_name='patents')
    op.drop_index('ix_patents_publication_date', table_name='patents')
    op.drop_index('ix_patents_inventors_text', table_name='patents')
    op.drop_index('ix_patents_id', table_name='patents')
    op.drop_table('patents')
    patent_status.drop(op.get_bind(), checkfirst=True)
