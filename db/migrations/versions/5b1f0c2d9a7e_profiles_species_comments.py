"""profiles, species, comments

Revision ID: 5b1f0c2d9a7e
Revises:
Create Date: 2026-10-17 10:12:44.120931

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2d9a7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('display_name', sa.String(length=30), nullable=True),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('biography', sa.String(length=160), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'species',
        sa.Column('id', sa.BigInteger().with_variant(sa.Integer(), 'sqlite'), nullable=False),
        sa.Column('author', sa.String(), nullable=False),
        sa.Column('scientific_name', sa.String(), nullable=True),
        sa.Column('common_name', sa.String(), nullable=True),
        sa.Column('total_population', sa.BigInteger(), nullable=True),
        sa.Column('kingdom', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['author'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_species_author', 'species', ['author'], unique=False)
    op.create_index('ix_species_scientific_name', 'species', ['scientific_name'], unique=False)
    op.create_index('ix_species_common_name', 'species', ['common_name'], unique=False)
    op.create_table(
        'comments',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('species_id', sa.BigInteger().with_variant(sa.Integer(), 'sqlite'), nullable=False),
        sa.Column('author', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['author'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['species_id'], ['species.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_comments_species_id', 'comments', ['species_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_comments_species_id', table_name='comments')
    op.drop_table('comments')
    op.drop_index('ix_species_common_name', table_name='species')
    op.drop_index('ix_species_scientific_name', table_name='species')
    op.drop_index('ix_species_author', table_name='species')
    op.drop_table('species')
    op.drop_table('profiles')
