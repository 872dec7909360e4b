"""create players and matches

Revision ID: 5b7c2e9d1a40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b7c2e9d1a40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'players' not in existing_tables:
        op.create_table(
            'players',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_players_name', 'players', ['name'], unique=True)

    if 'matches' not in existing_tables:
        op.create_table(
            'matches',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('player_id', sa.String(length=36), nullable=False),
            sa.Column('maze', sa.Text(), nullable=False),
            sa.Column('grid_size', sa.Integer(), nullable=False),
            sa.Column('position_x', sa.Integer(), nullable=False),
            sa.Column('position_y', sa.Integer(), nullable=False),
            sa.Column('finished', sa.Boolean(), nullable=False),
            sa.Column('elapsed_seconds', sa.Float(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.Column('version', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['player_id'], ['players.id']),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_matches_player_id', 'matches', ['player_id'], unique=False)


def downgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'matches' in existing_tables:
        op.drop_index('ix_matches_player_id', table_name='matches')
        op.drop_table('matches')
    if 'players' in existing_tables:
        op.drop_index('ix_players_name', table_name='players')
        op.drop_table('players')
