"""Initial schema: usuarios and fazendas

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create usuarios table
    op.create_table(
        'usuarios',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('nome', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('senha', sa.String(length=255), nullable=False),
        sa.Column('perfil', sa.String(length=50), nullable=False, server_default='USER'),
        sa.Column('enabled', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_usuarios_email', 'usuarios', ['email'], unique=True)

    # Create fazendas table
    op.create_table(
        'fazendas',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('nome', sa.String(length=255), nullable=False),
        sa.Column('localizacao', sa.String(length=255), nullable=True),
        sa.Column('quantidade_vacas', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('fundacao', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_fazendas_nome', 'fazendas', ['nome'])


def downgrade() -> None:
    op.drop_index('ix_fazendas_nome', table_name='fazendas')
    op.drop_table('fazendas')
    op.drop_index('ix_usuarios_email', table_name='usuarios')
    op.drop_table('usuarios')
