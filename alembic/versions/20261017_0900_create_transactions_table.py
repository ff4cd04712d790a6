"""create transactions table

Revision ID: 20261017_0900
Revises: 
Create Date: 2026-10-17 09:00:00
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261017_0900'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'transactions',
        sa.Column('id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('parent_id', sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(
            ['parent_id'], ['transactions.id'], name='fk_transactions_parent_id'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_type', 'transactions', ['type'])
    op.create_index('ix_transactions_parent_id', 'transactions', ['parent_id'])


def downgrade() -> None:
    op.drop_index('ix_transactions_parent_id', table_name='transactions')
    op.drop_index('ix_transactions_type', table_name='transactions')
    op.drop_table('transactions')
