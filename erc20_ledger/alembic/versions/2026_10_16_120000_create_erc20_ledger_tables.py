"""create_erc20_ledger_tables

Revision ID: 2026_10_16_120000
Revises:
Create Date: 2026-10-16 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '2026_10_16_120000'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMA = 'erc20'
UINT256 = sa.Numeric(78, 0)


def upgrade() -> None:
    op.execute(f'CREATE SCHEMA IF NOT EXISTS {SCHEMA}')

    op.create_table(
        'tokens',
        sa.Column('id', sa.LargeBinary(), primary_key=True),
        sa.Column('symbol', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('decimals', sa.Integer(), nullable=False),
        sa.Column('total_supply', UINT256, nullable=False),
        schema=SCHEMA,
    )
    op.create_index('ix_tokens_symbol', 'tokens', ['symbol'], schema=SCHEMA)

    op.create_table(
        'accounts',
        sa.Column('id', sa.LargeBinary(), primary_key=True),
        schema=SCHEMA,
    )

    op.create_table(
        'token_balances',
        sa.Column('id', sa.LargeBinary(), primary_key=True),
        sa.Column('token', sa.LargeBinary(), nullable=False),
        sa.Column('account', sa.LargeBinary(), nullable=False),
        sa.Column('amount', UINT256, nullable=False),
        schema=SCHEMA,
    )
    op.create_index('ix_token_balances_account', 'token_balances', ['account'], schema=SCHEMA)
    op.create_index('ix_token_balances_token_amount', 'token_balances', ['token', 'amount'], schema=SCHEMA)

    op.create_table(
        'token_allowances',
        sa.Column('id', sa.LargeBinary(), primary_key=True),
        sa.Column('token', sa.LargeBinary(), nullable=False),
        sa.Column('owner', sa.LargeBinary(), nullable=False),
        sa.Column('spender', sa.LargeBinary(), nullable=False),
        sa.Column('amount', UINT256, nullable=False),
        schema=SCHEMA,
    )
    op.create_index('ix_token_allowances_owner', 'token_allowances', ['owner'], schema=SCHEMA)
    op.create_index('ix_token_allowances_spender', 'token_allowances', ['spender'], schema=SCHEMA)

    op.create_table(
        'transactions',
        sa.Column('id', sa.Text(), primary_key=True),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('timestamp', sa.BigInteger(), nullable=False),
        sa.Column('hash', sa.LargeBinary(), nullable=False),
        sa.Column('block_number', sa.BigInteger(), nullable=False),
        sa.Column('log_index', sa.Integer(), nullable=False),
        sa.Column('gas_limit', UINT256, nullable=False),
        sa.Column('gas_price', UINT256, nullable=False),
        sa.Column('value', UINT256, nullable=False),
        sa.Column('caller', sa.LargeBinary(), nullable=False),
        sa.Column('recipient', sa.LargeBinary(), nullable=False),
        sa.Column('amount', UINT256, nullable=False),
        sa.Column('token', sa.LargeBinary(), nullable=False),
        schema=SCHEMA,
    )
    op.create_index('ix_transactions_caller', 'transactions', ['caller'], schema=SCHEMA)
    op.create_index('ix_transactions_recipient', 'transactions', ['recipient'], schema=SCHEMA)
    op.create_index(
        'ix_transactions_token_order',
        'transactions',
        ['token', 'block_number', 'log_index'],
        schema=SCHEMA,
    )
    op.create_index('ix_transactions_hash', 'transactions', ['hash'], schema=SCHEMA)


def downgrade() -> None:
    op.drop_table('transactions', schema=SCHEMA)
    op.drop_table('token_allowances', schema=SCHEMA)
    op.drop_table('token_balances', schema=SCHEMA)
    op.drop_table('accounts', schema=SCHEMA)
    op.drop_table('tokens', schema=SCHEMA)
