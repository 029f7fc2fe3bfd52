from __future__ import annotations

from sqlalchemy import Index, LargeBinary, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from erc20_ledger.app.infrastructure.db.db_base import LEDGER_SCHEMA, BaseDB


class TokenBalancesDB(BaseDB):
    """
    Current balance per (token, account).

    Identity: id = token address ++ account address (40 bytes).
    The zero address never has a row.
    """

    __tablename__ = "token_balances"
    __table_args__ = (
        # Wallet portfolio lookups
        Index("ix_token_balances_account", "account"),
        # Holders of a token
        Index("ix_token_balances_token_amount", "token", "amount"),
        {"schema": LEDGER_SCHEMA},
    )

    id: Mapped[bytes] = mapped_column(LargeBinary, primary_key=True)
    token: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    account: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    amount: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False)
