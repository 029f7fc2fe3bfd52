from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    Enum,
    Index,
    Integer,
    LargeBinary,
    Numeric,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from erc20_ledger.app.domain.entities import TransactionType
from erc20_ledger.app.infrastructure.db.db_base import LEDGER_SCHEMA, BaseDB


class TransactionsDB(BaseDB):
    """
    Audit trail of reduced ERC-20 logs.

    One row = one Transfer/Approval log. Append-only.

    Identity:
      - id = block_number ++ 0x-hex transaction hash ++ log_index
    """

    __tablename__ = "transactions"
    __table_args__ = (
        # Account -> transactions (outgoing / incoming)
        Index("ix_transactions_caller", "caller"),
        Index("ix_transactions_recipient", "recipient"),
        # Token history in chain order
        Index("ix_transactions_token_order", "token", "block_number", "log_index"),
        # Drill-down by tx hash
        Index("ix_transactions_hash", "hash"),
        {"schema": LEDGER_SCHEMA},
    )

    # -------------------------------------------------------------------------
    # Identity / ordering
    # -------------------------------------------------------------------------
    id: Mapped[str] = mapped_column(Text, primary_key=True)
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, name="transaction_type", native_enum=False, length=16),
        nullable=False,
    )
    # Block timestamp, unix seconds
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    hash: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)

    # -------------------------------------------------------------------------
    # Enclosing transaction context
    # -------------------------------------------------------------------------
    gas_limit: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False)
    gas_price: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False)
    # Native currency value of the enclosing transaction (not the token amount)
    value: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False)

    # -------------------------------------------------------------------------
    # Parties / amounts
    # -------------------------------------------------------------------------
    caller: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    recipient: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    amount: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False)
    token: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
