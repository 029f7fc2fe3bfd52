from __future__ import annotations

from sqlalchemy import Index, Integer, LargeBinary, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from erc20_ledger.app.infrastructure.db.db_base import LEDGER_SCHEMA, BaseDB


class TokensDB(BaseDB):
    """
    ERC-20 token registry.

    One row = one token contract, with name/symbol/decimals/totalSupply
    snapshotted when the first Transfer/Approval log was reduced.
    Rows are written once and never updated.
    """

    __tablename__ = "tokens"
    __table_args__ = (
        Index("ix_tokens_symbol", "symbol"),
        {"schema": LEDGER_SCHEMA},
    )

    # 20-byte contract address (no 0x prefix)
    id: Mapped[bytes] = mapped_column(LargeBinary, primary_key=True)

    symbol: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    decimals: Mapped[int] = mapped_column(Integer, nullable=False)
    # uint256 range
    total_supply: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False)
