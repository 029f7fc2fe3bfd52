from __future__ import annotations

from sqlalchemy import Index, LargeBinary, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from erc20_ledger.app.infrastructure.db.db_base import LEDGER_SCHEMA, BaseDB


class TokenAllowancesDB(BaseDB):
    """
    Latest approved allowance per (token, owner, spender).

    Identity: id = token ++ owner ++ spender (60 bytes). Overwritten on every
    Approval log.
    """

    __tablename__ = "token_allowances"
    __table_args__ = (
        Index("ix_token_allowances_owner", "owner"),
        Index("ix_token_allowances_spender", "spender"),
        {"schema": LEDGER_SCHEMA},
    )

    id: Mapped[bytes] = mapped_column(LargeBinary, primary_key=True)
    token: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    owner: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    spender: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    amount: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False)
