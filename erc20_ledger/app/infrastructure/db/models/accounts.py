from __future__ import annotations

from sqlalchemy import LargeBinary
from sqlalchemy.orm import Mapped, mapped_column

from erc20_ledger.app.infrastructure.db.db_base import LEDGER_SCHEMA, BaseDB


class AccountsDB(BaseDB):
    """Every address seen as owner, spender, sender or receiver."""

    __tablename__ = "accounts"
    __table_args__ = ({"schema": LEDGER_SCHEMA},)

    id: Mapped[bytes] = mapped_column(LargeBinary, primary_key=True)
