from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase

LEDGER_SCHEMA = "erc20"


class BaseDB(DeclarativeBase):
    pass
