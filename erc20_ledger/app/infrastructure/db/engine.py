from __future__ import annotations

from sqlalchemy import Engine, create_engine

from erc20_ledger.app.config import settings


def create_app_engine(*, echo: bool = False) -> Engine:
    """
    Factory for the Engine used by replay tasks.

    The reducer is synchronous (one event runs to completion before the next),
    so the ledger store uses a plain sync engine.
    """
    return create_engine(
        settings.database_url,  # postgresql+psycopg2://...
        echo=echo,
        pool_pre_ping=True,
    )
