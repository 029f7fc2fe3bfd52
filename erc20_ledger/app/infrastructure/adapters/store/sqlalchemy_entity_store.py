from __future__ import annotations

from dataclasses import asdict
from decimal import Decimal
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from erc20_ledger.app.domain.entities import (
    Account,
    Token,
    TokenAllowance,
    TokenBalance,
    Transaction,
)
from erc20_ledger.app.infrastructure.db.db_base import BaseDB
from erc20_ledger.app.infrastructure.db.models import (
    AccountsDB,
    TokenAllowancesDB,
    TokenBalancesDB,
    TokensDB,
    TransactionsDB,
)

E = TypeVar("E")

_MODELS: dict[type, type[BaseDB]] = {
    Token: TokensDB,
    Account: AccountsDB,
    TokenBalance: TokenBalancesDB,
    TokenAllowance: TokenAllowancesDB,
    Transaction: TransactionsDB,
}


class SqlAlchemyEntityStore:
    """
    EntityStore adapter over a SQLAlchemy Session.

    Strategy:
    - load: Session.get by primary key (identity map first, then SELECT),
      converted to a detached domain entity.
    - save: Session.merge, i.e. upsert by primary key.

    Transaction boundaries belong to the caller: the store never commits.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def load(self, entity_type: type[E], entity_id: Any) -> E | None:
        row = self._session.get(_model_for(entity_type), entity_id)
        if row is None:
            return None
        return entity_type(**_row_values(row, entity_type))

    def save(self, entity: Any) -> None:
        model = _model_for(type(entity))
        self._session.merge(model(**asdict(entity)))


def _model_for(entity_type: type) -> type[BaseDB]:
    try:
        return _MODELS[entity_type]
    except KeyError:
        raise ValueError(f"Unsupported entity type: {entity_type.__name__}")


def _row_values(row: BaseDB, entity_type: type) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name in entity_type.__dataclass_fields__:
        v = getattr(row, name)
        # NUMERIC comes back as Decimal; drivers may hand out memoryview for bytea
        if isinstance(v, Decimal):
            v = int(v)
        elif isinstance(v, memoryview):
            v = v.tobytes()
        values[name] = v
    return values
