from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session
from web3 import HTTPProvider, Web3

from erc20_ledger.app.application.services.event_reducer import EventReducer
from erc20_ledger.app.config import settings
from erc20_ledger.app.domain.ports.out import Erc20EventSource, EntityStore
from erc20_ledger.app.infrastructure.adapters.store.sqlalchemy_entity_store import (
    SqlAlchemyEntityStore,
)
from erc20_ledger.app.infrastructure.decoders.erc20.log_decoder import Erc20LogDecoder
from erc20_ledger.app.infrastructure.fetchers.erc20_contract_reader import (
    Web3Erc20ContractBinder,
)
from erc20_ledger.app.infrastructure.sources.web3_erc20_event_source import (
    Web3Erc20EventSource,
)


@dataclass(frozen=True)
class Erc20Ledger:
    reducer: EventReducer
    source: Erc20EventSource
    store: EntityStore


Erc20LedgerFactory = Callable[[Session, int, Optional[bytes]], Erc20Ledger]

_ERC20_LEDGER_REGISTRY: Dict[str, Erc20LedgerFactory] = {}


def _make_sqlalchemy_ledger(
    session: Session,
    *,
    chain_id: int,
    token_address: bytes | None,
    batch_size: int,
) -> Erc20Ledger:
    """
    Wire dependencies for SQLAlchemy backend:
    - Web3 provider (per-chain RPC URL)
    - ERC-20 contract binder (name/symbol/decimals/totalSupply via eth_call)
    - ERC-20 log source (eth_getLogs + block/tx context)
    - SQLAlchemy entity store bound to the caller's session
    """
    rpc_url = settings.rpc_url(chain_id)
    w3 = Web3(
        HTTPProvider(
            rpc_url,
            request_kwargs={"timeout": settings.rpc_timeout_s},
        )
    )

    store = SqlAlchemyEntityStore(session)
    reducer = EventReducer(
        store,
        binder=Web3Erc20ContractBinder(w3=w3),
        zero_address=settings.zero_address_bytes,
    )
    source = Web3Erc20EventSource(
        w3=w3,
        decoder=Erc20LogDecoder(),
        token_address=token_address,
        batch_size=batch_size,
    )
    return Erc20Ledger(reducer=reducer, source=source, store=store)


# Register backends
_ERC20_LEDGER_REGISTRY["sqlalchemy"] = lambda session, chain_id, token_address: _make_sqlalchemy_ledger(
    session,
    chain_id=chain_id,
    token_address=token_address,
    batch_size=settings.replay_batch_size,
)


def erc20_ledger_factory(
    *,
    backend: str,
    session: Session,
    chain_id: int,
    token_address: bytes | None = None,
) -> Erc20Ledger:
    """
    Create the reducer + event source pair for the given backend.

    token_address restricts the source to a single token contract;
    None replays every ERC-20 log in the range.
    """
    try:
        factory = _ERC20_LEDGER_REGISTRY[backend]
    except KeyError:
        raise ValueError(f"Unsupported ERC20 ledger backend: {backend!r}")

    return factory(session, chain_id, token_address)
