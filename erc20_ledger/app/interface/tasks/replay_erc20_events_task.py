from __future__ import annotations

from sqlalchemy.orm import Session

from erc20_ledger.app.application.services.block_bounds import resolve_block_bounds
from erc20_ledger.app.application.services.replay_erc20_events import (
    BlockRange,
    ReplayStats,
    replay_erc20_events,
)
from erc20_ledger.app.infrastructure.db.engine import create_app_engine
from erc20_ledger.app.infrastructure.factories.erc20_ledger_factory import (
    erc20_ledger_factory,
)


def _parse_address(token_address: str | None) -> bytes | None:
    if token_address is None or not token_address.strip():
        return None
    raw = token_address.strip()
    raw = raw[2:] if raw.lower().startswith("0x") else raw
    b = bytes.fromhex(raw)
    if len(b) != 20:
        raise ValueError(f"token_address must be 20 bytes: {token_address!r}")
    return b


def replay_erc20_events_task(
    *,
    chain_id: int,
    from_block: int | str,
    to_block: int | str,
    token_address: str | None = None,
    backend: str = "sqlalchemy",
) -> ReplayStats:
    """
    Task: rebuild erc20.* ledger tables from on-chain logs.

    - fetches Transfer/Approval logs for the block range via eth_getLogs,
    - reduces them in chain order (tokens, accounts, balances, allowances,
      transactions),
    - commits after every event.

    from_block / to_block can be:
    - int (a specific block number),
    - "earliest" (genesis),
    - "latest" (current chain head).
    """
    if chain_id <= 0:
        raise ValueError("chain_id must be positive")

    engine = create_app_engine()
    try:
        with Session(engine) as session:
            ledger = erc20_ledger_factory(
                backend=backend,
                session=session,
                chain_id=chain_id,
                token_address=_parse_address(token_address),
            )

            resolved_from_block, resolved_to_block = resolve_block_bounds(
                from_block=from_block,
                to_block=to_block,
                latest_block=ledger.source.latest_block,
            )

            return replay_erc20_events(
                reducer=ledger.reducer,
                source=ledger.source,
                block_range=BlockRange(
                    from_block=resolved_from_block,
                    to_block=resolved_to_block,
                ),
                commit=session.commit,
            )
    finally:
        engine.dispose()
