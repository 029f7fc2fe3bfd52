from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable

from erc20_ledger.app.application.services.event_reducer import EventReducer
from erc20_ledger.app.domain.outcomes import Processed, SkipReason
from erc20_ledger.app.domain.ports.out import Erc20EventSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockRange:
    from_block: int
    to_block: int

    def validate(self) -> None:
        if self.from_block < 0 or self.to_block < 0:
            raise ValueError("Block numbers must be non-negative")
        if self.from_block > self.to_block:
            raise ValueError("from_block must be <= to_block")


@dataclass
class ReplayStats:
    processed: int = 0
    skipped: Counter[SkipReason] = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return self.processed + sum(self.skipped.values())


def replay_erc20_events(
    *,
    reducer: EventReducer,
    source: Erc20EventSource,
    block_range: BlockRange,
    commit: Callable[[], None] | None = None,
) -> ReplayStats:
    """
    Application-level use case: feed a block range of ERC-20 logs to the reducer.

    Events are reduced one at a time in the order the source yields them.
    `commit` runs after every event so each reduction is persisted atomically.
    """
    block_range.validate()

    logger.info(
        "Starting ERC20 events replay",
        extra={"from_block": block_range.from_block, "to_block": block_range.to_block},
    )

    stats = ReplayStats()
    for event in source.iter_events(
        from_block=block_range.from_block,
        to_block=block_range.to_block,
    ):
        outcome = reducer.handle(event)
        if isinstance(outcome, Processed):
            stats.processed += 1
        else:
            stats.skipped[outcome.reason] += 1

        if commit is not None:
            commit()

    logger.info(
        "Finished ERC20 events replay: %s processed, %s skipped",
        stats.processed,
        sum(stats.skipped.values()),
        extra={"skipped": {k.value: v for k, v in stats.skipped.items()}},
    )
    return stats
