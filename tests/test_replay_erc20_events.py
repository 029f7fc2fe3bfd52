import pytest

from builders import ALICE, BOB, TOKEN, make_approval, make_transfer
from erc20_ledger.app.application.services.replay_erc20_events import (
    BlockRange,
    replay_erc20_events,
)
from erc20_ledger.app.domain.entities import ZERO_ADDRESS, TokenBalance
from erc20_ledger.app.domain.outcomes import SkipReason


class ListEventSource:
    def __init__(self, events):
        self.events = events
        self.requested = []

    def iter_events(self, *, from_block, to_block):
        self.requested.append((from_block, to_block))
        return iter(self.events)

    def latest_block(self):
        return max(e.block.number for e in self.events)


def test_replay_reduces_every_event_and_commits_each(reducer, store):
    source = ListEventSource(
        [
            make_transfer(ZERO_ADDRESS, ALICE, 100, block_number=1),
            make_transfer(ZERO_ADDRESS, ZERO_ADDRESS, 1, block_number=2),
            make_transfer(ALICE, BOB, 40, block_number=3),
            make_approval(ALICE, BOB, 25, block_number=4),
        ]
    )
    commits = []

    stats = replay_erc20_events(
        reducer=reducer,
        source=source,
        block_range=BlockRange(from_block=1, to_block=4),
        commit=lambda: commits.append(True),
    )

    assert source.requested == [(1, 4)]
    assert stats.processed == 3
    assert stats.skipped == {SkipReason.DEGENERATE_TRANSFER: 1}
    assert stats.total == 4
    assert len(commits) == 4
    assert store.load(TokenBalance, TOKEN + BOB).amount == 40


def test_replaying_same_range_twice_is_idempotent(reducer, store):
    events = [
        make_transfer(ZERO_ADDRESS, ALICE, 100, block_number=1),
        make_transfer(ALICE, BOB, 40, block_number=2),
    ]

    replay_erc20_events(reducer=reducer, source=ListEventSource(events), block_range=BlockRange(1, 2))
    stats = replay_erc20_events(reducer=reducer, source=ListEventSource(events), block_range=BlockRange(1, 2))

    assert stats.processed == 0
    assert stats.skipped == {SkipReason.DUPLICATE_EVENT: 2}
    assert store.load(TokenBalance, TOKEN + ALICE).amount == 60


@pytest.mark.parametrize("from_block, to_block", [(-1, 5), (10, 9)])
def test_invalid_block_range(reducer, from_block, to_block):
    with pytest.raises(ValueError):
        replay_erc20_events(
            reducer=reducer,
            source=ListEventSource([]),
            block_range=BlockRange(from_block=from_block, to_block=to_block),
        )
