from __future__ import annotations

import pytest

from builders import FakeBinder, RecordingEntityStore
from erc20_ledger.app.application.services.event_reducer import EventReducer


@pytest.fixture
def store() -> RecordingEntityStore:
    return RecordingEntityStore()


@pytest.fixture
def binder() -> FakeBinder:
    return FakeBinder()


@pytest.fixture
def reducer(store: RecordingEntityStore, binder: FakeBinder) -> EventReducer:
    return EventReducer(store, binder=binder)
