from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .replay_erc20_events_task import replay_erc20_events_task as ledger__replay_erc20_events_task

TaskFn = Callable[..., Any]

TASKS: dict[str, TaskFn] = {
    "ledger__replay_erc20_events_task": ledger__replay_erc20_events_task,
}
