from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from erc20_ledger.app.domain.entities import TransactionType


class SkipReason(str, Enum):
    CONTRACT_READ_REVERTED = "contract_read_reverted"
    OUT_OF_RANGE_DECIMALS = "out_of_range_decimals"
    DEGENERATE_TRANSFER = "degenerate_transfer"
    MISSING_ACCOUNT = "missing_account"
    DUPLICATE_EVENT = "duplicate_event"


@dataclass(frozen=True)
class Processed:
    transaction_id: str
    type: TransactionType


@dataclass(frozen=True)
class Skipped:
    reason: SkipReason
    detail: str | None = None


ReductionOutcome = Union[Processed, Skipped]
