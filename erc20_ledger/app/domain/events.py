from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class BlockContext:
    number: int
    timestamp: int


@dataclass(frozen=True)
class TransactionContext:
    hash: bytes
    gas_limit: int
    gas_price: int
    value: int


@dataclass(frozen=True)
class TransferParams:
    from_address: bytes
    to_address: bytes
    value: int


@dataclass(frozen=True)
class ApprovalParams:
    owner: bytes
    spender: bytes
    value: int


@dataclass(frozen=True)
class TransferEvent:
    """
    ERC-20 Transfer log with its execution context.

    address is the emitting token contract (20-byte bytes, no 0x prefix).
    """

    address: bytes
    params: TransferParams
    block: BlockContext
    transaction: TransactionContext
    log_index: int


@dataclass(frozen=True)
class ApprovalEvent:
    address: bytes
    params: ApprovalParams
    block: BlockContext
    transaction: TransactionContext
    log_index: int


Erc20Event = Union[TransferEvent, ApprovalEvent]
