from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


ZERO_ADDRESS: bytes = b"\x00" * 20


class TransactionType(str, Enum):
    MINT = "MINT"
    BURN = "BURN"
    TRANSFER = "TRANSFER"
    APPROVAL = "APPROVAL"


@dataclass
class Token:
    """
    ERC-20 token discovered from its first Transfer/Approval log.

    Metadata is a snapshot taken at discovery time and is never refreshed.
    """

    id: bytes
    symbol: str
    name: str
    decimals: int
    total_supply: int


@dataclass
class Account:
    id: bytes


@dataclass
class TokenBalance:
    id: bytes
    token: bytes
    account: bytes
    amount: int


@dataclass
class TokenAllowance:
    id: bytes
    token: bytes
    owner: bytes
    spender: bytes
    amount: int


@dataclass
class Transaction:
    """
    Append-only audit record, one per processed log.

    `value` is the native value of the enclosing transaction,
    `amount` is the token-denominated value carried by the log.
    """

    id: str
    type: TransactionType
    timestamp: int
    hash: bytes
    block_number: int
    log_index: int
    gas_limit: int
    gas_price: int
    caller: bytes
    recipient: bytes
    value: int
    amount: int
    token: bytes


def token_balance_id(token: bytes, account: bytes) -> bytes:
    return token + account


def token_allowance_id(token: bytes, owner: bytes, spender: bytes) -> bytes:
    return token + owner + spender


def transaction_id(block_number: int, tx_hash: bytes, log_index: int) -> str:
    """
    Canonical event identity: block number ++ 0x-hex tx hash ++ log index.

    The hash has a fixed width, so the concatenation is unambiguous.
    """
    return f"{block_number}0x{tx_hash.hex()}{log_index}"
