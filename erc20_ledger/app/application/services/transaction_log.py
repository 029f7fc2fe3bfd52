from __future__ import annotations

from erc20_ledger.app.domain.entities import (
    ZERO_ADDRESS,
    Transaction,
    TransactionType,
    transaction_id,
)
from erc20_ledger.app.domain.events import BlockContext, TransactionContext
from erc20_ledger.app.domain.ports.out import EntityStore


def classify_transfer(
    sender: bytes,
    receiver: bytes,
    *,
    zero_address: bytes = ZERO_ADDRESS,
) -> TransactionType:
    """
    MINT when tokens come from the zero address, BURN when they go to it,
    TRANSFER otherwise.

    zero -> zero transfers are dropped by the reducer before classification.
    """
    if sender == zero_address and receiver == zero_address:
        raise ValueError("zero -> zero transfer has no transaction type")
    if sender == zero_address:
        return TransactionType.MINT
    if receiver == zero_address:
        return TransactionType.BURN
    return TransactionType.TRANSFER


class TransactionLog:
    """
    Append-only audit trail: one Transaction per processed log.

    Execution context (timestamp, hash, block, log index, gas, native value)
    is copied verbatim from the event.
    """

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def exists(self, tx_id: str) -> bool:
        return self._store.load(Transaction, tx_id) is not None

    def append(
        self,
        *,
        type: TransactionType,
        token: bytes,
        caller: bytes,
        recipient: bytes,
        amount: int,
        block: BlockContext,
        transaction: TransactionContext,
        log_index: int,
    ) -> Transaction:
        record = Transaction(
            id=transaction_id(block.number, transaction.hash, log_index),
            type=type,
            timestamp=block.timestamp,
            hash=transaction.hash,
            block_number=block.number,
            log_index=log_index,
            gas_limit=transaction.gas_limit,
            gas_price=transaction.gas_price,
            caller=caller,
            recipient=recipient,
            value=transaction.value,
            amount=amount,
            token=token,
        )
        self._store.save(record)
        return record
