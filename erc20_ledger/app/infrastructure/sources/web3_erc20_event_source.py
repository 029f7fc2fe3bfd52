from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from web3 import Web3

from erc20_ledger.app.domain.events import (
    ApprovalEvent,
    ApprovalParams,
    BlockContext,
    Erc20Event,
    TransactionContext,
    TransferEvent,
    TransferParams,
)
from erc20_ledger.app.domain.ports.out import Erc20EventSource
from erc20_ledger.app.infrastructure.decoders.erc20.log_decoder import Erc20LogDecoder

logger = logging.getLogger(__name__)


def _windows(from_block: int, to_block: int, size: int) -> Iterable[tuple[int, int]]:
    for start in range(from_block, to_block + 1, size):
        yield start, min(start + size - 1, to_block)


def _topic(topics: list[Any], i: int) -> bytes | None:
    return bytes(topics[i]) if len(topics) > i else None


class Web3Erc20EventSource(Erc20EventSource):
    """
    Event source reading ERC-20 logs straight from a node.

    Strategy:
    - eth_getLogs over fixed-size block windows, filtered by Transfer/Approval
      topic0 (and optionally by one token contract),
    - logs sorted by (blockNumber, logIndex) so the reducer sees chain order,
    - block timestamp and transaction gas/value fetched once per block / tx.
    """

    def __init__(
        self,
        *,
        w3: Web3,
        decoder: Erc20LogDecoder,
        token_address: bytes | None = None,
        batch_size: int = 2000,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._w3 = w3
        self._decoder = decoder
        self._token_address = token_address
        self._batch_size = batch_size

    def iter_events(
        self,
        *,
        from_block: int,
        to_block: int,
    ) -> Iterator[Erc20Event]:
        for start, end in _windows(from_block, to_block, self._batch_size):
            logs = self._w3.eth.get_logs(self._filter_params(start, end))
            logs = sorted(logs, key=lambda lg: (lg["blockNumber"], lg["logIndex"]))

            logger.info(
                "Fetched %s candidate logs for blocks %s-%s",
                len(logs),
                start,
                end,
            )

            blocks: dict[int, BlockContext] = {}
            transactions: dict[bytes, TransactionContext] = {}

            for lg in logs:
                topics = list(lg["topics"])
                decoded = self._decoder.decode(
                    topic0=_topic(topics, 0),
                    topic1=_topic(topics, 1),
                    topic2=_topic(topics, 2),
                    topic3=_topic(topics, 3),
                    data=bytes(lg["data"]),
                )
                if decoded is None:
                    continue

                block_number = int(lg["blockNumber"])
                tx_hash = bytes(lg["transactionHash"])

                block = blocks.get(block_number)
                if block is None:
                    block = self._block_context(block_number)
                    blocks[block_number] = block

                tx = transactions.get(tx_hash)
                if tx is None:
                    tx = self._transaction_context(tx_hash)
                    transactions[tx_hash] = tx

                address = bytes.fromhex(lg["address"][2:])
                log_index = int(lg["logIndex"])

                if isinstance(decoded, TransferParams):
                    yield TransferEvent(
                        address=address,
                        params=decoded,
                        block=block,
                        transaction=tx,
                        log_index=log_index,
                    )
                elif isinstance(decoded, ApprovalParams):
                    yield ApprovalEvent(
                        address=address,
                        params=decoded,
                        block=block,
                        transaction=tx,
                        log_index=log_index,
                    )

    def latest_block(self) -> int:
        return int(self._w3.eth.block_number)

    def _filter_params(self, from_block: int, to_block: int) -> dict[str, Any]:
        params: dict[str, Any] = {
            "fromBlock": from_block,
            "toBlock": to_block,
            "topics": [["0x" + t.hex() for t in self._decoder.topic0s]],
        }
        if self._token_address is not None:
            params["address"] = self._w3.to_checksum_address("0x" + self._token_address.hex())
        return params

    def _block_context(self, block_number: int) -> BlockContext:
        block = self._w3.eth.get_block(block_number)
        return BlockContext(number=block_number, timestamp=int(block["timestamp"]))

    def _transaction_context(self, tx_hash: bytes) -> TransactionContext:
        tx = self._w3.eth.get_transaction(tx_hash)
        return TransactionContext(
            hash=tx_hash,
            gas_limit=int(tx["gas"]),
            gas_price=int(tx.get("gasPrice") or 0),
            value=int(tx["value"]),
        )
