from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Protocol, TypeVar

from erc20_ledger.app.domain.events import Erc20Event

E = TypeVar("E")
T = TypeVar("T")


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """
    Outcome of a single read-only contract call.

    Either carries a value or is marked reverted; there is no partial state.
    """

    value: T | None = None
    reverted: bool = False

    @classmethod
    def ok(cls, value: T) -> "CallResult[T]":
        return cls(value=value, reverted=False)

    @classmethod
    def revert(cls) -> "CallResult[T]":
        return cls(value=None, reverted=True)


class EntityStore(Protocol):
    """
    Port for persisting ledger entities.

    Implementations provide load-by-id and idempotent upsert-by-id. Entities
    returned by `load` are detached copies: mutating one has no effect until
    it is passed back to `save`.
    """

    def load(self, entity_type: type[E], entity_id: Any) -> E | None:
        ...

    def save(self, entity: Any) -> None:
        ...


class Erc20ContractReader(Protocol):
    """
    Read-only accessor bound to a single ERC-20 contract.

    Each call returns CallResult.revert() when the contract does not implement
    the method (non-compliant token, proxy weirdness, revert, empty response).
    """

    def try_name(self) -> CallResult[str]: ...

    def try_symbol(self) -> CallResult[str]: ...

    def try_decimals(self) -> CallResult[int]: ...

    def try_total_supply(self) -> CallResult[int]: ...


class Erc20ContractBinder(Protocol):
    """
    Binds an Erc20ContractReader to a contract address.

    contract_address is 20-byte bytes (no 0x prefix).
    """

    def bind(self, contract_address: bytes) -> Erc20ContractReader:
        ...


class EvmEventDecoder(Protocol):
    def decode(
        self,
        *,
        topic0: bytes | None,
        topic1: bytes | None,
        topic2: bytes | None,
        topic3: bytes | None,
        data: bytes,
    ) -> Any | None:
        """
        Decode an EVM log (topics + data) into typed event params.

        Return None if the log is not decodable / not the expected event.
        """
        ...


class Erc20EventSource(Protocol):
    """
    Port for the host side of the pipeline: delivers decoded ERC-20 events.

    Implementations must yield events in chain order
    (block number, then log index).
    """

    def iter_events(
        self,
        *,
        from_block: int,
        to_block: int,
    ) -> Iterator[Erc20Event]:
        ...

    def latest_block(self) -> int:
        ...
