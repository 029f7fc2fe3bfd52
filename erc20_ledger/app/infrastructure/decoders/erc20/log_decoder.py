from __future__ import annotations

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak

from erc20_ledger.app.domain.events import ApprovalParams, TransferParams
from erc20_ledger.app.domain.ports.out import EvmEventDecoder

TRANSFER_SIGNATURE = "Transfer(address,address,uint256)"
APPROVAL_SIGNATURE = "Approval(address,address,uint256)"

TRANSFER_TOPIC0: bytes = keccak(text=TRANSFER_SIGNATURE)
APPROVAL_TOPIC0: bytes = keccak(text=APPROVAL_SIGNATURE)


class Erc20LogDecoder(EvmEventDecoder):
    """
    Decoder for ERC-20 Transfer / Approval logs.

    Layout (both events):
      topic0: keccak(signature)
      topic1: from / owner (address, left-padded to 32 bytes)
      topic2: to / spender (address, left-padded to 32 bytes)
      topic3: none
      data:   value (uint256)

    ERC-721 emits a Transfer with the same topic0 but an indexed tokenId in
    topic3 and empty data; such logs are rejected.
    """

    @property
    def topic0s(self) -> tuple[bytes, bytes]:
        return TRANSFER_TOPIC0, APPROVAL_TOPIC0

    def decode(
        self,
        *,
        topic0: bytes | None,
        topic1: bytes | None,
        topic2: bytes | None,
        topic3: bytes | None,
        data: bytes,
    ) -> TransferParams | ApprovalParams | None:
        if topic0 not in (TRANSFER_TOPIC0, APPROVAL_TOPIC0):
            return None
        if topic1 is None or topic2 is None or topic3 is not None:
            return None

        first = self._topic_as_address(topic1)
        second = self._topic_as_address(topic2)
        value = self._decode_value(data)
        if first is None or second is None or value is None:
            return None

        if topic0 == TRANSFER_TOPIC0:
            return TransferParams(from_address=first, to_address=second, value=value)
        return ApprovalParams(owner=first, spender=second, value=value)

    @staticmethod
    def _topic_as_address(topic: bytes) -> bytes | None:
        b = bytes(topic)
        if len(b) != 32:
            return None
        return b[-20:]

    @staticmethod
    def _decode_value(data: bytes) -> int | None:
        b = bytes(data)
        if len(b) != 32:
            return None
        try:
            (value,) = abi_decode(["uint256"], b)
        except DecodingError:
            return None
        return int(value)
