from __future__ import annotations


class TokenDiscoveryError(ValueError):
    """Contract at the event address cannot back a Token entity."""


class ContractReadReverted(TokenDiscoveryError):
    def __init__(self, method: str) -> None:
        super().__init__(f"ERC-20 read reverted: {method}()")
        self.method = method


class OutOfRangeDecimals(TokenDiscoveryError):
    def __init__(self, decimals: int) -> None:
        super().__init__(f"decimals out of range [0, 255]: {decimals}")
        self.decimals = decimals
