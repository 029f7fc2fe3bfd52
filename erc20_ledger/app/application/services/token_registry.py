from __future__ import annotations

import logging

from erc20_ledger.app.domain.entities import Token
from erc20_ledger.app.domain.errors import ContractReadReverted, OutOfRangeDecimals
from erc20_ledger.app.domain.ports.out import Erc20ContractBinder, EntityStore

logger = logging.getLogger(__name__)

# Token.decimals is persisted in a fixed-width column; some mainnet tokens
# report absurd values that would overflow it.
_MAX_DECIMALS = 255


def _normalize_text(val: str) -> str:
    # bytes32-padded names come back NUL-terminated; Postgres TEXT rejects NUL
    return val.rstrip("\x00").replace("\x00", "")


class TokenRegistry:
    """
    Ensures a Token entity exists for a contract address.

    Discovery:
    - cache hit -> returned unchanged (no refresh, even if the contract changed),
    - otherwise name(), symbol(), decimals(), totalSupply() are read in order,
      stopping at the first revert,
    - decimals outside [0, 255] reject the contract,
    - a valid contract is persisted exactly once.

    A rejected contract raises a TokenDiscoveryError subclass carrying the
    reason; nothing is written in that case.
    """

    def __init__(self, store: EntityStore, *, binder: Erc20ContractBinder) -> None:
        self._store = store
        self._binder = binder

    def load_or_create_token(self, contract_address: bytes) -> Token:
        token = self._store.load(Token, contract_address)
        if token is not None:
            return token

        erc20 = self._binder.bind(contract_address)

        name = erc20.try_name()
        if name.reverted:
            raise ContractReadReverted("name")

        symbol = erc20.try_symbol()
        if symbol.reverted:
            raise ContractReadReverted("symbol")

        decimals = erc20.try_decimals()
        if decimals.reverted:
            raise ContractReadReverted("decimals")

        total_supply = erc20.try_total_supply()
        if total_supply.reverted:
            raise ContractReadReverted("totalSupply")

        d = int(decimals.value)
        if d < 0 or d > _MAX_DECIMALS:
            raise OutOfRangeDecimals(d)

        token = Token(
            id=contract_address,
            symbol=_normalize_text(symbol.value),
            name=_normalize_text(name.value),
            decimals=d,
            total_supply=int(total_supply.value),
        )
        self._store.save(token)

        logger.info(
            "Discovered ERC20 token %s (%s)",
            "0x" + contract_address.hex(),
            token.symbol,
            extra={"decimals": token.decimals, "total_supply": token.total_supply},
        )
        return token
