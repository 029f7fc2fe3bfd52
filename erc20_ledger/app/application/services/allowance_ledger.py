from __future__ import annotations

from erc20_ledger.app.domain.entities import TokenAllowance, token_allowance_id
from erc20_ledger.app.domain.ports.out import EntityStore


class AllowanceLedger:
    """
    Owner -> spender allowances per token.

    ERC-20 approve() replaces the allowance, so every Approval overwrites the
    stored amount; nothing is accumulated.
    """

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def overwrite(
        self,
        *,
        token: bytes,
        owner: bytes,
        spender: bytes,
        value: int,
    ) -> TokenAllowance:
        allowance = TokenAllowance(
            id=token_allowance_id(token, owner, spender),
            token=token,
            owner=owner,
            spender=spender,
            amount=value,
        )
        self._store.save(allowance)
        return allowance
