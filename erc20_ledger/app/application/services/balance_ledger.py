from __future__ import annotations

import logging

from erc20_ledger.app.domain.entities import ZERO_ADDRESS, TokenBalance, token_balance_id
from erc20_ledger.app.domain.ports.out import EntityStore

logger = logging.getLogger(__name__)


class BalanceLedger:
    """
    Applies Transfer values to per-(token, account) balances.

    The zero address is the mint source / burn destination and never gets a
    balance row.

    Debit policy: when the sender has no balance row, or the row holds less
    than the transferred value, the row is re-initialised to the transferred
    value before subtracting. Balances accrued before indexing started are
    therefore tolerated instead of underflowing.
    """

    def __init__(self, store: EntityStore, *, zero_address: bytes = ZERO_ADDRESS) -> None:
        self._store = store
        self._zero_address = zero_address

    def apply_transfer(
        self,
        *,
        token: bytes,
        sender: bytes,
        receiver: bytes,
        value: int,
    ) -> None:
        if sender != self._zero_address:
            self.debit(token=token, account=sender, value=value)
        if receiver != self._zero_address:
            self.credit(token=token, account=receiver, value=value)

    def debit(self, *, token: bytes, account: bytes, value: int) -> TokenBalance:
        balance_id = token_balance_id(token, account)
        balance = self._store.load(TokenBalance, balance_id)

        if balance is None or balance.amount < value:
            if balance is not None:
                logger.warning(
                    "Resyncing balance of %s on %s: ledger holds %s, transfer moves %s",
                    "0x" + account.hex(),
                    "0x" + token.hex(),
                    balance.amount,
                    value,
                )
            balance = TokenBalance(
                id=balance_id,
                token=token,
                account=account,
                amount=value,
            )

        balance.amount = balance.amount - value
        self._store.save(balance)
        return balance

    def credit(self, *, token: bytes, account: bytes, value: int) -> TokenBalance:
        balance_id = token_balance_id(token, account)
        balance = self._store.load(TokenBalance, balance_id)

        if balance is None:
            balance = TokenBalance(
                id=balance_id,
                token=token,
                account=account,
                amount=0,
            )

        balance.amount = balance.amount + value
        self._store.save(balance)
        return balance
