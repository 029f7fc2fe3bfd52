from __future__ import annotations

from erc20_ledger.app.domain.entities import Account
from erc20_ledger.app.domain.ports.out import EntityStore


class AccountRegistry:
    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def load_or_create_account(self, address: bytes) -> Account:
        account = self._store.load(Account, address)
        if account is None:
            account = Account(id=address)
            self._store.save(account)
        return account
