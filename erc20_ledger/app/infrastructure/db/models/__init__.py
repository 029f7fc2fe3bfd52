from erc20_ledger.app.infrastructure.db.models.accounts import AccountsDB
from erc20_ledger.app.infrastructure.db.models.token_allowances import TokenAllowancesDB
from erc20_ledger.app.infrastructure.db.models.token_balances import TokenBalancesDB
from erc20_ledger.app.infrastructure.db.models.tokens import TokensDB
from erc20_ledger.app.infrastructure.db.models.transactions import TransactionsDB

__all__ = [
    "AccountsDB",
    "TokenAllowancesDB",
    "TokenBalancesDB",
    "TokensDB",
    "TransactionsDB",
]
