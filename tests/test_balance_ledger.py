import pytest

from builders import ALICE, BOB, TOKEN
from erc20_ledger.app.application.services.balance_ledger import BalanceLedger
from erc20_ledger.app.domain.entities import ZERO_ADDRESS, TokenBalance, token_balance_id


@pytest.fixture
def ledger(store) -> BalanceLedger:
    return BalanceLedger(store)


def _amount(store, account):
    balance = store.load(TokenBalance, token_balance_id(TOKEN, account))
    return None if balance is None else balance.amount


def test_mint_only_credits_receiver(ledger, store):
    ledger.apply_transfer(token=TOKEN, sender=ZERO_ADDRESS, receiver=ALICE, value=100)

    assert _amount(store, ALICE) == 100
    assert _amount(store, ZERO_ADDRESS) is None


def test_burn_only_debits_sender(ledger, store):
    ledger.credit(token=TOKEN, account=ALICE, value=100)

    ledger.apply_transfer(token=TOKEN, sender=ALICE, receiver=ZERO_ADDRESS, value=30)

    assert _amount(store, ALICE) == 70
    assert _amount(store, ZERO_ADDRESS) is None


def test_transfer_moves_value(ledger, store):
    ledger.credit(token=TOKEN, account=ALICE, value=100)

    ledger.apply_transfer(token=TOKEN, sender=ALICE, receiver=BOB, value=40)

    assert _amount(store, ALICE) == 60
    assert _amount(store, BOB) == 40


def test_zero_to_zero_touches_nothing(ledger, store):
    ledger.apply_transfer(token=TOKEN, sender=ZERO_ADDRESS, receiver=ZERO_ADDRESS, value=5)

    assert store.write_count == 0


def test_debit_without_balance_row_ends_at_zero(ledger, store):
    balance = ledger.debit(token=TOKEN, account=ALICE, value=50)

    assert balance == TokenBalance(
        id=TOKEN + ALICE,
        token=TOKEN,
        account=ALICE,
        amount=0,
    )
    assert _amount(store, ALICE) == 0


def test_insufficient_balance_is_resynced_to_transfer_value(ledger, store):
    ledger.credit(token=TOKEN, account=ALICE, value=10)

    ledger.debit(token=TOKEN, account=ALICE, value=25)

    assert _amount(store, ALICE) == 0


def test_exact_balance_is_debited_normally(ledger, store):
    ledger.credit(token=TOKEN, account=ALICE, value=25)

    ledger.debit(token=TOKEN, account=ALICE, value=25)

    assert _amount(store, ALICE) == 0


def test_self_transfer_keeps_balance(ledger, store):
    ledger.credit(token=TOKEN, account=ALICE, value=100)

    ledger.apply_transfer(token=TOKEN, sender=ALICE, receiver=ALICE, value=40)

    assert _amount(store, ALICE) == 100


def test_custom_zero_address_sentinel(store):
    sentinel = b"\xee" * 20
    ledger = BalanceLedger(store, zero_address=sentinel)

    ledger.apply_transfer(token=TOKEN, sender=sentinel, receiver=ALICE, value=7)
    ledger.apply_transfer(token=TOKEN, sender=ZERO_ADDRESS, receiver=ALICE, value=3)

    assert _amount(store, ALICE) == 10
    assert _amount(store, sentinel) is None
    assert _amount(store, ZERO_ADDRESS) == 0


def test_large_uint256_values(ledger, store):
    big = 2**256 - 1

    ledger.credit(token=TOKEN, account=ALICE, value=big)
    ledger.debit(token=TOKEN, account=ALICE, value=big - 1)

    assert _amount(store, ALICE) == 1
