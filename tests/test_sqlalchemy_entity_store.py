import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from builders import ALICE, BOB, TOKEN, FakeBinder, FakeErc20Contract, make_approval, make_transfer
from erc20_ledger.app.application.services.event_reducer import EventReducer
from erc20_ledger.app.domain.entities import (
    ZERO_ADDRESS,
    Account,
    Token,
    TokenAllowance,
    TokenBalance,
    Transaction,
    TransactionType,
)
from erc20_ledger.app.infrastructure.adapters.store.sqlalchemy_entity_store import (
    SqlAlchemyEntityStore,
)
from erc20_ledger.app.infrastructure.db.db_base import LEDGER_SCHEMA, BaseDB
from erc20_ledger.app.infrastructure.db.models import TransactionsDB


@pytest.fixture
def engine():
    # SQLite has no schemas; map the ledger schema onto the default one
    engine = create_engine("sqlite://").execution_options(
        schema_translate_map={LEDGER_SCHEMA: None}
    )
    BaseDB.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


def test_round_trips_entities(session):
    store = SqlAlchemyEntityStore(session)
    token = Token(id=TOKEN, symbol="USDC", name="USD Coin", decimals=6, total_supply=1_000_000)

    store.save(token)
    store.save(Account(id=ALICE))
    session.commit()

    assert store.load(Token, TOKEN) == token
    assert store.load(Account, ALICE) == Account(id=ALICE)
    assert store.load(Account, BOB) is None


def test_save_upserts_by_id(session):
    store = SqlAlchemyEntityStore(session)
    balance = TokenBalance(id=TOKEN + ALICE, token=TOKEN, account=ALICE, amount=10)

    store.save(balance)
    session.commit()
    balance.amount = 4
    store.save(balance)
    session.commit()

    loaded = store.load(TokenBalance, TOKEN + ALICE)
    assert loaded.amount == 4
    assert isinstance(loaded.amount, int)


def test_loaded_entities_are_detached(session):
    store = SqlAlchemyEntityStore(session)
    store.save(TokenBalance(id=TOKEN + ALICE, token=TOKEN, account=ALICE, amount=10))

    loaded = store.load(TokenBalance, TOKEN + ALICE)
    loaded.amount = 999

    assert store.load(TokenBalance, TOKEN + ALICE).amount == 10


def test_unknown_entity_type_is_rejected(session):
    store = SqlAlchemyEntityStore(session)

    with pytest.raises(ValueError):
        store.load(dict, b"x")


def test_reducer_on_sqlalchemy_store(session):
    store = SqlAlchemyEntityStore(session)
    binder = FakeBinder()
    # SQLite NUMERIC is not uint256-wide; keep values within 64 bits
    binder.contracts[TOKEN] = FakeErc20Contract(total_supply=1_000_000)
    reducer = EventReducer(store, binder=binder)

    for event in (
        make_transfer(ZERO_ADDRESS, ALICE, 100, block_number=1),
        make_transfer(ALICE, BOB, 40, block_number=2),
        make_approval(ALICE, BOB, 25, block_number=3),
    ):
        reducer.handle(event)
        session.commit()

    assert store.load(TokenBalance, TOKEN + ALICE).amount == 60
    assert store.load(TokenBalance, TOKEN + BOB).amount == 40
    assert store.load(TokenBalance, TOKEN + ZERO_ADDRESS) is None
    assert store.load(TokenAllowance, TOKEN + ALICE + BOB).amount == 25

    rows = session.scalars(select(TransactionsDB).order_by(TransactionsDB.block_number)).all()
    assert [r.type for r in rows] == [
        TransactionType.MINT,
        TransactionType.TRANSFER,
        TransactionType.APPROVAL,
    ]
    assert store.load(Transaction, rows[0].id).recipient == ALICE
