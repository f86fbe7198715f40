"""Shared fixtures: a file-backed SQLite ledger per test, no block delay."""

import pytest

from blockledger.config import Settings
from blockledger.database import create_ledger_engine
from blockledger.services import ChainReader, ChainStore, LedgerService


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'ledger.db'}"


@pytest.fixture
def engine(db_url):
    eng = create_ledger_engine(Settings(database_url=db_url))
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    """Initialized store holding only the genesis block."""
    chain_store = ChainStore(engine)
    chain_store.initialize()
    return chain_store


@pytest.fixture
def ledger(store):
    return LedgerService(store, block_delay=0)


@pytest.fixture
def reader(store):
    return ChainReader(store)
