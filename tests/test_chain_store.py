"""
Unit tests for the Chain Store.

Tests:
- Destructive initialization and genesis layout
- Tail hash lookup
- Append and uniqueness constraints
- Forgiving full-chain read
- Storage failures
"""

import pytest
from sqlalchemy import create_engine, inspect, text

from blockledger.exceptions import ConstraintViolation, NotFound, StorageUnavailable
from blockledger.models import BlockRecord
from blockledger.services import ChainStore, GENESIS_DATA, construct_block


def _append(store, data):
    with store.transaction() as db:
        block = construct_block(data, store.read_tail_hash(db), delay=0)
        store.append(db, block)
    return block


class TestInitialize:
    """Tests for initialize()."""

    def test_single_genesis_block(self, store):
        chain = store.read_all()
        assert len(chain) == 1
        genesis = chain.blocks[0]
        assert genesis.data == GENESIS_DATA
        assert genesis.prev_hash == b""
        assert genesis.is_genesis

    def test_returns_stored_genesis(self, engine):
        store = ChainStore(engine)
        genesis = store.initialize()
        assert store.read_all().blocks == [genesis]

    def test_genesis_prev_hash_stored_as_null(self, store, engine):
        with engine.connect() as conn:
            row = conn.execute(BlockRecord.__table__.select()).one()
        assert row.prevHash is None

    def test_unique_constraints_match_migration(self, store, engine):
        constraints = {
            c["name"]: c["column_names"]
            for c in inspect(engine).get_unique_constraints("blockchain")
        }
        assert constraints == {
            "uq_blockchain_prev_hash": ["prevHash"],
            "uq_blockchain_hash": ["hash"],
        }

    def test_drops_existing_chain(self, store):
        _append(store, "hello")
        assert store.count() == 2

        store.initialize()

        assert store.count() == 1
        assert store.read_all().blocks[0].data == GENESIS_DATA


class TestReadTailHash:
    """Tests for read_tail_hash()."""

    def test_genesis_is_tail_after_initialize(self, store):
        genesis = store.read_all().blocks[0]
        with store.transaction() as db:
            assert store.read_tail_hash(db) == genesis.hash

    def test_tail_follows_latest_append(self, store):
        block = _append(store, "hello")
        with store.transaction() as db:
            assert store.read_tail_hash(db) == block.hash

    def test_empty_chain_raises_not_found(self, engine):
        BlockRecord.__table__.create(engine)
        store = ChainStore(engine)
        with pytest.raises(NotFound):
            with store.transaction() as db:
                store.read_tail_hash(db)


class TestAppend:
    """Tests for append()."""

    def test_returns_increasing_ids(self, store):
        with store.transaction() as db:
            first = store.append(db, construct_block("a", store.read_tail_hash(db), delay=0))
        with store.transaction() as db:
            second = store.append(db, construct_block("b", store.read_tail_hash(db), delay=0))
        assert second > first > 1

    def test_duplicate_prev_hash_is_rejected(self, store):
        genesis = store.read_all().blocks[0]
        _append(store, "first child")

        fork = construct_block("second child", genesis.hash, delay=0)
        with pytest.raises(ConstraintViolation):
            with store.transaction() as db:
                store.append(db, fork)

        assert store.count() == 2

    def test_duplicate_hash_is_rejected(self, store):
        block = _append(store, "hello")
        with pytest.raises(ConstraintViolation):
            with store.transaction() as db:
                store.append(db, block)
        assert store.count() == 2

    def test_failed_append_leaves_tail_unchanged(self, store):
        genesis = store.read_all().blocks[0]
        tail = _append(store, "hello")
        with pytest.raises(ConstraintViolation):
            with store.transaction() as db:
                store.append(db, construct_block("fork", genesis.hash, delay=0))
        with store.transaction() as db:
            assert store.read_tail_hash(db) == tail.hash


class TestReadAll:
    """Tests for read_all()."""

    def test_insertion_order(self, store):
        _append(store, "one")
        _append(store, "two")
        assert [b.data for b in store.read_all()] == [GENESIS_DATA, "one", "two"]

    def test_malformed_rows_are_skipped_and_counted(self, store, engine):
        table = BlockRecord.__table__
        with engine.begin() as conn:
            conn.execute(table.insert().values(created_on=1, data="short hash", hash=b"\x00\x01"))
            conn.execute(table.insert().values(created_on=2, data=None, hash=b"\x07" * 32))
            # text stored where binary digests belong
            conn.execute(
                text("INSERT INTO blockchain (created_on, data, hash) VALUES (3, 'text hash', :h)"),
                {"h": "x" * 32},
            )
            conn.execute(
                text(
                    "INSERT INTO blockchain (created_on, data, \"prevHash\", hash) "
                    "VALUES (4, 'text prev', :p, :h)"
                ),
                {"p": "y" * 32, "h": b"\x08" * 32},
            )
        good = _append(store, "after the bad rows")

        result = store.read_all()

        assert result.skipped == 4
        assert [b.data for b in result] == [GENESIS_DATA, "after the bad rows"]
        assert result.blocks[-1] == good
        assert store.count() == 6

    def test_clean_chain_skips_nothing(self, store):
        assert store.read_all().skipped == 0


class TestStorageUnavailable:
    """Storage failures surface as StorageUnavailable."""

    def test_missing_table(self, engine):
        store = ChainStore(engine)
        with pytest.raises(StorageUnavailable):
            store.read_all()

    def test_missing_table_on_tail_read(self, engine):
        store = ChainStore(engine)
        with pytest.raises(StorageUnavailable):
            with store.transaction() as db:
                store.read_tail_hash(db)

    def test_unreachable_database(self, tmp_path):
        bad = create_engine(f"sqlite:///{tmp_path / 'missing' / 'ledger.db'}")
        try:
            with pytest.raises(StorageUnavailable):
                ChainStore(bad).read_all()
        finally:
            bad.dispose()
