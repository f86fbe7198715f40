# blockledger/services/chain_store.py
"""
Chain Store - relational persistence of the ordered block sequence.

The store receives an engine from its owner; there is no process-wide
handle. Statements that must run together (tail read + insert) share one
Session obtained from `transaction()`.

SQLAlchemy failures never leak out of this module:
- IntegrityError -> ConstraintViolation
- any other SQLAlchemyError -> StorageUnavailable
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generator, Iterator, List

from sqlalchemy import desc, func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blockledger.database import make_session_factory
from blockledger.exceptions import ConstraintViolation, NotFound, StorageUnavailable
from blockledger.models import BlockRecord, DIGEST_SIZE
from blockledger.services.block import (
     Block,
     GENESIS_DATA,
     GENESIS_PREV_HASH,
     construct_block,
)

logger = logging.getLogger(__name__)

_BINARY_TYPES = (bytes, bytearray, memoryview)


@dataclass
class ChainReadResult:
     """Blocks in insertion order plus the number of rows that could not be read."""

     blocks: List[Block] = field(default_factory=list)
     skipped: int = 0

     def __iter__(self) -> Iterator[Block]:
          return iter(self.blocks)

     def __len__(self) -> int:
          return len(self.blocks)


def _record_to_block(record: BlockRecord) -> Block:
     """
     Convert a row into a Block.

     Raises:
          ValueError: If the row cannot represent a valid block
     """
     if record.created_on is None:
          raise ValueError("created_on is NULL")
     if not isinstance(record.data, str):
          raise ValueError("data is not text")
     if not isinstance(record.hash, _BINARY_TYPES) or len(record.hash) != DIGEST_SIZE:
          raise ValueError("hash is missing or not a SHA-256 digest")
     if record.prev_hash is not None and not isinstance(record.prev_hash, _BINARY_TYPES):
          raise ValueError("prevHash is not binary")

     prev_hash = GENESIS_PREV_HASH if record.prev_hash is None else bytes(record.prev_hash)
     if prev_hash and len(prev_hash) != DIGEST_SIZE:
          raise ValueError("prevHash is not a SHA-256 digest")

     return Block(
          timestamp=int(record.created_on),
          data=record.data,
          prev_hash=prev_hash,
          hash=bytes(record.hash),
     )


class ChainStore:
     """Durable, append-only storage for the block chain."""

     def __init__(self, engine: Engine):
          self._engine = engine
          self._session_factory = make_session_factory(engine)

     @contextmanager
     def transaction(self) -> Generator[Session, None, None]:
          """
          Run statements as one unit of work.

          Usage:
               with store.transaction() as db:
                    tail = store.read_tail_hash(db)
                    store.append(db, block)

          Yields:
               Session: committed on success, rolled back on any error
          """
          session = self._session_factory()
          try:
               yield session
               session.commit()
          except IntegrityError as e:
               session.rollback()
               raise ConstraintViolation(f"Commit rejected by uniqueness constraint: {e.orig}") from e
          except SQLAlchemyError as e:
               session.rollback()
               raise StorageUnavailable(f"Storage failure: {e}") from e
          except Exception:
               session.rollback()
               raise
          finally:
               session.close()

     def initialize(self) -> Block:
          """
          Drop and recreate the blockchain table, then insert the genesis block.

          DESTRUCTIVE: every existing block is lost. Call once when bootstrapping
          a ledger, never as part of normal request handling.

          Returns:
               The genesis Block
          """
          logger.warning("Initializing ledger: dropping table %s", BlockRecord.__tablename__)
          table = BlockRecord.__table__
          try:
               table.drop(self._engine, checkfirst=True)
               table.create(self._engine)
          except SQLAlchemyError as e:
               raise StorageUnavailable(f"Could not recreate {table.name}: {e}") from e

          genesis = construct_block(GENESIS_DATA, GENESIS_PREV_HASH, delay=0)
          with self.transaction() as db:
               self.append(db, genesis)

          logger.info("Genesis block created: %s", genesis.hash_hex)
          return genesis

     def read_tail_hash(self, db: Session) -> bytes:
          """
          Hash of the most recently appended block (greatest id).

          Raises:
               NotFound: If the chain is empty
          """
          try:
               tail = (
                    db.query(BlockRecord.hash)
                    .order_by(desc(BlockRecord.id))
                    .limit(1)
                    .first()
               )
          except SQLAlchemyError as e:
               raise StorageUnavailable(f"Could not read tail hash: {e}") from e

          if tail is None:
               raise NotFound("Chain is empty: no tail block to link to")
          return bytes(tail.hash)

     def append(self, db: Session, block: Block) -> int:
          """
          Insert `block` as the new tail. No retry on failure.

          Returns:
               The id assigned by the store

          Raises:
               ConstraintViolation: If hash or prevHash already exists
          """
          record = BlockRecord(
               created_on=block.timestamp,
               data=block.data,
               prev_hash=block.prev_hash or None,  # genesis stores NULL
               hash=block.hash,
          )
          db.add(record)
          try:
               db.flush()
          except IntegrityError as e:
               raise ConstraintViolation(
                    f"Block {block.hash_hex[:16]}... collides with an existing hash or prevHash"
               ) from e
          except SQLAlchemyError as e:
               raise StorageUnavailable(f"Could not append block: {e}") from e
          return record.id

     def read_all(self) -> ChainReadResult:
          """
          Every block ordered by id ascending (genesis first).

          Rows that cannot be converted to a Block are skipped and counted
          rather than failing the whole read.
          """
          result = ChainReadResult()
          with self.transaction() as db:
               records = db.query(BlockRecord).order_by(BlockRecord.id).all()

          for record in records:
               try:
                    result.blocks.append(_record_to_block(record))
               except ValueError as e:
                    logger.warning("Skipping malformed block row id=%s: %s", record.id, e)
                    result.skipped += 1
          return result

     def count(self) -> int:
          """Number of stored rows, readable or not."""
          with self.transaction() as db:
               return db.query(func.count(BlockRecord.id)).scalar() or 0
