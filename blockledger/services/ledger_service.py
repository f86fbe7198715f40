# blockledger/services/ledger_service.py
"""
Ledger Service - the only mutating operation on the chain.

Adding an entry:
1. Read the current tail hash
2. Build a new block referencing it (hash + throttle pause)
3. Append the block

Steps 1-3 run inside one store transaction while holding a per-ledger lock,
so two writers in this process can never both link to the same tail. Across
processes the unique prevHash column turns a lost race into a
ConstraintViolation instead of a fork.
"""
import logging
import threading
import time
from contextlib import nullcontext
from typing import Callable

from blockledger.exceptions import MalformedInput
from blockledger.services.block import Block, DEFAULT_BLOCK_DELAY, construct_block
from blockledger.services.chain_store import ChainStore

logger = logging.getLogger(__name__)


class LedgerService:
     """Appends validly-linked blocks to a ChainStore."""

     def __init__(
          self,
          store: ChainStore,
          block_delay: float = DEFAULT_BLOCK_DELAY,
          serialize_appends: bool = True,
          clock: Callable[[], float] = time.time,
          sleep: Callable[[float], None] = time.sleep,
     ):
          """
          Args:
               store: Chain store the ledger writes to
               block_delay: Seconds to pause after hashing each block
               serialize_appends: Hold a lock across tail read and insert.
                    Disabling it reproduces the unprotected read-then-append race.
               clock: Wall-clock source for block timestamps
               sleep: Pause function used for the block delay
          """
          self._store = store
          self._block_delay = block_delay
          self._clock = clock
          self._sleep = sleep
          self._append_lock = threading.Lock() if serialize_appends else nullcontext()

     def add_entry(self, data: str) -> Block:
          """
          Append `data` as a new block linked to the current tail.

          Args:
               data: Payload text

          Returns:
               The newly appended Block

          Raises:
               MalformedInput: If data is not a string or not encodable as UTF-8
               NotFound: If the chain has no tail block
               ConstraintViolation: If the append collided with another block
               StorageUnavailable: On any other storage failure
          """
          if not isinstance(data, str):
               raise MalformedInput(f"data must be a string, got {type(data).__name__}")
          try:
               data.encode("utf-8")
          except UnicodeEncodeError as e:
               raise MalformedInput(f"data is not valid UTF-8 text: {e.reason}") from e

          with self._append_lock:
               with self._store.transaction() as db:
                    prev_hash = self._store.read_tail_hash(db)
                    block = construct_block(
                         data,
                         prev_hash,
                         delay=self._block_delay,
                         clock=self._clock,
                         sleep=self._sleep,
                    )
                    block_id = self._store.append(db, block)

          logger.info("Appended block id=%s hash=%s", block_id, block.hash_hex)
          return block
