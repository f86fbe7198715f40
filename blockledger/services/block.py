# blockledger/services/block.py
"""
Block model - the immutable unit of the ledger and its hash rule.

hash = SHA-256(prev_hash || data || decimal(timestamp)), raw bytes concatenated
with no separators. The genesis block has an empty prev_hash.
"""
import hashlib
import time
from dataclasses import dataclass
from typing import Callable

GENESIS_DATA = "Genesis Block"
GENESIS_PREV_HASH = b""

# Post-hash throttle; caps block creation at one per second per process
DEFAULT_BLOCK_DELAY = 1.0


def compute_block_hash(prev_hash: bytes, data: str, timestamp: int) -> bytes:
     """Return the 32-byte SHA-256 digest identifying a block."""
     headers = b"".join([
          prev_hash,
          data.encode("utf-8"),
          str(timestamp).encode("ascii"),
     ])
     return hashlib.sha256(headers).digest()


@dataclass(frozen=True)
class Block:
     """One ledger entry. Order in the chain is owned by the store, not the block."""

     timestamp: int
     data: str
     prev_hash: bytes
     hash: bytes

     def compute_hash(self) -> bytes:
          """Recompute the digest from the stored fields."""
          return compute_block_hash(self.prev_hash, self.data, self.timestamp)

     @property
     def is_genesis(self) -> bool:
          return self.prev_hash == GENESIS_PREV_HASH

     @property
     def hash_hex(self) -> str:
          return self.hash.hex()

     @property
     def prev_hash_hex(self) -> str:
          return self.prev_hash.hex()


def construct_block(
     data: str,
     prev_hash: bytes,
     delay: float = DEFAULT_BLOCK_DELAY,
     clock: Callable[[], float] = time.time,
     sleep: Callable[[float], None] = time.sleep,
) -> Block:
     """
     Build a new block stamped with the current time.

     Args:
          data: Payload text
          prev_hash: Hash of the current chain tail (b"" for genesis)
          delay: Seconds to pause after hashing; 0 disables the pause
          clock: Wall-clock source, returns epoch seconds
          sleep: Pause function

     Returns:
          The hashed Block
     """
     timestamp = int(clock())
     block = Block(
          timestamp=timestamp,
          data=data,
          prev_hash=prev_hash,
          hash=compute_block_hash(prev_hash, data, timestamp),
     )
     if delay > 0:
          sleep(delay)
     return block
