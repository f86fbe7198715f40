# blockledger/services/__init__.py
from .block import (
     Block,
     compute_block_hash,
     construct_block,
     DEFAULT_BLOCK_DELAY,
     GENESIS_DATA,
     GENESIS_PREV_HASH,
)
from .chain_store import ChainStore, ChainReadResult
from .ledger_service import LedgerService
from .chain_reader import ChainReader

__all__ = [
     "Block",
     "compute_block_hash",
     "construct_block",
     "DEFAULT_BLOCK_DELAY",
     "GENESIS_DATA",
     "GENESIS_PREV_HASH",
     "ChainStore",
     "ChainReadResult",
     "LedgerService",
     "ChainReader",
]
