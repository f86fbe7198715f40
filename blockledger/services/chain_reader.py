# blockledger/services/chain_reader.py
"""Chain Reader - read-only view of the full chain for display."""
from blockledger.services.chain_store import ChainReadResult, ChainStore


class ChainReader:
     """Lists the complete chain. No pagination; meant for small-to-moderate chains."""

     def __init__(self, store: ChainStore):
          self._store = store

     def list_chain(self) -> ChainReadResult:
          """All readable blocks in insertion order, plus the skipped-row count."""
          return self._store.read_all()
