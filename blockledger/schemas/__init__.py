# blockledger/schemas/__init__.py
from .block import (
     AddEntryRequest,
     AddEntryResponse,
     BlockResponse,
     ChainResponse,
)

__all__ = [
     "AddEntryRequest",
     "AddEntryResponse",
     "BlockResponse",
     "ChainResponse",
]
