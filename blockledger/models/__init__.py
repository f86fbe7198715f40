# blockledger/models/__init__.py
from .base import Base
from .block_record import BlockRecord, DIGEST_SIZE

__all__ = [
     "Base",
     "BlockRecord",
     "DIGEST_SIZE",
]
