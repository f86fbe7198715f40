# blockledger/models/block_record.py
"""
BlockRecord model - one persisted row of the hash-chained ledger.

Chain order is the auto-increment id, not a column of the block itself.
prevHash and hash are both unique, so each block has at most one child
and the stored chain cannot fork.
"""
from sqlalchemy import BigInteger, Column, Integer, LargeBinary, Text, UniqueConstraint
from .base import Base

DIGEST_SIZE = 32  # SHA-256


class BlockRecord(Base):
     """
     Append-only ledger row. Never updated or deleted once inserted.
     The genesis row stores NULL in prevHash.
     """
     __tablename__ = "blockchain"
     # Names match the alembic migration
     __table_args__ = (
          UniqueConstraint("prevHash", name="uq_blockchain_prev_hash"),
          UniqueConstraint("hash", name="uq_blockchain_hash"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     created_on = Column(BigInteger, nullable=False)  # epoch seconds
     data = Column(Text, nullable=True)
     prev_hash = Column("prevHash", LargeBinary(DIGEST_SIZE), nullable=True)
     hash = Column(LargeBinary(DIGEST_SIZE), nullable=False)

     def __repr__(self):
          digest = self.hash.hex()[:16] if self.hash else None
          return f"<BlockRecord(id={self.id}, created_on={self.created_on}, hash={digest}...)>"
