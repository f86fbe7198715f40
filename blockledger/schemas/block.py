# blockledger/schemas/block.py
"""
Pydantic schemas for the ledger API request/response validation.

Hashes are hex-encoded on the wire; the genesis block's prev_hash is "".
"""
from typing import List
from pydantic import BaseModel, Field, ConfigDict

from blockledger.services.block import Block


class AddEntryRequest(BaseModel):
     """Request body for POST /add."""

     data: str = Field(..., description="Payload text to append to the chain")

     model_config = ConfigDict(
          extra="ignore",
          json_schema_extra={
               "example": {
                    "data": "hello",
               }
          },
     )


class BlockResponse(BaseModel):
     """One block as returned by the API."""

     timestamp: int = Field(..., description="Creation time, epoch seconds")
     data: str
     prev_hash: str = Field(..., description="Hex hash of the preceding block")
     hash: str = Field(..., description="Hex SHA-256 of prev_hash + data + timestamp")

     @classmethod
     def from_block(cls, block: Block) -> "BlockResponse":
          return cls(
               timestamp=block.timestamp,
               data=block.data,
               prev_hash=block.prev_hash_hex,
               hash=block.hash_hex,
          )

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "timestamp": 1767225600,
                    "data": "hello",
                    "prev_hash": "9f86d081884c7d65...",
                    "hash": "2cf24dba5fb0a30e...",
               }
          }
     )


class AddEntryResponse(BaseModel):
     """Response for POST /add."""

     done: str = Field(default="true", description="Always \"true\" on success")
     hash: str = Field(..., description="Hex hash of the new block")
     prev_hash: str = Field(..., description="Hex hash the new block links to")
     timestamp: int


class ChainResponse(BaseModel):
     """Schema for the full chain listing."""

     blocks: List[BlockResponse]
     total: int
     skipped: int = Field(default=0, description="Stored rows that could not be read")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "blocks": [],
                    "total": 0,
                    "skipped": 0,
               }
          }
     )
