# blockledger/routers/chain.py
"""
Ledger API routes.

POST /add:        append a block holding the posted data
GET  /:           HTML view of the whole chain
GET  /api/chain:  JSON view of the whole chain

Each ledger error maps to its own status code:
- MalformedInput      -> 422
- NotFound            -> 404
- ConstraintViolation -> 409
- StorageUnavailable  -> 503
"""
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from blockledger.dependencies import get_ledger, get_reader
from blockledger.exceptions import (
     ConstraintViolation,
     LedgerError,
     MalformedInput,
     NotFound,
     StorageUnavailable,
)
from blockledger.schemas.block import (
     AddEntryRequest,
     AddEntryResponse,
     BlockResponse,
     ChainResponse,
)
from blockledger.services import ChainReader, LedgerService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chain"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

_STATUS_BY_ERROR = {
     MalformedInput: 422,
     NotFound: status.HTTP_404_NOT_FOUND,
     ConstraintViolation: status.HTTP_409_CONFLICT,
     StorageUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _to_http_error(error: LedgerError) -> HTTPException:
     status_code = _STATUS_BY_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
     if status_code >= 500 or status_code == status.HTTP_409_CONFLICT:
          logger.error("Ledger operation failed: %s", error)
     return HTTPException(status_code=status_code, detail=str(error))


@router.post(
     "/add",
     response_model=AddEntryResponse,
     summary="Append an entry to the chain",
)
def add_entry(
     body: AddEntryRequest,
     ledger: LedgerService = Depends(get_ledger),
):
     """
     Append a new block holding **data**, linked to the current tail.

     Not retried on conflict: a 409 means the block was not appended.
     """
     try:
          block = ledger.add_entry(body.data)
     except LedgerError as e:
          raise _to_http_error(e)

     return AddEntryResponse(
          done="true",
          hash=block.hash_hex,
          prev_hash=block.prev_hash_hex,
          timestamp=block.timestamp,
     )


@router.get(
     "/api/chain",
     response_model=ChainResponse,
     summary="List the full chain",
)
def list_chain(reader: ChainReader = Depends(get_reader)):
     """Every readable block in insertion order, genesis first."""
     try:
          result = reader.list_chain()
     except LedgerError as e:
          raise _to_http_error(e)

     return ChainResponse(
          blocks=[BlockResponse.from_block(b) for b in result],
          total=len(result),
          skipped=result.skipped,
     )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def display_chain(request: Request, reader: ChainReader = Depends(get_reader)):
     try:
          result = reader.list_chain()
     except LedgerError as e:
          raise _to_http_error(e)

     return templates.TemplateResponse(
          request,
          "blockchain.html",
          {"blocks": list(result), "skipped": result.skipped},
     )
