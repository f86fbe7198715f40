# blockledger/dependencies.py
"""
FastAPI dependencies.

The ledger objects are built once in `create_app` and stored on
`app.state`; routes receive them through these providers.
"""
from fastapi import Request

from blockledger.services import ChainReader, LedgerService


def get_ledger(request: Request) -> LedgerService:
     return request.app.state.ledger


def get_reader(request: Request) -> ChainReader:
     return request.app.state.reader
