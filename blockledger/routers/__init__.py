# blockledger/routers/__init__.py
from .chain import router as chain_router

__all__ = [
     "chain_router",
]
