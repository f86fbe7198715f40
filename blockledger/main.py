# blockledger/main.py
"""
Application factory and process entry point.

     blockledger                  serve on $IP:$PORT
     blockledger --healthcheck    exit 0 (container health probe)
     blockledger --init-db        drop the chain and write a fresh genesis block
"""
import argparse
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from blockledger.config import Settings, load_settings
from blockledger.database import check_connection, create_ledger_engine
from blockledger.routers import chain_router
from blockledger.services import ChainReader, ChainStore, LedgerService

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
     logging.basicConfig(
          level=level,
          format="%(asctime)s %(levelname)s %(name)s: %(message)s",
     )


def healthcheck() -> bool:
     return True


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
     """
     Build the FastAPI app around one engine, store, ledger and reader.

     Args:
          settings: Configuration; read from the environment when omitted
          engine: Pre-built engine (tests); created from settings when omitted
     """
     settings = settings or load_settings()
     engine = engine or create_ledger_engine(settings)

     store = ChainStore(engine)
     ledger = LedgerService(store, block_delay=settings.block_delay_seconds)
     reader = ChainReader(store)

     @asynccontextmanager
     async def lifespan(app: FastAPI):
          if settings.init_on_startup:
               store.initialize()
          yield
          engine.dispose()

     app = FastAPI(title="blockledger", lifespan=lifespan)
     app.state.ledger = ledger
     app.state.reader = reader

     # CORS
     app.add_middleware(
          CORSMiddleware,
          allow_origins=settings.cors_origins,
          allow_methods=["GET", "POST", "DELETE", "PUT", "PATCH", "OPTIONS"],
          allow_headers=["Content-Type", "api_key", "Authorization"],
          expose_headers=["Authorization"],
     )

     @app.get("/health", include_in_schema=False)
     def health():
          return {"status": "ok", "database": check_connection(engine)}

     app.include_router(chain_router)
     return app


def main(argv=None) -> int:
     parser = argparse.ArgumentParser(prog="blockledger")
     parser.add_argument("--healthcheck", action="store_true", help="exit 0 if the process is healthy")
     parser.add_argument("--init-db", action="store_true", help="drop the chain and create the genesis block")
     args = parser.parse_args(argv)

     if args.healthcheck:
          return 0 if healthcheck() else 1

     settings = load_settings()
     configure_logging(settings.log_level)

     if args.init_db:
          engine = create_ledger_engine(settings)
          try:
               ChainStore(engine).initialize()
          finally:
               engine.dispose()
          return 0

     logger.info("Starting server at http://%s:%s", settings.ip, settings.port)
     uvicorn.run(create_app(settings), host=settings.ip, port=settings.port)
     return 0


if __name__ == "__main__":
     sys.exit(main())
