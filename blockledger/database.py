# blockledger/database.py
"""
SQLAlchemy engine construction.

This module provides:
- Engine configuration from Settings (server databases get a QueuePool)
- Session factory construction for the chain store
- Connectivity check used by the health endpoint

Usage:
     from blockledger.config import load_settings
     from blockledger.database import create_ledger_engine

     engine = create_ledger_engine(load_settings())
"""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool

from blockledger.config import Settings

logger = logging.getLogger(__name__)


def create_ledger_engine(settings: Settings) -> Engine:
     """
     Create the engine shared by every request.

     The engine's pool is the only shared mutable resource in the process,
     and is safe for concurrent use from FastAPI's worker threads.
     """
     url = make_url(settings.sqlalchemy_url)

     if url.get_backend_name() == "sqlite":
          # SQLite connections are handed between threads by the threadpool
          return create_engine(
               url,
               connect_args={"check_same_thread": False},
               echo=settings.sql_echo,
          )

     return create_engine(
          url,
          poolclass=QueuePool,
          pool_size=5,
          max_overflow=10,
          pool_timeout=30,
          pool_recycle=1800,  # Recycle connections after 30 minutes
          pool_pre_ping=True,
          echo=settings.sql_echo,
     )


def make_session_factory(engine: Engine) -> sessionmaker:
     """Session factory bound to `engine`; commits are explicit."""
     return sessionmaker(
          bind=engine,
          autocommit=False,
          autoflush=False,
          expire_on_commit=False,
     )


def check_connection(engine: Engine) -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except SQLAlchemyError as e:
          logger.error("Database connection failed: %s", e)
          return False
