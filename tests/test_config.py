"""
Tests for settings loading and the process entry point.
"""

import pytest
from sqlalchemy import create_engine

from blockledger.config import Settings, load_settings
from blockledger.main import main
from blockledger.services import ChainStore, GENESIS_DATA

ENV_VARS = [
    "IP", "PORT", "DATABASE_URL", "DB_DRIVER", "DB_HOST", "DB_PORT", "DB_USER",
    "DB_PASS", "DB_NAME", "SQL_ECHO", "BLOCK_DELAY_SECONDS", "INIT_ON_STARTUP",
    "CORS_ORIGINS", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # keep a developer's .env out of the way
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_defaults(self, clean_env):
        settings = load_settings()
        assert settings.port == 8080
        assert settings.block_delay_seconds == 1.0
        assert settings.init_on_startup is False
        assert settings.cors_origins == ["*"]
        assert settings.sqlalchemy_url.startswith("mssql+pymssql://")

    def test_url_from_parts_is_quoted(self, clean_env):
        clean_env.setenv("DB_USER", "ledger")
        clean_env.setenv("DB_PASS", "p@ss:word")
        clean_env.setenv("DB_HOST", "db")
        clean_env.setenv("DB_NAME", "chain")
        url = load_settings().sqlalchemy_url
        assert url == "mssql+pymssql://ledger:p%40ss%3Aword@db:1433/chain"

    def test_database_url_wins(self, clean_env):
        clean_env.setenv("DATABASE_URL", "sqlite:///ledger.db")
        clean_env.setenv("DB_HOST", "ignored")
        assert load_settings().sqlalchemy_url == "sqlite:///ledger.db"

    def test_overrides(self, clean_env):
        clean_env.setenv("PORT", "9000")
        clean_env.setenv("BLOCK_DELAY_SECONDS", "0")
        clean_env.setenv("INIT_ON_STARTUP", "true")
        clean_env.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
        clean_env.setenv("LOG_LEVEL", "debug")
        settings = load_settings()
        assert settings.port == 9000
        assert settings.block_delay_seconds == 0
        assert settings.init_on_startup is True
        assert settings.cors_origins == ["http://a.example", "http://b.example"]
        assert settings.log_level == "DEBUG"

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            Settings(block_delay_seconds=-1)


class TestMain:
    """Tests for the command line entry point."""

    def test_healthcheck(self):
        assert main(["--healthcheck"]) == 0

    def test_init_db(self, clean_env, tmp_path):
        db_url = f"sqlite:///{tmp_path / 'cli.db'}"
        clean_env.setenv("DATABASE_URL", db_url)

        assert main(["--init-db"]) == 0

        engine = create_engine(db_url)
        try:
            chain = ChainStore(engine).read_all()
        finally:
            engine.dispose()
        assert [b.data for b in chain] == [GENESIS_DATA]
