"""
Bookshelf Backend - Settings Tests
====================================
"""

import pytest
from pydantic import ValidationError

from bookshelf.config import Settings


class TestSettings:

    def test_sqlite_engine_options_skip_pool_sizing(self):
        settings = Settings(database_url="sqlite+aiosqlite:///./catalog.db", log_level="INFO")

        assert settings.engine_options() == {"echo": False}

    def test_server_engine_options_include_pool(self):
        settings = Settings(
            database_url="postgresql+asyncpg://u:p@db:5432/bookshelf",
            db_pool_size=7,
            log_level="debug",
        )

        options = settings.engine_options()

        assert options["pool_size"] == 7
        assert options["pool_pre_ping"] is True
        assert options["echo"] is True

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_cascade_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("CASCADE_AUTHOR_REMOVAL", raising=False)
        assert Settings().cascade_author_removal is False
