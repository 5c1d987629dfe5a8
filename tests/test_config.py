"""Tests for Settings validation and derived values."""

import pytest
from pydantic import ValidationError

from catalogue_api.config import Settings


class TestSettings:

    def test_log_level_is_normalised(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_cors_origins_list(self):
        s = Settings(cors_origins="http://a.test, http://b.test,,")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    @pytest.mark.parametrize("name", ["../produits.pdf", "sub/produits.pdf", "..", ""])
    def test_report_filename_must_be_bare(self, name):
        with pytest.raises(ValidationError):
            Settings(report_filename=name)

    def test_is_sqlite(self):
        assert Settings(database_url="sqlite+aiosqlite://").is_sqlite
        assert not Settings(database_url="postgresql+asyncpg://u:p@db/cat").is_sqlite
