"""Tests for message catalogs, errors and settings."""

import pytest

from lager.config import Settings
from lager.core.errors import (
    CameraUnavailableError,
    ConflictError,
    DuplicateBarcodeError,
    InternalError,
    LagerError,
    NotFoundError,
    ResourceError,
    ValidationError,
)
from lager.core.messages import MESSAGES, t


class TestMessages:
    """Tests for the message catalogs."""

    def test_catalogs_have_same_keys(self):
        assert set(MESSAGES["de"]) == set(MESSAGES["en"])

    def test_translate(self):
        assert t("productCreated", "de") == "Produkt erfolgreich hinzugefügt"
        assert t("productCreated", "en") == "Product added"

    def test_unknown_key_returned_as_is(self):
        assert t("noSuchKey", "en") == "noSuchKey"

    def test_unknown_locale_falls_back_to_german(self):
        assert t("productNotFound", "fr") == MESSAGES["de"]["productNotFound"]


class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (ValidationError(), 400),
            (NotFoundError(), 404),
            (ConflictError(), 409),
            (DuplicateBarcodeError("4001"), 409),
            (CameraUnavailableError(), 503),
            (InternalError(), 500),
        ],
    )
    def test_status_codes(self, error: LagerError, status_code: int):
        assert error.status_code == status_code

    def test_message_from_key(self):
        assert NotFoundError(key="barcodeNotFound").message == t("barcodeNotFound")

    def test_explicit_message_wins(self):
        assert NotFoundError("Weg").message == "Weg"

    def test_duplicate_barcode_carries_barcode(self):
        error = DuplicateBarcodeError("4001")
        assert error.barcode == "4001"
        assert error.message == t("barcodeExists")
        assert isinstance(error, ConflictError)

    def test_camera_error_is_resource_error(self):
        assert isinstance(CameraUnavailableError(), ResourceError)


class TestSettings:
    """Tests for database URL construction."""

    def test_sqlite_file(self):
        settings = Settings(db_backend="sqlite", sqlite_path="/data/lager.db")
        assert settings.database_url == "sqlite+aiosqlite:////data/lager.db"

    def test_sqlite_memory(self):
        settings = Settings(db_backend="sqlite", sqlite_path=":memory:")
        assert settings.database_url == "sqlite+aiosqlite://"

    def test_postgresql(self):
        settings = Settings(
            db_backend="postgresql",
            db_user="u",
            db_password="p",
            db_host="db",
            db_port=5433,
            db_name="lager",
        )
        assert settings.database_url == "postgresql+asyncpg://u:p@db:5433/lager"
