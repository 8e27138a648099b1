# tests/v1/test_system.py
"""Tests for system endpoints and error translation."""

from fastapi import status
from sqlalchemy.exc import OperationalError

from lions_bible.api.errors import status_for
from lions_bible.core.errors import LionsBibleError, StorageUnavailable
from lions_bible.services.listings import ListingService


def test_public_config(client) -> None:
    response = client.get("/api/v1/system/config")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["moderation"]["hide_thresholds"] == {"interpretation": 10, "reply": 5}
    assert body["moderation"]["report_reasons"] == ["spam", "blasphemy", "offensive"]
    assert "secret_key" not in str(body)


def test_storage_failure_on_read_is_503(client, verses, monkeypatch) -> None:
    def unavailable(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(ListingService, "verse_page", unavailable)
    response = client.get("/api/v1/verses/Genesis/1/1")
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["code"] == StorageUnavailable.code


def test_unmapped_domain_error_is_bad_request() -> None:
    assert status_for(LionsBibleError()) == status.HTTP_400_BAD_REQUEST
