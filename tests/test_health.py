# tests/test_health.py
from fastapi import status


def test_health(client) -> None:
    """Verify that the health endpoint reports ok."""
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_responds(client) -> None:
    """Verify that the root endpoint describes the API."""
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["docs"] == "/docs"
