# tests/v1/test_interpretations.py
"""Tests for interpretation endpoints."""

from fastapi import status

from tests.conftest import ELEVEN_WORDS, TWELVE_WORDS


def test_submit_interpretation(client, auth_token, verse) -> None:
    response = client.post(
        f"/api/v1/verses/{verse.id}/interpretations",
        json={"text": TWELVE_WORDS},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["text"] == TWELVE_WORDS
    assert body["counts"] == {"upvote_count": 0, "report_count": 0, "reply_count": 0}
    assert body["references"] == []


def test_submit_too_short(client, auth_token, verse) -> None:
    response = client.post(
        f"/api/v1/verses/{verse.id}/interpretations",
        json={"text": ELEVEN_WORDS},
        headers=auth_token,
    )
    assert response.status_code == 422
    assert response.json() == {
        "detail": "Interpretation must be at least 12 words.",
        "code": "too_short",
    }


def test_submit_script(client, auth_token, verse) -> None:
    response = client.post(
        f"/api/v1/verses/{verse.id}/interpretations",
        json={"text": "<script>alert(1)</script>"},
        headers=auth_token,
    )
    assert response.status_code == 422
    assert response.json()["code"] == "contains_markup"


def test_submit_requires_login(client, verse) -> None:
    response = client.post(f"/api/v1/verses/{verse.id}/interpretations", json={"text": TWELVE_WORDS})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_submit_unknown_verse(client, auth_token) -> None:
    response = client.post("/api/v1/verses/31103/interpretations", json={"text": TWELVE_WORDS}, headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_duplicate_then_resubmit_after_delete(client, auth_token, verse) -> None:
    url = f"/api/v1/verses/{verse.id}/interpretations"
    first = client.post(url, json={"text": TWELVE_WORDS}, headers=auth_token).json()

    duplicate = client.post(url, json={"text": TWELVE_WORDS}, headers=auth_token)
    assert duplicate.status_code == status.HTTP_409_CONFLICT
    assert duplicate.json()["code"] == "duplicate_interpretation"

    deleted = client.delete(f"/api/v1/interpretations/{first['id']}", headers=auth_token)
    assert deleted.json() == {"id": first["id"], "status": "deleted", "parent_counts": None}

    again = client.post(url, json={"text": TWELVE_WORDS}, headers=auth_token)
    assert again.status_code == status.HTTP_201_CREATED


def test_submit_with_reference(client, auth_token, verses) -> None:
    response = client.post(
        f"/api/v1/verses/{verses['gen_1_3'].id}/interpretations",
        json={"text": "[Genesis 1:1] (context) " + TWELVE_WORDS},
        headers=auth_token,
    )
    (reference,) = response.json()["references"]
    assert reference["target_verse_id"] == verses["gen_1_1"].id
    assert reference["source_verse_id"] == verses["gen_1_3"].id


def test_list_interpretations_with_author(client, profiles, interpretation) -> None:
    response = client.get(f"/api/v1/verses/{interpretation.verse_id}/interpretations?sort=top")
    assert response.status_code == status.HTTP_200_OK
    (item,) = response.json()
    assert item["author"] == {
        "user_id": "user-author",
        "username": "lion",
        "avatar": "https://example.com/lion.png",
    }


def test_list_interpretations_rejects_unknown_sort(client, verse) -> None:
    response = client.get(f"/api/v1/verses/{verse.id}/interpretations?sort=oldest")
    assert response.status_code == 422


def test_delete_requires_owner(client, other_auth_token, interpretation) -> None:
    response = client.delete(f"/api/v1/interpretations/{interpretation.id}", headers=other_auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["code"] == "not_authorized"
