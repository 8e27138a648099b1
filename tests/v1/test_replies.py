# tests/v1/test_replies.py
"""Tests for reply endpoints."""

from fastapi import status


def test_submit_reply(client, other_auth_token, interpretation) -> None:
    response = client.post(
        f"/api/v1/interpretations/{interpretation.id}/replies",
        json={"text": "Beautifully put, thank you"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["parent_counts"]["reply_count"] == 1
    assert body["verse_id"] == interpretation.verse_id


def test_reply_with_code_characters(client, other_auth_token, interpretation) -> None:
    response = client.post(
        f"/api/v1/interpretations/{interpretation.id}/replies",
        json={"text": "nice; very nice"},
        headers=other_auth_token,
    )
    assert response.status_code == 422
    assert response.json() == {
        "detail": "Reply contains invalid characters or code.",
        "code": "contains_markup",
    }


def test_empty_reply(client, other_auth_token, interpretation) -> None:
    response = client.post(
        f"/api/v1/interpretations/{interpretation.id}/replies",
        json={"text": "   "},
        headers=other_auth_token,
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_failed"


def test_reply_to_missing_interpretation(client, other_auth_token) -> None:
    response = client.post("/api/v1/interpretations/999/replies", json={"text": "hello"}, headers=other_auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_replies(client, interpretation, reply) -> None:
    response = client.get(f"/api/v1/interpretations/{interpretation.id}/replies")
    assert response.status_code == status.HTTP_200_OK
    (item,) = response.json()
    assert item["id"] == reply.id
    assert item["author"]["user_id"] == "user-reader"
    assert item["counts"] == {"upvote_count": 0, "report_count": 0, "reply_count": None}


def test_delete_reply(client, other_auth_token, interpretation, reply) -> None:
    response = client.delete(f"/api/v1/replies/{reply.id}", headers=other_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["parent_counts"]["reply_count"] == 0
    assert client.get(f"/api/v1/interpretations/{interpretation.id}/replies").json() == []


def test_delete_reply_not_owner(client, auth_token, reply) -> None:
    response = client.delete(f"/api/v1/replies/{reply.id}", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
