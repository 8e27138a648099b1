# tests/v1/test_flags.py
"""Tests for report endpoints and the moderation thresholds."""

from fastapi import status


def _flag(client, headers_for, kind, subject_id, user_id, **payload):
    body = {"reason": "spam", **payload}
    return client.post(f"/api/v1/flags/{kind}/{subject_id}", json=body, headers=headers_for(user_id))


def test_flag_interpretation(client, headers_for, interpretation) -> None:
    response = _flag(client, headers_for, "interpretation", interpretation.id, "reporter", explanation="Looks like an advert")
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["counts"]["report_count"] == 1
    assert body["visibility"] == "visible"


def test_duplicate_flag_conflicts(client, headers_for, interpretation) -> None:
    _flag(client, headers_for, "interpretation", interpretation.id, "reporter")
    response = _flag(client, headers_for, "interpretation", interpretation.id, "reporter")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["code"] == "already_flagged"


def test_missing_reason(client, auth_token, interpretation) -> None:
    response = client.post(
        f"/api/v1/flags/interpretation/{interpretation.id}",
        json={},
        headers=auth_token,
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_failed"


def test_long_explanation(client, headers_for, interpretation) -> None:
    response = _flag(
        client,
        headers_for,
        "interpretation",
        interpretation.id,
        "reporter",
        explanation=" ".join(["word"] * 21),
    )
    assert response.status_code == 422
    assert response.json() == {
        "detail": "Report explanation must be 20 words or less.",
        "code": "too_long",
    }


def test_interpretation_hidden_after_ten_reports(client, headers_for, interpretation) -> None:
    listing_url = f"/api/v1/verses/{interpretation.verse_id}/interpretations"
    for index in range(9):
        response = _flag(client, headers_for, "interpretation", interpretation.id, f"reporter-{index}")
        assert response.json()["visibility"] == "visible"
    assert len(client.get(listing_url).json()) == 1

    response = _flag(client, headers_for, "interpretation", interpretation.id, "reporter-9")
    assert response.json()["visibility"] == "hidden"
    assert client.get(listing_url).json() == []


def test_reply_hidden_after_five_reports(client, headers_for, interpretation, reply) -> None:
    replies_url = f"/api/v1/interpretations/{interpretation.id}/replies"
    for index in range(4):
        _flag(client, headers_for, "reply", reply.id, f"reporter-{index}", reason="offensive")
    assert len(client.get(replies_url).json()) == 1

    response = _flag(client, headers_for, "reply", reply.id, "reporter-4", reason="offensive")
    assert response.json()["visibility"] == "hidden"
    assert client.get(replies_url).json() == []

    listing = client.get(f"/api/v1/verses/{interpretation.verse_id}/interpretations").json()
    assert listing[0]["counts"]["reply_count"] == 0


def test_flag_hidden_subject_is_not_found(client, headers_for, auth_token, interpretation) -> None:
    client.delete(f"/api/v1/interpretations/{interpretation.id}", headers=auth_token)
    response = _flag(client, headers_for, "interpretation", interpretation.id, "reporter")
    assert response.status_code == status.HTTP_404_NOT_FOUND
