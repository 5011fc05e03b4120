from typing import Any

from tourit.models import User


def test_status_defaults_to_unsubscribed(client: Any, auth_token: dict[str, str]) -> None:
    response = client.get("/api/newsletter/status", headers=auth_token)

    assert response.status_code == 200
    assert response.json() == {"isSubscribed": False}


def test_subscribe_and_unsubscribe(
    client: Any,
    db_session: Any,
    auth_token: dict[str, str],
    test_user: User,
) -> None:
    response = client.post("/api/newsletter/subscribe", headers=auth_token)
    assert response.status_code == 200
    assert response.json() == {"message": "Subscription successful."}
    assert client.get("/api/newsletter/status", headers=auth_token).json() == {"isSubscribed": True}

    response = client.post("/api/newsletter/unsubscribe", headers=auth_token)
    assert response.json() == {"message": "Unsubscription successful."}

    db_session.expire_all()
    assert db_session.get(User, test_user.id).is_subscribed is False


def test_subscribe_is_idempotent(client: Any, auth_token: dict[str, str]) -> None:
    for _ in range(2):
        response = client.post("/api/newsletter/subscribe", headers=auth_token)
        assert response.status_code == 200

    assert client.get("/api/newsletter/status", headers=auth_token).json() == {"isSubscribed": True}


def test_newsletter_requires_auth(client: Any) -> None:
    assert client.post("/api/newsletter/subscribe").status_code == 401
