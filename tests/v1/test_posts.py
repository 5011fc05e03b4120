"""Tests for post endpoints: listing, detail, creation and redaction."""

from collections.abc import Callable
from typing import Any

from tourit.models import Country, Post, PostCategory, User, Vote


def _create_payload(country: Country, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Hidden gems in Kyoto",
        "body": "Skip the crowds at dawn.",
        "countryId": country.id,
    }
    payload.update(overrides)
    return payload


def test_create_post_success(
    client: Any,
    auth_token: dict[str, str],
    country: Country,
    reference_id: Callable[[str, str], int],
) -> None:
    """Ensure a post can be created and unknown reference ids are dropped."""
    recommendations = reference_id("category", "Recommendations")
    hiking = reference_id("tag", "Hiking")
    payload = _create_payload(
        country,
        categoryIds=[recommendations, recommendations, 9999],
        tagIds=[hiking, 4242],
        latitude=51.5,
        longitude=-0.12,
    )

    response = client.post("/api/posts", json=payload, headers=auth_token)

    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["title"] == "Hidden gems in Kyoto"
    assert data["body"] == "Skip the crowds at dawn."
    assert data["authorUsername"] == "alice"
    assert data["countryName"] == "United Kingdom"
    assert data["countryCode"] == "GB"
    assert data["categoryNames"] == ["Recommendations"]
    assert data["tagNames"] == ["Hiking"]
    assert data["score"] == 0
    assert data["latitude"] == 51.5
    assert data["longitude"] == -0.12
    assert data["imageUrl"] is None
    assert data["isDeleted"] is False


def test_create_post_requires_auth(client: Any, country: Country) -> None:
    response = client.post("/api/posts", json=_create_payload(country))

    assert response.status_code == 401


def test_create_post_unknown_country(client: Any, auth_token: dict[str, str], country: Country) -> None:
    response = client.post(
        "/api/posts",
        json=_create_payload(country, countryId=9999),
        headers=auth_token,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Selected country does not exist."


def test_create_post_validation_errors(client: Any, auth_token: dict[str, str], country: Country) -> None:
    response = client.post(
        "/api/posts",
        json={"body": "No title here", "countryId": country.id},
        headers=auth_token,
    )
    assert response.status_code == 400
    assert "title" in response.json()["errors"]

    long_title = client.post(
        "/api/posts",
        json=_create_payload(country, title="x" * 301),
        headers=auth_token,
    )
    assert long_title.status_code == 400


def test_create_post_rejects_out_of_range_coordinates(
    client: Any,
    auth_token: dict[str, str],
    country: Country,
) -> None:
    response = client.post(
        "/api/posts",
        json=_create_payload(country, latitude=91, longitude=0),
        headers=auth_token,
    )
    assert response.status_code == 400
    assert "latitude" in response.json()["errors"]

    response = client.post(
        "/api/posts",
        json=_create_payload(country, latitude=0, longitude=-181),
        headers=auth_token,
    )
    assert response.status_code == 400
    assert "longitude" in response.json()["errors"]


def test_get_post_returns_body(client: Any, test_post: Post) -> None:
    response = client.get(f"/api/posts/{test_post.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["body"] == "Markets, museums and a lot of rain."
    assert data["categoryNames"] == ["Recommendations"]
    assert data["tagNames"] == ["City Break"]


def test_get_missing_post(client: Any) -> None:
    response = client.get("/api/posts/9999")

    assert response.status_code == 404


def test_list_posts_newest_first_without_body(
    client: Any,
    test_user: User,
    make_post: Callable[..., Post],
) -> None:
    first = make_post(test_user, title="First")
    second = make_post(test_user, title="Second")

    response = client.get("/api/posts")

    assert response.status_code == 200
    data = response.json()
    assert [item["id"] for item in data] == [second.id, first.id]
    assert all(item["body"] is None for item in data)


def test_list_posts_unknown_sort_falls_back_to_new(
    client: Any,
    test_user: User,
    make_post: Callable[..., Post],
) -> None:
    first = make_post(test_user, title="First")
    second = make_post(test_user, title="Second")

    response = client.get("/api/posts", params={"sortBy": "sideways"})

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [second.id, first.id]


def test_list_posts_sort_top_orders_by_score(
    client: Any,
    db_session: Any,
    test_user: User,
    other_user: User,
    make_post: Callable[..., Post],
) -> None:
    popular = make_post(test_user, title="Popular")
    newest = make_post(test_user, title="Newest")
    disliked = make_post(test_user, title="Disliked")
    db_session.add_all([
        Vote(user_id=test_user.id, post_id=popular.id, vote_type=1),
        Vote(user_id=other_user.id, post_id=popular.id, vote_type=1),
        Vote(user_id=other_user.id, post_id=disliked.id, vote_type=-1),
    ])
    db_session.commit()

    response = client.get("/api/posts", params={"sortBy": "top"})

    assert response.status_code == 200
    data = response.json()
    assert [item["id"] for item in data] == [popular.id, newest.id, disliked.id]
    assert [item["score"] for item in data] == [2, 0, -1]


def test_list_posts_respects_limit(
    client: Any,
    test_user: User,
    make_post: Callable[..., Post],
) -> None:
    for i in range(3):
        make_post(test_user, title=f"Post {i}")

    response = client.get("/api/posts", params={"limit": 2})

    assert response.status_code == 200
    assert len(response.json()) == 2


def test_list_posts_rejects_out_of_range_limit(client: Any) -> None:
    assert client.get("/api/posts", params={"limit": 0}).status_code == 400
    assert client.get("/api/posts", params={"limit": 101}).status_code == 400


def test_list_posts_filters_by_country_code(
    client: Any,
    db_session: Any,
    test_user: User,
    make_post: Callable[..., Post],
) -> None:
    japan = db_session.query(Country).filter(Country.code == "JP").one()
    london = make_post(test_user, title="London")
    make_post(test_user, title="Tokyo", country_id=japan.id)

    response = client.get("/api/posts", params={"countryCode": "gb"})

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [london.id]


def test_list_posts_hides_redacted_and_inactive_authors(
    client: Any,
    db_session: Any,
    test_user: User,
    make_user: Callable[..., User],
    make_post: Callable[..., Post],
) -> None:
    visible = make_post(test_user, title="Visible")
    redacted = make_post(test_user, title="Redacted")
    departed = make_user(username="departed")
    make_post(departed, title="Orphaned")

    redacted.is_deleted = True
    redacted.former_user_id = redacted.user_id
    redacted.user_id = None
    departed.is_active = False
    db_session.commit()

    response = client.get("/api/posts")

    assert [item["id"] for item in response.json()] == [visible.id]


def test_delete_post_redacts_in_place(
    client: Any,
    db_session: Any,
    auth_token: dict[str, str],
    test_post: Post,
    other_user: User,
) -> None:
    db_session.add(Vote(user_id=other_user.id, post_id=test_post.id, vote_type=1))
    db_session.commit()

    response = client.delete(f"/api/posts/{test_post.id}", headers=auth_token)
    assert response.status_code == 204

    detail = client.get(f"/api/posts/{test_post.id}")
    assert detail.status_code == 200
    data = detail.json()
    assert data["id"] == test_post.id
    assert data["isDeleted"] is True
    assert data["body"] == "[REMOVED]"
    assert data["authorUsername"] == "Unknown"
    assert data["categoryNames"] == []
    assert data["tagNames"] == []
    assert data["score"] == 1

    db_session.expire_all()
    post = db_session.get(Post, test_post.id)
    assert post.user_id is None
    assert post.former_user_id is not None
    assert post.body is None
    assert db_session.query(PostCategory).filter(PostCategory.post_id == test_post.id).count() == 0
    assert db_session.query(Vote).filter(Vote.post_id == test_post.id).count() == 1


def test_delete_post_twice_is_not_found(client: Any, auth_token: dict[str, str], test_post: Post) -> None:
    assert client.delete(f"/api/posts/{test_post.id}", headers=auth_token).status_code == 204
    assert client.delete(f"/api/posts/{test_post.id}", headers=auth_token).status_code == 404


def test_delete_post_of_other_user_forbidden(
    client: Any,
    other_auth_token: dict[str, str],
    test_post: Post,
) -> None:
    response = client.delete(f"/api/posts/{test_post.id}", headers=other_auth_token)

    assert response.status_code == 403
    assert client.get(f"/api/posts/{test_post.id}").json()["isDeleted"] is False


def test_delete_missing_post(client: Any, auth_token: dict[str, str]) -> None:
    response = client.delete("/api/posts/9999", headers=auth_token)

    assert response.status_code == 404
