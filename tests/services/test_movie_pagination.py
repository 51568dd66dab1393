"""Movie Listing — cursor pagination, ordering, title filter.

Listing calls are anonymous so the per-user throttle does not interfere.
"""

import base64
import json

import pytest


@pytest.fixture
async def five_movies(create_movie):
    return [await create_movie(t) for t in ("Alpha", "Bravo", "Charlie", "Delta", "Echo")]


async def test_default_order_is_id_desc_take_two(client, five_movies):
    res = await client.get("/movie")
    assert res.status_code == 200
    body = res.json()
    assert [m["title"] for m in body["data"]] == ["Echo", "Delta"]
    assert body["count"] == 5
    assert body["nextCursor"]
    assert all(m["likeStatus"] is None for m in body["data"])


async def test_walk_all_pages_with_cursor(client, five_movies):
    seen = []
    cursor = None
    for _ in range(10):
        params = {"take": 2}
        if cursor:
            params["cursor"] = cursor
        body = (await client.get("/movie", params=params)).json()
        if not body["data"]:
            assert body["nextCursor"] is None
            break
        seen.extend(m["title"] for m in body["data"])
        assert body["count"] == 5
        cursor = body["nextCursor"]
    assert seen == ["Echo", "Delta", "Charlie", "Bravo", "Alpha"]


async def test_order_by_title_ascending(client, five_movies):
    body = (await client.get(
        "/movie", params={"order": "title_ASC", "take": 3},
    )).json()
    assert [m["title"] for m in body["data"]] == ["Alpha", "Bravo", "Charlie"]

    body = (await client.get("/movie", params={"cursor": body["nextCursor"]})).json()
    assert [m["title"] for m in body["data"]] == ["Delta", "Echo"]


async def test_mixed_direction_order_with_tie_breaker(
    client, five_movies, admin_headers,
):
    ids = {m["title"]: m["id"] for m in five_movies}
    await client.post(f"/movie/{ids['Bravo']}/like", headers=admin_headers)
    await client.post(f"/movie/{ids['Delta']}/like", headers=admin_headers)

    params = [("order", "likeCount_DESC"), ("order", "id_ASC"), ("take", "3")]
    body = (await client.get("/movie", params=params)).json()
    assert [m["title"] for m in body["data"]] == ["Bravo", "Delta", "Alpha"]

    body = (await client.get("/movie", params={"cursor": body["nextCursor"]})).json()
    assert [m["title"] for m in body["data"]] == ["Charlie", "Echo"]


async def test_title_filter(client, create_movie):
    await create_movie("The Dark Knight")
    await create_movie("The Dark Knight Rises")
    await create_movie("Inception")

    body = (await client.get("/movie", params={"title": "Dark", "take": 10})).json()
    assert body["count"] == 2
    assert {m["title"] for m in body["data"]} == {
        "The Dark Knight", "The Dark Knight Rises",
    }


async def test_title_filter_minimum_length(client):
    res = await client.get("/movie", params={"title": "ab"})
    assert res.status_code == 400


@pytest.mark.parametrize("order", ["rating_DESC", "id_SIDEWAYS", "id"])
async def test_invalid_order(client, order):
    res = await client.get("/movie", params={"order": order})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_ORDER"


async def test_invalid_cursor(client):
    res = await client.get("/movie", params={"cursor": "not-a-cursor"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_CURSOR"


def _cursor(values: dict, order: list[str]) -> str:
    raw = json.dumps({"values": values, "order": order}).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


@pytest.mark.parametrize("value", [{"x": 1}, None, [1], True, "7"])
async def test_cursor_value_of_wrong_type_is_rejected(client, five_movies, value):
    cursor = _cursor({"id": value}, ["id_DESC"])
    res = await client.get("/movie", params={"cursor": cursor})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_CURSOR"


async def test_cursor_title_value_must_be_text(client, five_movies):
    cursor = _cursor({"title": 5, "id": 1}, ["title_ASC", "id_ASC"])
    res = await client.get("/movie", params={"cursor": cursor})
    assert res.status_code == 400


async def test_hand_built_cursor_with_scalar_values_is_accepted(client, five_movies):
    cursor = _cursor({"id": five_movies[2]["id"]}, ["id_DESC"])
    res = await client.get("/movie", params={"cursor": cursor})
    assert res.status_code == 200
    assert [m["title"] for m in res.json()["data"]] == ["Bravo", "Alpha"]


async def test_like_status_for_authenticated_caller(
    client, five_movies, user_headers,
):
    target = five_movies[-1]
    await client.post(f"/movie/{target['id']}/dislike", headers=user_headers)

    body = (await client.get("/movie", headers=user_headers)).json()
    statuses = {m["id"]: m["likeStatus"] for m in body["data"]}
    assert statuses[target["id"]] is False
    assert statuses[five_movies[-2]["id"]] is None
