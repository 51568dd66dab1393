"""Director Routes — page-paginated listing, CRUD, role checks."""

import pytest

NOLAN = {"name": "Christopher Nolan", "dob": "1970-07-30", "nationality": "UK"}


@pytest.fixture
async def directors(client, admin_headers):
    created = []
    for name in ("Denis Villeneuve", "Greta Gerwig", "Bong Joon-ho"):
        res = await client.post("/director", headers=admin_headers, json={
            "name": name, "dob": "1970-01-01", "nationality": "X",
        })
        assert res.status_code == 201
        created.append(res.json())
    return created


async def test_create_director(client, admin_headers):
    res = await client.post("/director", headers=admin_headers, json=NOLAN)
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Christopher Nolan"
    assert body["dob"] == "1970-07-30"
    assert "createdAt" in body


async def test_create_director_requires_admin(client, user_headers):
    res = await client.post("/director", headers=user_headers, json=NOLAN)
    assert res.status_code == 403


async def test_create_director_validates_body(client, admin_headers):
    res = await client.post(
        "/director", headers=admin_headers, json={**NOLAN, "dob": "yesterday"},
    )
    assert res.status_code == 400


async def test_list_directors_paginated(client, directors, user_headers):
    res = await client.get("/director", headers=user_headers, params={"take": 2})
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 3
    assert body["page"] == 1
    assert [d["name"] for d in body["data"]] == ["Denis Villeneuve", "Greta Gerwig"]

    body = (await client.get(
        "/director", headers=user_headers, params={"take": 2, "page": 2},
    )).json()
    assert [d["name"] for d in body["data"]] == ["Bong Joon-ho"]


async def test_list_directors_name_filter(client, directors, user_headers):
    body = (await client.get(
        "/director", headers=user_headers, params={"name": "Greta"},
    )).json()
    assert body["count"] == 1
    assert body["data"][0]["name"] == "Greta Gerwig"


async def test_list_directors_requires_authentication(client):
    res = await client.get("/director")
    assert res.status_code == 401


async def test_get_update_delete_director(client, directors, admin_headers):
    director_id = directors[0]["id"]

    res = await client.patch(
        f"/director/{director_id}", headers=admin_headers,
        json={"nationality": "Canada"},
    )
    assert res.status_code == 200
    assert res.json()["nationality"] == "Canada"
    assert res.json()["name"] == "Denis Villeneuve"

    res = await client.delete(f"/director/{director_id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json() == director_id

    res = await client.get(f"/director/{director_id}", headers=admin_headers)
    assert res.status_code == 404


async def test_delete_director_with_movies_conflicts(
    client, create_movie, director, admin_headers,
):
    await create_movie("Inception")
    res = await client.delete(f"/director/{director.id}", headers=admin_headers)
    assert res.status_code == 409
