import uuid
from http import HTTPStatus

import pytest
import pytest_asyncio

from tests.functional.utils.helpers import _create_movie

MOVIES_PATH = "/api/v1/movies"


async def test_create_movie(client):
    """
    Создание фильма: 201, slug из названия и года, жанры по алфавиту.
    """
    body = await _create_movie(client, "Nick the Greek", 2023, genres=["Drama", "Comedy"], synopsis="Story")
    assert body["slug"] == "nick-the-greek-2023"
    assert body["title"] == "Nick the Greek"
    assert body["year_of_release"] == 2023
    assert body["synopsis"] == "Story"
    assert body["genres"] == ["Comedy", "Drama"]
    assert body["rating"] is None
    assert body["user_rating"] is None
    uuid.UUID(body["id"])


async def test_create_movie_conflict(client):
    """
    Повторное создание с тем же названием и годом -> 409.
    """
    await _create_movie(client, "Dup", 2001)
    resp = await client.post(MOVIES_PATH, json={"title": "Dup", "year_of_release": 2001})
    assert resp.status_code == HTTPStatus.CONFLICT, resp.text
    assert resp.json()["detail"]["error"] == "movie_exists"


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "year_of_release": 2000},
        {"title": "No year"},
        {"title": "Old", "year_of_release": 1500},
    ],
)
async def test_create_movie_validation(client, payload):
    resp = await client.post(MOVIES_PATH, json=payload)
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY, resp.text


async def test_get_movie_by_id_and_slug(client):
    created = await _create_movie(client, "Gamma", 2010, genres=["Sci-Fi"])

    by_id = await client.get(f"{MOVIES_PATH}/{created['id']}")
    assert by_id.status_code == HTTPStatus.OK, by_id.text
    assert by_id.json() == created

    by_slug = await client.get(f"{MOVIES_PATH}/gamma-2010")
    assert by_slug.status_code == HTTPStatus.OK, by_slug.text
    assert by_slug.json()["id"] == created["id"]


@pytest.mark.parametrize("id_or_slug", [str(uuid.uuid4()), "no-such-movie-1999"])
async def test_get_movie_not_found(client, id_or_slug):
    resp = await client.get(f"{MOVIES_PATH}/{id_or_slug}")
    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json()["detail"]["error"] == "movie_not_found"


async def test_update_movie(client):
    """
    Обновление копирует поля целиком и пересчитывает slug.
    """
    created = await _create_movie(client, "Betta", 1999, genres=["Drama"])
    resp = await client.put(
        f"{MOVIES_PATH}/{created['id']}",
        json={"title": "Beta", "year_of_release": 2000, "synopsis": "fixed", "genres": ["Thriller"]},
    )
    assert resp.status_code == HTTPStatus.OK, resp.text
    body = resp.json()
    assert body["id"] == created["id"]
    assert body["slug"] == "beta-2000"
    assert body["synopsis"] == "fixed"
    assert body["genres"] == ["Thriller"]

    old = await client.get(f"{MOVIES_PATH}/betta-1999")
    assert old.status_code == HTTPStatus.NOT_FOUND


async def test_update_movie_slug_conflict(client):
    await _create_movie(client, "Alpha", 2000)
    other = await _create_movie(client, "Beta", 2000)
    resp = await client.put(
        f"{MOVIES_PATH}/{other['id']}",
        json={"title": "Alpha", "year_of_release": 2000},
    )
    assert resp.status_code == HTTPStatus.CONFLICT, resp.text


async def test_update_missing_movie(client):
    resp = await client.put(
        f"{MOVIES_PATH}/{uuid.uuid4()}",
        json={"title": "Nobody", "year_of_release": 2000},
    )
    assert resp.status_code == HTTPStatus.NOT_FOUND


async def test_delete_movie(client):
    created = await _create_movie(client, "Short lived", 2005, genres=["Drama"])

    resp = await client.delete(f"{MOVIES_PATH}/{created['id']}")
    assert resp.status_code == HTTPStatus.NO_CONTENT

    again = await client.delete(f"{MOVIES_PATH}/{created['id']}")
    assert again.status_code == HTTPStatus.NOT_FOUND

    gone = await client.get(f"{MOVIES_PATH}/{created['id']}")
    assert gone.status_code == HTTPStatus.NOT_FOUND


# --- список фильмов ---

@pytest_asyncio.fixture(name="catalog")
async def catalog(client):
    for title, year in [("Gamma", 2010), ("Alpha", 2000), ("Beta", 2000)]:
        await _create_movie(client, title, year)


@pytest.mark.parametrize(
    "params, titles, total",
    [
        ({"title": "a"}, ["Alpha", "Beta", "Gamma"], 3),
        ({"title": "MM"}, ["Gamma"], 1),
        ({"year": 2000, "page": 1, "page_size": 1}, ["Alpha"], 2),
        ({"year": 2000, "page": 2, "page_size": 1}, ["Beta"], 2),
        ({"page": 2, "page_size": 2}, ["Gamma"], 3),
        ({"sort_by": "-title"}, ["Gamma", "Beta", "Alpha"], 3),
        ({"sort_by": "-year", "page_size": 1}, ["Gamma"], 3),
        ({"year": 1990}, [], 0),
        ({"page": 9}, [], 3),
    ],
)
async def test_list_movies(client, catalog, params, titles, total):
    resp = await client.get(MOVIES_PATH, params=params)
    assert resp.status_code == HTTPStatus.OK, resp.text
    body = resp.json()
    for key in ("items", "total", "page", "page_size", "has_next_page"):
        assert key in body, body
    assert [m["title"] for m in body["items"]] == titles
    assert body["total"] == total


async def test_list_movies_echoes_paging(client, catalog):
    resp = await client.get(MOVIES_PATH, params={"page": 1, "page_size": 2})
    body = resp.json()
    assert body["page"] == 1
    assert body["page_size"] == 2
    assert body["has_next_page"] is True

    resp = await client.get(MOVIES_PATH)
    body = resp.json()
    assert body["page"] == 1
    assert body["page_size"] == 10
    assert body["has_next_page"] is False


@pytest.mark.parametrize(
    "params",
    [
        {"page": 0},
        {"page_size": 0},
        {"page_size": 26},
        {"sort_by": "rating"},
    ],
)
async def test_list_movies_bad_request(client, params):
    resp = await client.get(MOVIES_PATH, params=params)
    assert resp.status_code == HTTPStatus.BAD_REQUEST, resp.text
    assert resp.json()["detail"]["error"] == "invalid_argument"


async def test_list_movies_wrong_type(client):
    resp = await client.get(MOVIES_PATH, params={"year": "two thousand"})
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
