"""Resource Routes — the HTTP status table for CRUD and search endpoints.

Invariants:
    - Every error body carries an "error" message
    - Non-integer ids are 404, malformed bodies 400, storage failures 500
    - Collection GET paginates only when asked
"""

import pytest

SEATS = "/api/v1/seats"
SEARCH = "/api/v1/seats/search"


async def _create(client, **fields):
    res = await client.post(SEATS, json=fields)
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
async def seats(client):
    return [
        await _create(client, seat_id=i, seat_pos=f"R{i}", seat_available=i % 2 == 0)
        for i in range(1, 16)
    ]


# --- CRUD ---------------------------------------------------------------------

async def test_create_returns_201_with_identity(client):
    """POST creates a record and returns 201 with its id."""
    body = await _create(client, seat_id=1, seat_pos="A1", seat_available=True)
    assert body["id"] is not None
    assert body["seat_pos"] == "A1"
    assert body["booking"] == {"seat_book_start_time": None, "seat_book_end_time": None}


async def test_create_malformed_json_is_400(client):
    """POST with invalid JSON returns 400 DECODE_ERROR."""
    res = await client.post(
        SEATS, content=b"{nope", headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["code"] == "DECODE_ERROR"
    assert res.json()["error"]


async def test_create_wrong_type_is_400_naming_field(client):
    """POST with a mistyped field returns 400 naming that field."""
    res = await client.post(SEATS, json={"seat_id": "first"})
    assert res.status_code == 400
    assert res.json()["error"].startswith("seat_id")


async def test_create_duplicate_is_500_with_echo(client):
    """POST violating a unique column returns 500 echoing the payload."""
    await _create(client, seat_id=1)
    res = await client.post(SEATS, json={"seat_id": 1, "seat_pos": "again"})
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Failed to create record"
    assert body["cause"] == "integrity"
    assert body["data"]["seat_pos"] == "again"


async def test_get_by_id(client):
    """GET /{id} returns the stored record."""
    created = await _create(client, seat_id=5, seat_pos="E5")
    res = await client.get(f"{SEATS}/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created


@pytest.mark.parametrize("record_id", ["9999", "abc", "9" * 25])
async def test_get_missing_is_404(client, record_id):
    """GET /{id} with an unknown or malformed id returns 404."""
    res = await client.get(f"{SEATS}/{record_id}")
    assert res.status_code == 404
    assert res.json()["error"] == "Record not found"


async def test_list_without_params_returns_everything(client, seats):
    """GET without page parameters returns every record."""
    res = await client.get(SEATS)
    assert res.status_code == 200
    assert len(res.json()) == 15


async def test_list_with_page_params_paginates(client, seats):
    """GET with pagesize and pagenum returns that page."""
    res = await client.get(SEATS, params={"pagesize": "4", "pagenum": "2"})
    assert [s["seat_id"] for s in res.json()] == [5, 6, 7, 8]


async def test_list_with_garbage_page_params_uses_defaults(client, seats):
    """GET with a non-numeric pagesize falls back to the default page."""
    res = await client.get(SEATS, params={"pagesize": "many"})
    assert res.status_code == 200
    assert len(res.json()) == 10


async def test_list_with_huge_page_number_is_empty(client, seats):
    """GET with a page number past int64 returns 200 and an empty page."""
    res = await client.get(SEATS, params={"pagesize": "10", "pagenum": "9" * 25})
    assert res.status_code == 200
    assert res.json() == []


async def test_list_with_thousands_of_digits_is_capped(client, seats):
    """GET with a page size too long to convert is capped at the maximum."""
    res = await client.get(SEATS, params={"pagesize": "9" * 5000, "pagenum": "1"})
    assert res.status_code == 200
    assert len(res.json()) == 15


async def test_update_replaces_record(client):
    """PUT /{id} replaces the record and persists the result."""
    created = await _create(client, seat_id=7, seat_pos="G7", seat_available=True)
    res = await client.put(f"{SEATS}/{created['id']}", json={"seat_id": 7, "seat_pos": "G8"})
    assert res.status_code == 200
    body = res.json()
    assert body["seat_pos"] == "G8"
    assert body["seat_available"] is False

    fetched = await client.get(f"{SEATS}/{created['id']}")
    assert fetched.json() == body


async def test_update_missing_is_404(client):
    """PUT /{id} on an unknown id returns 404."""
    res = await client.put(f"{SEATS}/321", json={"seat_id": 1})
    assert res.status_code == 404


async def test_update_malformed_is_400(client):
    """PUT /{id} with a mistyped field returns 400."""
    created = await _create(client, seat_id=8)
    res = await client.put(f"{SEATS}/{created['id']}", json={"seat_available": []})
    assert res.status_code == 400


async def test_delete_then_get_is_404(client):
    """DELETE /{id} confirms once, then the id is 404 for GET and DELETE."""
    created = await _create(client, seat_id=9)
    res = await client.delete(f"{SEATS}/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Record deleted successfully"}

    assert (await client.get(f"{SEATS}/{created['id']}")).status_code == 404
    assert (await client.delete(f"{SEATS}/{created['id']}")).status_code == 404


async def test_oversized_id_is_404_for_every_id_route(client):
    """GET, PUT and DELETE with an id past int64 return 404."""
    path = f"{SEATS}/{'9' * 25}"
    assert (await client.get(path)).status_code == 404
    assert (await client.put(path, json={"seat_id": 1})).status_code == 404
    assert (await client.delete(path)).status_code == 404


# --- Search -------------------------------------------------------------------

async def test_find_one_returns_match(client, seats):
    """POST /search returns the record equal to the example."""
    example = {k: v for k, v in seats[2].items() if k != "id"}
    res = await client.post(SEARCH, json=example)
    assert res.status_code == 200
    assert res.json() == seats[2]


async def test_find_one_without_match_is_404(client, seats):
    """POST /search with no match returns 404."""
    res = await client.post(SEARCH, json={"seat_pos": "R1"})
    assert res.status_code == 404
    assert res.json()["error"] == "No matching record found"


async def test_find_one_malformed_is_400(client):
    """POST /search with a mistyped example returns 400."""
    res = await client.post(SEARCH, json={"seat_id": {"nested": True}})
    assert res.status_code == 400


async def test_find_all_returns_matches(client, seats):
    """POST /search/all returns every matching record."""
    res = await client.post(f"{SEARCH}/all", json=seats[0])
    assert res.status_code == 200
    assert res.json() == [seats[0]]


async def test_find_all_no_match_is_empty_list(client, seats):
    """POST /search/all with no match returns 200 and an empty list."""
    res = await client.post(f"{SEARCH}/all", json={"seat_pos": "nowhere"})
    assert res.status_code == 200
    assert res.json() == []


async def test_find_all_honours_pagination(client):
    """POST /search/all applies pagesize and pagenum."""
    # identical seats except the unique seat_id: each example matches one row,
    # so page past the first one to get nothing back
    created = await _create(client, seat_id=1, seat_pos="P")
    example = {k: v for k, v in created.items() if k != "id"}
    first = await client.post(f"{SEARCH}/all", json=example, params={"pagesize": "1", "pagenum": "1"})
    second = await client.post(f"{SEARCH}/all", json=example, params={"pagesize": "1", "pagenum": "2"})
    assert first.json() == [created]
    assert second.json() == []


async def test_find_all_with_huge_page_number_is_empty(client, seats):
    """POST /search/all with a page number past int64 returns 200 and an empty page."""
    res = await client.post(
        f"{SEARCH}/all", json={"seat_pos": "R1"},
        params={"pagesize": "10", "pagenum": "9" * 25},
    )
    assert res.status_code == 200
    assert res.json() == []
