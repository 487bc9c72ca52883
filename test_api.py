import math

import pytest
from sqlalchemy.exc import OperationalError

from patent_search.db.database import get_db
from patent_search.middleware.performance_middleware import UNMATCHED, PerformanceMiddleware


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_search_envelope(client):
    response = client.get("/api/search", params={"page": 2, "pageSize": 10})
    assert response.status_code == 200
    body = response.json()
    assert body["totalResults"] == 25
    assert body["totalPages"] == 3
    assert body["currentPage"] == 2
    assert len(body["results"]) == 10


def test_search_defaults(client):
    body = client.get("/api/search").json()
    assert body["currentPage"] == 1
    assert len(body["results"]) == 10
    assert body["results"][0]["id"] == "US-0001"


def test_search_document_wire_shape(client):
    body = client.get("/api/search", params={"query": "smart irrigation"}).json()
    assert body["totalResults"] == 1
    patent = body["results"][0]
    assert patent == {
        "id": "US-0001",
        "title": "Smart Irrigation Controller",
        "abstract": "A method for watering plants using soil sensors and automated irrigation control",
        "inventors": ["Maria Lopez", "James Chen"],
        "inventorsText": "maria lopez,james chen",
        "publicationDate": "2019-03-12",
        "relevanceScore": 0.9,
        "assignee": "GreenGrow Inc.",
        "status": "Active",
        "cpcCodes": ["A01G25/16"],
        "claims": ["A method of irrigating plants."],
    }


def test_search_filters(client):
    body = client.get(
        "/api/search",
        params={"query": "soil", "inventors": "lopez", "startDate": "2018-01-01", "endDate": "2020-01-01"},
    ).json()
    assert [p["id"] for p in body["results"]] == ["US-0001"]


@pytest.mark.parametrize("params", [
    {"page": "0"},
    {"pageSize": "0"},
    {"pageSize": "-5"},
    {"page": "two"},
    {"startDate": "not-a-date"},
])
def test_search_invalid_parameters(client, params):
    response = client.get("/api/search", params=params)
    assert response.status_code == 400


def test_search_rejects_other_methods(client):
    assert client.post("/api/search").status_code == 405
    assert client.delete("/api/similar", params={"id": "US-0001"}).status_code == 405


def test_similar(client):
    response = client.get("/api/similar", params={"id": "US-0001"})
    assert response.status_code == 200
    results = response.json()["results"]
    assert [(r["id"], r["similarity"]) for r in results] == [
        ("US-0002", 4),
        ("US-0004", 3),
        ("US-0007", 3),
    ]
    assert results[0]["publicationDate"] == "2020-07-01"


def test_similar_requires_id(client):
    assert client.get("/api/similar").status_code == 400
    assert client.get("/api/similar", params={"id": ""}).status_code == 400
    assert client.get("/api/similar", params={"id": "   "}).status_code == 400


def test_similar_unknown_id(client):
    response = client.get("/api/similar", params={"id": "US-9999"})
    assert response.status_code == 404
    assert "results" not in response.json()


def test_patent_detail(client):
    response = client.get("/api/patents/US-0003")
    assert response.status_code == 200
    assert response.json()["status"] == "Pending"
    assert client.get("/api/patents/US-9999").status_code == 404


class BrokenSession:
    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    execute = _fail
    get = _fail

    def close(self):
        pass


@pytest.fixture
def broken_client(client):
    client.app.dependency_overrides[get_db] = lambda: BrokenSession()
    yield client
    client.app.dependency_overrides.clear()


@pytest.mark.parametrize("path,params", [
    ("/api/search", {}),
    ("/api/similar", {"id": "US-0001"}),
    ("/api/patents/US-0001", {}),
])
def test_store_failure_is_generic_500(broken_client, path, params):
    response = broken_client.get(path, params=params)
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal Server Error"}


def test_process_time_header(client):
    response = client.get("/api/search")
    assert float(response.headers["X-Process-Time"]) >= 0


def test_search_large_page_size(client):
    response = client.get("/api/search", params={"pageSize": 101})
    assert response.status_code == 200
    body = response.json()
    assert body["totalPages"] == math.ceil(body["totalResults"] / 101) == 1
    assert len(body["results"]) == 25


def test_search_query_keeps_trailing_space(client):
    body = client.get("/api/search", params={"query": "control "}).json()
    assert [p["id"] for p in body["results"]] == ["US-0004"]


def _performance_middleware(app):
    layer = app.middleware_stack
    while layer is not None and not isinstance(layer, PerformanceMiddleware):
        layer = getattr(layer, "app", None)
    return layer


def test_request_stats_are_keyed_by_route(client):
    for n in range(50):
        client.get(f"/api/patents/MISSING-{n}")
        client.get(f"/no/such/path/{n}")
    client.get("/api/patents/US-0001")

    stats = _performance_middleware(client.app).endpoints_stats
    assert stats["GET:/api/patents/{patent_id}"]["count"] == 51
    assert stats[UNMATCHED]["count"] == 50
    assert not [key for key in stats if "MISSING" in key or "/no/such" in key]
