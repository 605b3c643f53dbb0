import pytest

from errors import TransportError
from pages import FakeFetcher, make_card, make_page
from scraper.service import ScrapeService
from server import create_app


@pytest.fixture
def make_client():
    def _make(fetcher):
        app = create_app(ScrapeService(fetcher=fetcher))
        app.config["TESTING"] = True
        return app.test_client()
    return _make


def test_status_and_index(make_client):
    client = make_client(FakeFetcher())
    status = client.get("/api/status").get_json()
    assert status["success"] is True
    index = client.get("/").get_json()
    assert index["endpoints"]["scrape"].startswith("/api/scrape")


def test_scrape_endpoint(make_client):
    client = make_client(FakeFetcher(make_page(make_card(), make_card(title="Keyboard"))))
    resp = client.get("/api/scrape?keyword=mouse")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["totalProducts"] == 2
    assert [p["id"] for p in body["products"]] == [1, 2]


def test_scrape_requires_keyword(make_client):
    fetcher = FakeFetcher()
    resp = make_client(fetcher).get("/api/scrape")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert fetcher.keywords == []


def test_scrape_transport_failure(make_client):
    resp = make_client(FakeFetcher(error=TransportError("HTTP error (503)"))).get("/api/scrape?keyword=mouse")
    assert resp.status_code == 502
    body = resp.get_json()
    assert body["success"] is False
    assert "503" in body["error"]
