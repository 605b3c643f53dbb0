import pytest
import requests

from errors import TransportError
from pages import ORIGIN, FakeFetcher, make_card, make_page
from scraper.fetcher import AmazonFetcher, browser_headers
from scraper.service import ScrapeService


class ExplodingPipeline:
    def extract_all(self, markup):
        raise AssertionError("pipeline must not run")


def test_scrape_success_envelope():
    fetcher = FakeFetcher(make_page(make_card(), make_card(title=None)))
    response = ScrapeService(fetcher=fetcher).scrape("  wireless mouse ")
    assert response["success"] is True
    assert response["keyword"] == "wireless mouse"
    assert response["totalProducts"] == 1
    assert response["products"][0]["reviewCount"] == 1203
    assert response["products"][0]["productUrl"] == ORIGIN + "/Wireless-Mouse/dp/B0001"
    assert response["stats"] == {"located": 2, "accepted": 1, "rejected": 1, "failed": 0}
    assert response["timestamp"].endswith("Z")
    assert fetcher.keywords == ["wireless mouse"]


def test_empty_result_is_still_success():
    response = ScrapeService(fetcher=FakeFetcher("<html><body>Enter the characters you see below</body></html>")).scrape("mouse")
    assert response["success"] is True
    assert response["products"] == []
    assert response["totalProducts"] == 0


@pytest.mark.parametrize("keyword", [None, "", "   "])
def test_missing_keyword_is_rejected_before_fetch(keyword):
    fetcher = FakeFetcher(make_page(make_card()))
    response = ScrapeService(fetcher=fetcher, pipeline=ExplodingPipeline()).scrape(keyword)
    assert response["success"] is False
    assert "keyword" in response["error"]
    assert fetcher.keywords == []


def test_transport_error_skips_pipeline():
    fetcher = FakeFetcher(error=TransportError("Request timed out after 10s"))
    response = ScrapeService(fetcher=fetcher, pipeline=ExplodingPipeline()).scrape("mouse")
    assert response == {"success": False, "error": "Request timed out after 10s"}


def test_fetcher_maps_timeout_to_transport_error(monkeypatch):
    fetcher = AmazonFetcher(origin=ORIGIN, timeout=10)

    def fake_get(url, headers=None, timeout=None):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(fetcher.session, "get", fake_get)
    with pytest.raises(TransportError, match="timed out after 10s"):
        fetcher.fetch_search_page("mouse")


def test_fetcher_rejects_bad_status(monkeypatch):
    fetcher = AmazonFetcher(origin=ORIGIN)

    class FakeResponse:
        ok = False
        status_code = 503
        text = "Service Unavailable"

    monkeypatch.setattr(fetcher.session, "get", lambda url, headers=None, timeout=None: FakeResponse())
    with pytest.raises(TransportError, match="503"):
        fetcher.fetch(fetcher.search_url("mouse"))


def test_fetcher_sends_browser_headers(monkeypatch):
    fetcher = AmazonFetcher(origin=ORIGIN, timeout=7)
    seen = {}

    class FakeResponse:
        ok = True
        status_code = 200
        text = "<html></html>"

    def fake_get(url, headers=None, timeout=None):
        seen.update(url=url, headers=headers, timeout=timeout)
        return FakeResponse()

    monkeypatch.setattr(fetcher.session, "get", fake_get)
    assert fetcher.fetch_search_page("usb c hub") == "<html></html>"
    assert seen["url"] == ORIGIN + "/s?k=usb+c+hub&ref=sr_pg_1"
    assert seen["timeout"] == 7
    for name in ("User-Agent", "Accept", "Accept-Language", "Accept-Encoding", "Connection", "Upgrade-Insecure-Requests"):
        assert name in seen["headers"]
    assert browser_headers()["Upgrade-Insecure-Requests"] == "1"
