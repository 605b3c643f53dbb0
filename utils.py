import re
from typing import Optional
from urllib.parse import urljoin

# "4.5 out of 5 stars", "4,5 de 5 estrellas"
RATING_PATTERN = re.compile(r"(\d+(?:[.,]\d+)?)\s*(?:de\s*5|out\s+of\s+5)(?!\d)", re.IGNORECASE)
# "1,203", "12.450", "87"
REVIEW_COUNT_PATTERN = re.compile(r"\d{1,3}(?:[,.]\d{3})+|\d+")
IMAGE_URL_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)
# absolute, protocol-relative or root-relative; excludes data: placeholders
IMAGE_SOURCE_PATTERN = re.compile(r"^\s*(?:https?:|/)", re.IGNORECASE)
PRICE_PATTERN = re.compile(r"\d")
HREF_PATTERN = re.compile(r"^\S+$")

MAX_RATING = 5.0


def clean_text(raw: str) -> Optional[str]:
    text = (raw or "").strip()
    return text or None


def parse_rating(raw: str) -> Optional[float]:
    match = RATING_PATTERN.search(raw or "")
    if not match:
        return None
    try:
        value = float(match.group(1).replace(",", "."))
    except ValueError:
        return None
    if not 0.0 <= value <= MAX_RATING:
        return None
    return value


def parse_review_count(raw: str) -> Optional[int]:
    """Pull the first digit run, dropping thousands separators: "1,203 ratings" -> 1203."""
    match = REVIEW_COUNT_PATTERN.search(raw or "")
    if not match:
        return None
    return int(re.sub(r"[,.]", "", match.group(0)))


def clean_price(raw: str) -> Optional[str]:
    # Kept as displayed; currency symbols and separators are not touched.
    text = (raw or "").strip()
    if not PRICE_PATTERN.search(text):
        return None
    return text


def normalize_image_url(raw: str, origin: Optional[str] = None) -> Optional[str]:
    url = (raw or "").strip()
    if url.startswith("//"):
        url = "https:" + url
    elif url.startswith("/") and origin:
        url = urljoin(origin.rstrip("/") + "/", url)
    if not IMAGE_URL_PATTERN.match(url):
        return None
    return url


def absolute_url(raw: str, origin: str) -> Optional[str]:
    href = (raw or "").strip()
    if not HREF_PATTERN.match(href):
        return None
    return urljoin(origin.rstrip("/") + "/", href)
