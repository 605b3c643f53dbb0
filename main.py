import json
import sys
from typing import List

from config import configure_logging
from errors import ScraperError
from models import Product, is_available
from scraper.service import ScrapeService


def run(keyword: str, as_json: bool = False) -> None:
    configure_logging()
    service = ScrapeService()

    if as_json:
        print(json.dumps(service.scrape(keyword), ensure_ascii=False, indent=2))
        return

    print(f"\n[Fetch] Searching Amazon for: {keyword}")
    result = service.run(keyword)
    stats = result.stats
    print(
        f"[Extraction] Completed: {stats.accepted} products from {stats.located} result blocks "
        f"(rejected={stats.rejected}, failed={stats.failed})."
    )
    if not result.products:
        print("No products found for that keyword.")
        return

    print_table(result.products)
    print("\nDone.")


def print_table(products: List[Product]) -> None:
    """Render a compact table for a list of products."""
    headers = ["#", "Title", "Price", "Rating", "Reviews", "Link"]
    col_widths = [3, 60, 12, 7, 9, 50]
    indent = "  "

    def trunc(text: str, width: int) -> str:
        return text if len(text) <= width else text[: width - 3] + "..."

    header_row = (
        f"{headers[0]:>{col_widths[0]}} "
        f"{headers[1]:<{col_widths[1]}} "
        f"{headers[2]:<{col_widths[2]}} "
        f"{headers[3]:<{col_widths[3]}} "
        f"{headers[4]:<{col_widths[4]}} "
        f"{headers[5]:<{col_widths[5]}}"
    )
    separator = "-" * len(header_row)
    print(f"{indent}{header_row}")
    print(f"{indent}{separator}")

    for p in products:
        rating = f"{p.rating:.1f}" if is_available(p.rating) else "n/a"
        reviews = f"{p.review_count:,}" if is_available(p.review_count) else "n/a"
        price = str(p.price) if is_available(p.price) else "n/a"
        link = str(p.product_url) if is_available(p.product_url) else "n/a"

        row = (
            f"{p.id:>{col_widths[0]}} "
            f"{trunc(p.title, col_widths[1]):<{col_widths[1]}} "
            f"{trunc(price, col_widths[2]):<{col_widths[2]}} "
            f"{rating:<{col_widths[3]}} "
            f"{reviews:<{col_widths[4]}} "
            f"{trunc(link, col_widths[5]):<{col_widths[5]}}"
        )
        print(f"{indent}{row}")


if __name__ == "__main__":
    args = sys.argv[1:]
    as_json = "--json" in args
    args = [a for a in args if a != "--json"]
    if not args:
        print("Usage: python main.py \"keyword\" [--json]")
        sys.exit(1)
    keyword = " ".join(args).strip()
    if not keyword:
        print("Please provide a non-empty keyword.")
        sys.exit(1)

    try:
        run(keyword, as_json=as_json)
    except KeyboardInterrupt:
        sys.exit(1)
    except ScraperError as exc:
        print(f"Error: {exc}")
        sys.exit(1)
