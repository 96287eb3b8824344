"""Command-line product extraction.

Usage:
    python -m wishlist.cli extract https://rozetka.com.ua/ua/some-product/p123/
    python -m wishlist.cli extract https://example.com/item --html saved_page.html
    python -m wishlist.cli retailers
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from wishlist.ingest.domains import supported_domains
from wishlist.ingest.errors import ExtractionError
from wishlist.ingest.orchestrator import ProductExtractor
from wishlist.normalize.processor import normalize_price

logger = logging.getLogger(__name__)


async def run_extract(url: str, html_path: Optional[str] = None, timeout: Optional[float] = None) -> dict:
    """
    Extract one product and return it as a JSON-ready dict.

    Args:
        url: Product page URL
        html_path: Saved page to extract from instead of launching a browser
        timeout: Wall-clock budget override in seconds
    """
    extractor = ProductExtractor(timeout_seconds=timeout)

    if html_path:
        html = Path(html_path).read_text(encoding="utf-8")
        info = await extractor.extract_html(html, url)
    else:
        info = await extractor.extract(url)

    data = info.to_dict()
    data["priceValue"] = normalize_price(info.price)
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wishlist",
        description="Extract product information from retailer pages",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser("extract", help="Extract product info from a URL")
    extract_parser.add_argument("url", help="Product page URL")
    extract_parser.add_argument(
        "--html",
        metavar="FILE",
        help="Extract from a saved HTML file instead of loading the page",
    )
    extract_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Extraction time budget in seconds",
    )

    subparsers.add_parser("retailers", help="List domains with site-specific extraction")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command == "retailers":
        for domain in supported_domains():
            print(domain)
        return 0

    try:
        data = asyncio.run(run_extract(args.url, args.html, args.timeout))
    except ExtractionError as e:
        print(json.dumps({"success": False, "error": e.reason}, ensure_ascii=False))
        return 1

    print(json.dumps({"success": True, "data": data}, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
