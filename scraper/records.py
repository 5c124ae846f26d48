# scraper/records.py
import asyncio
import logging
from bs4 import BeautifulSoup

from .errors import ExtractionError, NoResponseError
from .extractors import (
    extract_category,
    extract_description,
    extract_image_url,
    extract_product_info,
    extract_rating,
    extract_title,
)
from .models import ItemRecord

logger = logging.getLogger("scraper.records")


def parse_record(html, page_url):
    """
    Parse a book detail page into an ItemRecord.

    Raises:
        ExtractionError: The first field that could not be located
    """
    soup = BeautifulSoup(html, "lxml")
    return ItemRecord(
        url=page_url,
        category=extract_category(soup, page_url),
        title=extract_title(soup, page_url),
        rating=extract_rating(soup, page_url),
        description=extract_description(soup, page_url),
        product_info=extract_product_info(soup, page_url),
        image_url=extract_image_url(soup, page_url),
    )


async def build_record(crawler, item_page_url):
    """
    Fetch and parse a single book detail page.

    A fetch failure and a missing field are handled the same way: the error
    is logged and the item is dropped, so one bad page never aborts its
    siblings.

    Returns:
        ItemRecord or None: The record, or None if the item was dropped
    """
    try:
        html = await crawler.fetch_page(item_page_url)
    except NoResponseError as e:
        logger.error(e.message, extra={"url": e.request_url})
        return None

    try:
        return parse_record(html, item_page_url)
    except ExtractionError as e:
        logger.error(
            f"Extraction failed, dropping {item_page_url}: {e.message}",
            extra={"url": item_page_url, "error": type(e).__name__},
        )
        return None


async def build_all_records(crawler, item_page_urls):
    """Build records for every detail page concurrently, keeping successes."""
    tasks = [build_record(crawler, u) for u in item_page_urls]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    records = []
    for url, result in zip(item_page_urls, results):
        if isinstance(result, Exception):
            logger.error(f"Failed process book {url}: {result!r}")
        elif result is not None:
            records.append(result)
    return records
