# scraper/discovery.py
import asyncio
import logging
import re
from bs4 import BeautifulSoup
from urllib.parse import urljoin

from . import selectors
from .errors import CatalogPageCountNotFoundError, NoResponseError

logger = logging.getLogger("scraper.discovery")

PAGE_COUNT = re.compile(r"\d+$")


def catalog_page_url(base_url, page_num):
    return f"{base_url.rstrip('/')}/catalogue/page-{page_num}.html"


def item_page_url(base_url, href):
    # Listing hrefs are relative to the catalogue directory
    return urljoin(f"{base_url.rstrip('/')}/catalogue/", href)


async def discover_catalog_pages(crawler, base_url):
    """
    Build the URL of every catalog page from the home page's page count.

    Reads the pagination indicator (e.g. "Page 1 of 50") on the home page and
    derives the 1-indexed, contiguous list of catalog page URLs.

    Args:
        crawler (Crawler): Fetcher used for the home page
        base_url (str): Home page URL of the catalog site

    Returns:
        list[str]: Catalog page URLs in page order; empty if the home page
            could not be fetched

    Raises:
        CatalogPageCountNotFoundError: No pagination indicator, or no trailing
            integer in its text
    """
    try:
        html = await crawler.fetch_page(base_url)
    except NoResponseError as e:
        logger.error(e.message, extra={"url": e.request_url})
        return []

    soup = BeautifulSoup(html, "lxml")
    indicator = soup.select_one(selectors.PAGINATION)
    if indicator is None:
        raise CatalogPageCountNotFoundError()
    match = PAGE_COUNT.search(indicator.get_text(strip=True))
    if match is None:
        raise CatalogPageCountNotFoundError()

    page_count = int(match.group(0))
    return [catalog_page_url(base_url, n) for n in range(1, page_count + 1)]


async def discover_item_pages(crawler, catalog_page_url, base_url):
    """
    Collect the detail page URLs listed on one catalog page.

    Returns an empty list when the catalog page cannot be fetched. Anchors
    without an href are skipped and reported in a single warning.
    """
    try:
        html = await crawler.fetch_page(catalog_page_url)
    except NoResponseError as e:
        logger.error(e.message, extra={"url": e.request_url})
        return []

    soup = BeautifulSoup(html, "lxml")
    urls = []
    missing = 0
    for a in soup.select(selectors.BOOK_ANCHOR):
        href = a.get("href")
        if href:
            urls.append(item_page_url(base_url, href))
        else:
            missing += 1

    if missing:
        logger.warning(
            f"{missing} URL(s) could not be found on {catalog_page_url} "
            "due to href attribute not found"
        )
    return urls


async def discover_all_item_pages(crawler, catalog_page_urls, base_url):
    """
    Collect detail page URLs from every catalog page concurrently.

    All pages are fetched at once and the stage waits for each to settle.
    Results are concatenated in the order of ``catalog_page_urls``, whatever
    order the fetches complete in. Duplicates are kept.
    """
    tasks = [discover_item_pages(crawler, u, base_url) for u in catalog_page_urls]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    item_urls = []
    for url, result in zip(catalog_page_urls, results):
        if isinstance(result, Exception):
            logger.error(f"Failed to discover book pages on {url}: {result!r}")
            continue
        item_urls.extend(result)
    return item_urls
