# jobs/pipeline.py
import asyncio
import logging
import time

from scraper.discovery import discover_all_item_pages, discover_catalog_pages
from scraper.errors import ScraperError, WriteFailureError
from scraper.fetcher import Crawler
from scraper.logger import configure_logging
from scraper.models import AssetDescriptor
from scraper.records import build_all_records
from scraper.utils import format_duration
from storage.files import download_all_assets, write_json_document

from .settings import load_settings

logger = logging.getLogger("scraper.pipeline")

ASSET_ID_KEY = "UPC"


async def execute_scraping_job(crawler, base_url, output_path):
    """
    Discover, scrape and persist every book of the catalog.

    Stages run strictly in sequence; each fans out internally and logs how
    many items it produced. A failed JSON write is logged and does not stop
    the job, so the scraped records are still returned for asset download.

    Args:
        crawler (Crawler): Fetcher shared by every stage
        base_url (str): Home page URL of the catalog site
        output_path (str | Path): Destination of the JSON document

    Returns:
        list[ItemRecord]: Every book scraped successfully

    Raises:
        CatalogPageCountNotFoundError: The home page has no usable page count
    """
    logger.info("Book data scraping job started")
    start = time.perf_counter()

    catalog_page_urls = await discover_catalog_pages(crawler, base_url)
    logger.info(f"Number of catalog page URLs found: {len(catalog_page_urls)}")

    book_page_urls = await discover_all_item_pages(crawler, catalog_page_urls, base_url)
    logger.info(f"Number of book details page URLs found: {len(book_page_urls)}")

    records = await build_all_records(crawler, book_page_urls)
    logger.info(f"Number of books scraped: {len(records)}")

    try:
        await write_json_document(output_path, [r.to_document() for r in records])
        logger.info(f"The book data has been persisted to {output_path}")
    except WriteFailureError as e:
        logger.error(e.message, extra={"path": e.file_path})

    logger.info(
        "Book data scraping job completed in "
        + format_duration(start, time.perf_counter())
    )
    return records


def asset_descriptors(records):
    """Pair each record's image URL with its UPC; records without one are skipped."""
    descriptors = []
    for record in records:
        identifier = record.product_value(ASSET_ID_KEY)
        if not identifier:
            logger.warning(
                f"No {ASSET_ID_KEY} found for {record.url}, skipping its image",
                extra={"url": record.url},
            )
            continue
        descriptors.append(AssetDescriptor(url=record.image_url, identifier=identifier))
    return descriptors


async def download_assets(crawler, records, directory):
    """Download the cover image of every record and log the tally."""
    logger.info("Book data asset download job started")
    start = time.perf_counter()

    descriptors = asset_descriptors(records)
    logger.info(f"Number of assets scheduled to be downloaded: {len(descriptors)}")

    results = await download_all_assets(crawler, descriptors, directory)
    failed = [r for r in results if not r.ok]
    for result in failed:
        logger.error(
            getattr(result.error, "message", repr(result.error)),
            extra={"url": result.descriptor.url},
        )
    logger.info(
        f"Number of assets successfully downloaded: {len(results) - len(failed)}"
    )
    logger.info(
        "Book data asset download job completed in "
        + format_duration(start, time.perf_counter())
    )
    return results


async def run(settings, transport=None):
    """
    Run a full scrape: data first, then assets.

    A ScraperError escaping the scraping stages (the catalog page count could
    not be read) is fatal: it is logged and the run ends without downloading
    assets.

    Returns:
        list[ItemRecord]: Scraped records, empty if the run was aborted
    """
    configure_logging(settings.log_dir, console=settings.console_logging)
    async with Crawler(
        base_url=settings.base_url,
        concurrency=settings.concurrency,
        retries=settings.retries,
        backoff=settings.backoff,
        transport=transport,
    ) as crawler:
        try:
            records = await execute_scraping_job(
                crawler, crawler.base_url, settings.output_path
            )
        except ScraperError as e:
            logger.error(e.message)
            return []
        await download_assets(crawler, records, settings.assets_dir)
        return records


# convenience script
async def main():
    await run(load_settings())


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
