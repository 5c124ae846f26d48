# scraper/extractors.py
"""
Field extractors for a parsed book detail page.

Every extractor takes the parsed page and its URL. A structurally missing
element raises the field's ExtractionError subclass; an element that is
present with empty text is returned as an empty string.
"""
import re
from urllib.parse import urljoin

from . import selectors
from .errors import (
    CategoryNotFoundError,
    DescriptionNotFoundError,
    ImageUrlNotFoundError,
    ProductInfoNotFoundError,
    RatingNotFoundError,
    TitleNotFoundError,
)
from .models import ProductInfoEntry

RATING_WORD = re.compile(r"[A-Z][a-z]+$")


def extract_category(soup, page_url):
    """Text of the breadcrumb before the last one (the last is the title)."""
    crumbs = soup.select(selectors.BREADCRUMBS)
    if len(crumbs) < 2:
        raise CategoryNotFoundError(page_url)
    return crumbs[-2].get_text(strip=True)


def extract_title(soup, page_url):
    titles = soup.select(selectors.TITLE)
    if not titles:
        raise TitleNotFoundError(page_url)
    return titles[0].get_text(strip=True)


def extract_rating(soup, page_url):
    """
    Extract the rating word from the star-rating element's class attribute.

    ``class="star-rating Three"`` yields ``"Three"``.

    Raises:
        RatingNotFoundError: The element, its class attribute or a trailing
            capitalized word is missing
    """
    element = soup.select_one(selectors.RATING)
    if element is None:
        raise RatingNotFoundError(page_url)
    classes = element.get("class")
    if not classes:
        raise RatingNotFoundError(page_url)
    if not isinstance(classes, str):
        classes = " ".join(classes)
    match = RATING_WORD.search(classes.strip())
    if match is None:
        raise RatingNotFoundError(page_url)
    return match.group(0)


def extract_description(soup, page_url):
    # Paragraph following the "Product Description" header
    paragraph = soup.select_one(selectors.DESCRIPTION)
    if paragraph is None:
        raise DescriptionNotFoundError(page_url)
    return paragraph.get_text(strip=True)


def extract_product_info(soup, page_url):
    """
    Pair the page's header cells with its data cells.

    Every th and td of the page is taken, paired by position in document
    order. More keys than values (or the reverse) is truncated to the
    shorter list.

    Returns:
        list[ProductInfoEntry]: Ordered key/value pairs

    Raises:
        ProductInfoNotFoundError: The page has neither header nor data cells
    """
    keys = [th.get_text(strip=True) for th in soup.select(selectors.PRODUCT_INFO_KEYS)]
    values = [
        td.get_text(strip=True) for td in soup.select(selectors.PRODUCT_INFO_VALUES)
    ]
    if not keys and not values:
        raise ProductInfoNotFoundError(page_url)
    return [ProductInfoEntry(key=k, value=v) for k, v in zip(keys, values)]


def extract_image_url(soup, page_url):
    """Absolute URL of the cover image, resolved against the detail page."""
    image = soup.select_one(selectors.IMAGE)
    src = image.get("src") if image is not None else None
    if not src or not src.strip():
        raise ImageUrlNotFoundError(page_url)
    return urljoin(page_url, src.strip())
