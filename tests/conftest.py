# tests/conftest.py
import sys
import os

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT_DIR)

import logging
import httpx
import pytest

from scraper.fetcher import Crawler

BASE_URL = "http://books.test"


class FakeSite:
    """
    In-memory website served through httpx.MockTransport.

    Pages are registered per absolute URL as either a (status, body) tuple or
    an exception instance, which is raised instead of answering. Unknown URLs
    answer 404. Every request is recorded in ``requests`` so tests can assert
    on retry counts.
    """

    def __init__(self):
        self.pages = {}
        self.requests = []

    @staticmethod
    def key(url):
        return str(httpx.URL(url))

    def add(self, url, body, status=200):
        self.pages[self.key(url)] = (status, body)

    def fail(self, url, exc=None):
        self.pages[self.key(url)] = exc or httpx.ConnectError("connection refused")

    def handler(self, request):
        url = self.key(request.url)
        self.requests.append(url)
        page = self.pages.get(url)
        if page is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(page, Exception):
            raise page
        status, body = page
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, text=body)

    def hits(self, url):
        return self.requests.count(self.key(url))

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)


def home_page(page_count):
    return f"""
    <html><body>
      <ul class="pager">
        <li class="current">
            Page 1 of {page_count}
        </li>
        <li class="next"><a href="catalogue/page-2.html">next</a></li>
      </ul>
    </body></html>
    """


def catalog_page(hrefs):
    articles = "".join(
        f"""
        <article class="product_pod">
            <h3><a href="{href}" title="Book">Book</a></h3>
        </article>
        """
        for href in hrefs
    )
    return f"<html><body><ol class='row'>{articles}</ol></body></html>"


def detail_page(
    title="A Light in the Attic",
    upc="a897fe39b1053632",
    category="Poetry",
    rating="Three",
    description="It's hard to imagine a world without A Light in the Attic.",
    image="../../media/cache/fe/72/fe72f0532301ec28892ae79a629a293c.jpg",
):
    return f"""
    <html><body>
      <ul class="breadcrumb">
        <li><a href="../../index.html">Home</a></li>
        <li><a href="../category/books_1/index.html">Books</a></li>
        <li><a href="../category/books/poetry_23/index.html">{category}</a></li>
        <li class="active">{title}</li>
      </ul>
      <article class="product_page">
        <div class="row">
          <div class="col-sm-6">
            <div id="product_gallery" class="carousel">
              <div class="thumbnail">
                <div class="carousel-inner">
                  <div class="item active"><img src="{image}" alt="{title}" /></div>
                </div>
              </div>
            </div>
          </div>
          <div class="col-sm-6 product_main">
            <h1>{title}</h1>
            <p class="price_color">£51.77</p>
            <p class="star-rating {rating}"><i class="icon-star"></i></p>
          </div>
        </div>
        <div id="product_description" class="sub-header"><h2>Product Description</h2></div>
        <p>{description}</p>
        <div class="sub-header"><h2>Product Information</h2></div>
        <table class="table table-striped">
          <tr><th>UPC</th><td>{upc}</td></tr>
          <tr><th>Product Type</th><td>Books</td></tr>
          <tr><th>Price (excl. tax)</th><td>£51.77</td></tr>
        </table>
      </article>
    </body></html>
    """


@pytest.fixture
def site():
    return FakeSite()


@pytest.fixture
async def crawler(site):
    """Crawler wired to the fake site, with no backoff between retries."""
    c = Crawler(base_url=BASE_URL, concurrency=5, retries=3, backoff=0, transport=site.transport)
    yield c
    await c.close()


@pytest.fixture(autouse=True)
def reset_scraper_logger():
    """Drop handlers installed by configure_logging so tests stay isolated."""
    yield
    logger = logging.getLogger("scraper")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
