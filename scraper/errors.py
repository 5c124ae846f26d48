# scraper/errors.py


class ScraperError(Exception):
    """Base class for every error raised by the scraper."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NetworkError(ScraperError):
    """Base class for failed network exchanges; carries the request URL."""

    def __init__(self, message, request_url):
        super().__init__(message)
        self.request_url = request_url


class NoResponseError(NetworkError):
    """The exchange produced no usable content after the retry budget."""

    def __init__(self, request_url, message=None):
        super().__init__(
            message or f"No response received for the request {request_url}",
            request_url,
        )


class UnsuccessfulResponseError(NoResponseError):
    """The exchange completed but the status code was not 200."""

    def __init__(self, request_url, status_code):
        super().__init__(
            request_url,
            f"Unsuccessful network response ({status_code}) returned for {request_url}",
        )
        self.status_code = status_code


class ExtractionError(ScraperError):
    """Base class for a detail page field that could not be located."""

    field = "field"

    def __init__(self, page_url):
        super().__init__(f"Could not locate the book {self.field} on {page_url}")
        self.page_url = page_url


class CategoryNotFoundError(ExtractionError):
    field = "category breadcrumb"


class TitleNotFoundError(ExtractionError):
    field = "title"


class RatingNotFoundError(ExtractionError):
    field = "rating"


class DescriptionNotFoundError(ExtractionError):
    field = "description"


class ProductInfoNotFoundError(ExtractionError):
    field = "product info"


class ImageUrlNotFoundError(ExtractionError):
    field = "image URL"


class CatalogPageCountNotFoundError(ScraperError):
    def __init__(self):
        super().__init__("Could not locate or extract total catalog page count")


class WriteFailureError(ScraperError):
    """Data could not be persisted to the destination path."""

    def __init__(self, file_path):
        super().__init__(f"Data could not be written to {file_path}")
        self.file_path = str(file_path)
