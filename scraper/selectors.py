# scraper/selectors.py

# Catalog pagination indicator, e.g. "Page 1 of 50"
PAGINATION = "li.current"

# Detail page link inside a catalog listing
BOOK_ANCHOR = ".product_pod h3 a"

# Detail page fields
BREADCRUMBS = ".breadcrumb li"
TITLE = ".product_main > h1"
RATING = ".star-rating"
DESCRIPTION = "#product_description + p"
PRODUCT_INFO_KEYS = "th"
PRODUCT_INFO_VALUES = "td"
IMAGE = ".thumbnail img"
