"""Infobox extraction for Bulbapedia entity pages.

Each field has its own lookup returning the cleaned text or None; the
sentinel placeholders are only applied when the ExtractedEntity is built, so
a missing field never raises.
"""

import logging
from dataclasses import dataclass
from urllib.parse import quote

from bs4 import BeautifulSoup

from . import config
from .errors import ParseError
from .utils import clean_text, http_get

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedEntity:
    source_name: str
    canonical_name: str
    category: str
    height: str
    weight: str


def dimension_sentinel(dimension):
    return config.DIMENSION_NOT_FOUND.format(dimension=dimension)


def page_url(entity_name):
    title = entity_name.replace(" ", "_") + config.PAGE_TITLE_SUFFIX
    return config.PAGE_URL_TEMPLATE.format(title=quote(title, safe="()_'"))


def find_infobox(soup):
    """Return the first table whose class attribute contains the infobox marker."""
    return soup.select_one(f"table[class*='{config.INFOBOX_CLASS_MARKER}']")


def extract_name(infobox):
    node = infobox.find("b")
    if node is None:
        return None
    return clean_text(node.get_text()) or None


def extract_category(infobox):
    node = infobox.find("a", href=lambda href: bool(href) and config.TYPE_LINK_MARKER in href)
    if node is None:
        return None
    return clean_text(node.get_text()) or None


def _is_dimension_label(bold, dimension):
    for link in bold.find_all("a", recursive=False):
        for span in link.find_all("span", recursive=False):
            if dimension in span.get_text():
                return True
    return False


def extract_dimension(infobox, dimension):
    """Read the second cell of the first row in the table following the label.

    The label is a <b><a><span>Height</span></a></b> node; the value table is
    its next sibling <table>.
    """
    for bold in infobox.find_all("b"):
        if not _is_dimension_label(bold, dimension):
            continue
        table = bold.find_next_sibling("table")
        if table is None:
            continue
        for row in table.find_all("tr"):
            cells = row.find_all("td", recursive=False)
            if len(cells) >= 2:
                return clean_text(cells[1].get_text()) or None
    return None


def extract_entity_from_html(source_name, html):
    """Parse a page body into an ExtractedEntity.

    Raises ParseError when no infobox table exists.
    """
    soup = BeautifulSoup(html, config.HTML_PARSER)
    infobox = find_infobox(soup)
    if infobox is None:
        raise ParseError("infobox not found", details={"entity": source_name})

    name = extract_name(infobox)
    category = extract_category(infobox)
    dimensions = {}
    for dimension in config.DIMENSIONS:
        value = extract_dimension(infobox, dimension)
        dimensions[dimension.lower()] = value if value is not None else dimension_sentinel(dimension)

    return ExtractedEntity(
        source_name=source_name,
        canonical_name=name if name is not None else config.NAME_NOT_FOUND,
        category=category if category is not None else config.TYPE_NOT_FOUND,
        **dimensions,
    )


def fetch_page(entity_name):
    """Download the entity page; UpstreamError on non-2xx."""
    response = http_get(page_url(entity_name))
    return response.text


def extract(entity_name):
    """Fetch and parse one entity page.

    Raises UpstreamError or ParseError; both are per-entity failures the
    caller logs before moving on.
    """
    html = fetch_page(entity_name)
    entity = extract_entity_from_html(entity_name, html)
    logger.debug("[+] Extracted %s: %s", entity_name, entity)
    return entity
