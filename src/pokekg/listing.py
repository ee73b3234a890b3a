import logging

import jsonschema

from . import config
from .errors import UpstreamError
from .utils import http_get

logger = logging.getLogger(__name__)


def normalize_title(title):
    """Strip the category page-title suffix: "Bulbasaur (Pokémon)" -> "Bulbasaur"."""
    return title.replace(config.TITLE_SUFFIX, "")


def parse_listing_payload(payload):
    """Return (titles, continue_token) from a categorymembers response body."""
    try:
        jsonschema.validate(payload, config.LISTING_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise UpstreamError(
            f"Unexpected listing payload: {exc.message}",
            details={"path": list(exc.absolute_path)},
        ) from exc

    titles = []
    for member in payload["query"]["categorymembers"]:
        title = member.get("title")
        if isinstance(title, str) and title:
            titles.append(title)
    continue_token = (payload.get("continue") or {}).get("cmcontinue")
    return titles, continue_token


def list_entities(
    *,
    category=config.LISTING_CATEGORY,
    page_size=config.LISTING_PAGE_SIZE,
    max_pages=config.LISTING_MAX_PAGES,
    api_url=config.LISTING_API_URL,
):
    """Return the normalized entity names listed under the category.

    Raises UpstreamError on a non-2xx status or a malformed body; callers
    treat that as fatal for the run.
    """
    params = {
        "action": "query",
        "list": "categorymembers",
        "cmtitle": category,
        "cmlimit": page_size,
        "format": "json",
    }
    names = []
    seen = set()
    pages = 0
    while True:
        response = http_get(api_url, params=params)
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(f"Listing response from {api_url} is not JSON", url=api_url) from exc
        titles, continue_token = parse_listing_payload(payload)
        pages += 1

        for title in titles:
            name = normalize_title(title)
            if name in config.EXCLUDED_TITLES or name in seen:
                continue
            seen.add(name)
            names.append(name)

        if not continue_token or (max_pages and pages >= max_pages):
            break
        params = dict(params, cmcontinue=continue_token)

    logger.info("[*] Listed %s entities from %s (%s page(s)).", len(names), category, pages)
    return names
