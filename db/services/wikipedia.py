# services/wikipedia.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests

from db.services.http import get_json

logger = logging.getLogger(__name__)

WIKIPEDIA_API_URL = os.getenv("WIKIPEDIA_API_URL", "https://en.wikipedia.org/w/api.php")
WIKIPEDIA_REST_URL = os.getenv(
    "WIKIPEDIA_REST_URL", "https://en.wikipedia.org/api/rest_v1"
)


@dataclass
class Summary:
    extract: Optional[str] = None
    image_url: Optional[str] = None
    entity_id: Optional[str] = None


def _obj(value: Any) -> dict:
    # API payload members that should be objects; anything else reads as empty
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def search_title(query: str) -> Optional[str]:
    """Full-text search; returns the first hit's title verbatim, or None when there are no hits.

    Network and decode errors propagate: without a title nothing else can run.
    """
    js = get_json(
        WIKIPEDIA_API_URL,
        params={
            "action": "query",
            "list": "search",
            "srsearch": query,
            "format": "json",
        },
    )
    hits = _obj(_obj(js).get("query")).get("search")
    if not isinstance(hits, list) or not hits:
        return None
    return _text(_obj(hits[0]).get("title"))


def fetch_summary(title: str) -> Summary:
    """REST page summary. Never raises; a failed lookup is an empty Summary."""
    url = f"{WIKIPEDIA_REST_URL}/page/summary/{quote(title, safe='')}"
    try:
        js = get_json(url)
    except (requests.RequestException, ValueError) as e:
        logger.warning("wikipedia summary for %r failed: %s", title, e)
        return Summary()
    js = _obj(js)

    image = _text(_obj(js.get("originalimage")).get("source")) or _text(
        _obj(js.get("thumbnail")).get("source")
    )
    return Summary(
        extract=_text(js.get("extract")),
        image_url=image,
        entity_id=_text(js.get("wikibase_item")),
    )


def fetch_wikitext(title: str) -> Optional[str]:
    """Raw page markup via action=parse; None if the page has none."""
    js = get_json(
        WIKIPEDIA_API_URL,
        params={
            "action": "parse",
            "prop": "wikitext",
            "page": title,
            "format": "json",
        },
    )
    return _text(_obj(_obj(_obj(js).get("parse")).get("wikitext")).get("*"))
