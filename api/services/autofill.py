"""
Wikipedia + Wikidata autofill for species drafts.

1) Wikipedia search -> top title
2) Wikipedia REST summary -> extract + main image + wikibase item
3) Wikidata entity -> taxon name (P225), then parent taxa until rank 'kingdom'
4) Wikipedia wikitext -> population figure from the infobox

Stages run one after another; 1 must succeed, 2-4 are best effort. Values only
ever land in blank draft fields.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from api.schemas.autofill import DraftSpecies
from api.services.infobox import extract_population
from db.services.wikidata import resolve_taxon
from db.services.wikipedia import fetch_summary, fetch_wikitext, search_title

logger = logging.getLogger(__name__)


class AutofillError(Exception):
    pass


class AutofillQueryRequired(AutofillError):
    pass


class AutofillNoMatch(AutofillError):
    pass


class AutofillRequestFailed(AutofillError):
    pass


@dataclass
class AutofillResult:
    title: str
    draft: DraftSpecies
    filled: List[str] = field(default_factory=list)
    notification: str = ""


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def fill_blank(draft: DraftSpecies, name: str, value: Optional[str], filled: List[str]) -> bool:
    """Assign ``value`` to ``draft.name`` only if the field is blank and the value isn't."""
    if is_blank(value) or not is_blank(getattr(draft, name)):
        return False
    setattr(draft, name, value.strip())
    filled.append(name)
    return True


def effective_query(query: Optional[str], draft: DraftSpecies) -> str:
    for candidate in (query, draft.scientific_name, draft.common_name):
        if not is_blank(candidate):
            return candidate.strip()
    return ""


def _join(labels: List[str]) -> str:
    if len(labels) == 1:
        return labels[0]
    return ", ".join(labels[:-1]) + " and " + labels[-1]


def build_notification(title: str, filled: List[str]) -> str:
    labels = []
    if "description" in filled:
        labels.append("summary")
    if "image" in filled:
        labels.append("image")
    if "common_name" in filled:
        labels.append("common name")
    taxon = [f for f in ("scientific_name", "kingdom") if f in filled]
    if taxon:
        labels.append("/".join(f.replace("_", " ") for f in taxon))
    if "total_population" in filled:
        labels.append("population")

    if not labels:
        return f"Found “{title}” on Wikipedia, but there was nothing new to fill in."
    return f"Loaded {_join(labels)} for “{title}”."


def autofill(query: Optional[str], draft: Optional[DraftSpecies] = None) -> AutofillResult:
    """Fill the blanks of ``draft`` from Wikipedia/Wikidata; the caller's draft is not mutated."""
    draft = draft.model_copy() if draft is not None else DraftSpecies()
    q = effective_query(query, draft)
    if not q:
        raise AutofillQueryRequired("Enter a scientific or common name to search.")

    try:
        title = search_title(q)
    except (requests.RequestException, ValueError) as e:
        raise AutofillRequestFailed("Wikipedia request failed.") from e
    if not title:
        raise AutofillNoMatch(f"No Wikipedia match for {q!r}.")

    filled: List[str] = []

    summary = fetch_summary(title)
    fill_blank(draft, "description", summary.extract, filled)
    fill_blank(draft, "image", summary.image_url, filled)
    fill_blank(draft, "common_name", title, filled)

    if summary.entity_id:
        try:
            taxon = resolve_taxon(summary.entity_id)
        except Exception as e:
            logger.warning("wikidata lookup for %s failed: %s", summary.entity_id, e)
        else:
            fill_blank(draft, "scientific_name", taxon.scientific_name, filled)
            fill_blank(draft, "kingdom", taxon.kingdom_name, filled)

    try:
        population = extract_population(fetch_wikitext(title))
    except Exception as e:
        logger.warning("infobox scrape for %r failed: %s", title, e)
    else:
        fill_blank(draft, "total_population", population, filled)

    logger.info("autofill %r -> %r filled=%s", q, title, filled)
    return AutofillResult(
        title=title,
        draft=draft,
        filled=filled,
        notification=build_notification(title, filled),
    )
