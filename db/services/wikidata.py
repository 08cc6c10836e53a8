# services/wikidata.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests

from db.services.http import get_json

logger = logging.getLogger(__name__)

WIKIDATA_ENTITY_URL = os.getenv(
    "WIKIDATA_ENTITY_URL", "https://www.wikidata.org/wiki/Special:EntityData"
)

TAXON_NAME = "P225"
PARENT_TAXON = "P171"
TAXON_RANK = "P105"

KINGDOM = "kingdom"
MAX_HOPS = 10


@dataclass
class ResolvedTaxon:
    scientific_name: Optional[str] = None
    kingdom_name: Optional[str] = None


def _obj(value: Any) -> dict:
    # members that should be JSON objects; anything else reads as empty
    return value if isinstance(value, dict) else {}


def fetch_entity(qid: str) -> Optional[dict]:
    js = get_json(f"{WIKIDATA_ENTITY_URL}/{quote(qid, safe='')}.json")
    return _obj(_obj(_obj(js).get("entities")).get(qid)) or None


def _claim_value(entity: dict, prop: str) -> Any:
    """First claim's datavalue for ``prop`` (single-valued reads only)."""
    claims = _obj(entity.get("claims")).get(prop)
    if not isinstance(claims, list) or not claims:
        return None
    return _obj(_obj(_obj(claims[0]).get("mainsnak")).get("datavalue")).get("value")


def _claim_id(entity: dict, prop: str) -> Optional[str]:
    value = _claim_value(entity, prop)
    if isinstance(value, dict) and isinstance(value.get("id"), str):
        return value["id"]
    return None


def english_label(entity: Optional[dict]) -> Optional[str]:
    label = _obj(_obj(_obj(entity).get("labels")).get("en")).get("value")
    return label if isinstance(label, str) and label else None


def rank_label(entity: dict) -> str:
    """Lower-cased English label of the entity's taxon rank, '' if it has none."""
    rank_id = _claim_id(entity, TAXON_RANK)
    if not rank_id:
        return ""
    return (english_label(fetch_entity(rank_id)) or "").casefold()


def find_kingdom(entity: dict, max_hops: int = MAX_HOPS) -> Optional[str]:
    """Walk parent-taxon links until an ancestor ranked 'kingdom' turns up.

    Stops unresolved on a missing parent link, a missing entity, a revisited
    id, or after ``max_hops`` parents. One request per hop plus one for its
    rank label; nothing is cached.
    """
    visited = {entity.get("id")}
    parent_id = _claim_id(entity, PARENT_TAXON)
    hops = 0

    while parent_id and hops < max_hops:
        if parent_id in visited:
            logger.debug("parent-taxon cycle at %s", parent_id)
            return None
        visited.add(parent_id)
        hops += 1

        parent = fetch_entity(parent_id)
        if not parent:
            return None
        if rank_label(parent) == KINGDOM:
            return english_label(parent)
        parent_id = _claim_id(parent, PARENT_TAXON)

    return None


def resolve_taxon(qid: str, max_hops: int = MAX_HOPS) -> ResolvedTaxon:
    """Scientific name (P225, else the label) plus kingdom for a Wikidata item.

    Failing to fetch ``qid`` itself raises; failures further up the walk only
    cost the kingdom.
    """
    entity = fetch_entity(qid)
    if not entity:
        return ResolvedTaxon()
    entity.setdefault("id", qid)

    sci = _claim_value(entity, TAXON_NAME)
    if not isinstance(sci, str) or not sci.strip():
        sci = english_label(entity)
    out = ResolvedTaxon(scientific_name=sci or None)

    try:
        out.kingdom_name = find_kingdom(entity, max_hops=max_hops)
    except (requests.RequestException, ValueError) as e:
        logger.warning("kingdom walk from %s aborted: %s", qid, e)
    return out
