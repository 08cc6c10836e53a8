# tests/test_autofill.py
import pytest
import requests

from api.schemas.autofill import DraftSpecies
from api.services import autofill as af
from db.services.wikidata import ResolvedTaxon
from db.services.wikipedia import Summary


@pytest.fixture
def upstream(monkeypatch):
    """Stub every lookup; tests override pieces through the returned dict."""
    state = {
        "calls": [],
        "title": "Tiger",
        "summary": Summary(
            extract="A large cat.", image_url="https://example/tiger.jpg", entity_id="Q19939"
        ),
        "taxon": ResolvedTaxon(scientific_name="Panthera tigris", kingdom_name="Animalia"),
        "wikitext": "{{Speciesbox\n| population_total = {{circa|3900}}\n}}",
    }

    def _result(key):
        value = state[key]
        if isinstance(value, Exception):
            raise value
        return value

    def search_title(q):
        state["calls"].append(("search", q))
        return _result("title")

    def fetch_summary(title):
        state["calls"].append(("summary", title))
        return _result("summary")

    def resolve_taxon(qid):
        state["calls"].append(("taxon", qid))
        return _result("taxon")

    def fetch_wikitext(title):
        state["calls"].append(("wikitext", title))
        return _result("wikitext")

    monkeypatch.setattr(af, "search_title", search_title)
    monkeypatch.setattr(af, "fetch_summary", fetch_summary)
    monkeypatch.setattr(af, "resolve_taxon", resolve_taxon)
    monkeypatch.setattr(af, "fetch_wikitext", fetch_wikitext)
    return state


def test_stages_run_in_order(upstream):
    result = af.autofill("tiger")
    assert [c[0] for c in upstream["calls"]] == ["search", "summary", "taxon", "wikitext"]
    assert upstream["calls"][0] == ("search", "tiger")
    assert upstream["calls"][2] == ("taxon", "Q19939")

    d = result.draft
    assert d.description == "A large cat."
    assert d.image == "https://example/tiger.jpg"
    assert d.common_name == "Tiger"
    assert d.scientific_name == "Panthera tigris"
    assert d.kingdom == "Animalia"
    assert d.total_population == "3900"


def test_summary_without_entity_skips_rank_walk(upstream):
    upstream["summary"] = Summary(extract="A large cat.", image_url="https://example/tiger.jpg")
    upstream["wikitext"] = None

    result = af.autofill("Tiger")
    assert "taxon" not in [c[0] for c in upstream["calls"]]
    assert result.draft.description == "A large cat."
    assert result.draft.image == "https://example/tiger.jpg"
    assert result.draft.kingdom == ""
    assert result.draft.total_population == ""


def test_user_fields_are_never_overwritten(upstream):
    draft = DraftSpecies(
        scientific_name="Panthera tigris",
        common_name="Bengal tiger",
        description="My own notes.",
    )
    upstream["taxon"] = ResolvedTaxon(scientific_name="Felis tigris", kingdom_name="Animalia")

    result = af.autofill("tiger", draft)
    assert result.draft.scientific_name == "Panthera tigris"
    assert result.draft.common_name == "Bengal tiger"
    assert result.draft.description == "My own notes."
    assert result.draft.kingdom == "Animalia"
    assert set(result.filled) == {"image", "kingdom", "total_population"}
    # the caller's draft is left alone
    assert draft.kingdom == ""


def test_rank_walk_failure_does_not_stop_infobox(upstream):
    upstream["taxon"] = requests.ConnectionError("wikidata down")
    result = af.autofill("tiger")
    assert [c[0] for c in upstream["calls"]] == ["search", "summary", "taxon", "wikitext"]
    assert result.draft.scientific_name == ""
    assert result.draft.total_population == "3900"


def test_infobox_failure_is_swallowed(upstream):
    upstream["wikitext"] = requests.Timeout("slow")
    result = af.autofill("tiger")
    assert result.draft.kingdom == "Animalia"
    assert result.draft.total_population == ""


def test_empty_summary_still_runs_infobox(upstream):
    upstream["summary"] = Summary()
    result = af.autofill("tiger")
    assert [c[0] for c in upstream["calls"]] == ["search", "summary", "wikitext"]
    assert result.draft.common_name == "Tiger"
    assert result.draft.total_population == "3900"


def test_no_match_stops_pipeline(upstream):
    upstream["title"] = None
    with pytest.raises(af.AutofillNoMatch):
        af.autofill("zzzzqqq")
    assert [c[0] for c in upstream["calls"]] == ["search"]


def test_search_failure_is_request_failed(upstream):
    upstream["title"] = requests.ConnectionError("offline")
    with pytest.raises(af.AutofillRequestFailed):
        af.autofill("tiger")
    assert [c[0] for c in upstream["calls"]] == ["search"]


def test_blank_query_never_searches(upstream):
    with pytest.raises(af.AutofillQueryRequired):
        af.autofill("   ", DraftSpecies())
    assert upstream["calls"] == []


def test_query_falls_back_to_draft_names(upstream):
    af.autofill(None, DraftSpecies(common_name=" Snow leopard "))
    assert upstream["calls"][0] == ("search", "Snow leopard")


def test_notification_lists_filled_categories(upstream):
    result = af.autofill("tiger")
    assert result.notification == (
        "Loaded summary, image, common name, scientific name/kingdom and population for “Tiger”."
    )

    full = DraftSpecies(
        scientific_name="a", common_name="b", total_population="1", kingdom="c",
        description="d", image="e",
    )
    result = af.autofill("tiger", full)
    assert result.filled == []
    assert "nothing new" in result.notification


def test_fill_blank_treats_whitespace_as_blank():
    d = DraftSpecies(kingdom="  ")
    filled = []
    assert af.fill_blank(d, "kingdom", "Animalia", filled)
    assert not af.fill_blank(d, "kingdom", "Plantae", filled)
    assert not af.fill_blank(d, "image", "   ", filled)
    assert d.kingdom == "Animalia" and filled == ["kingdom"]


def test_malformed_summary_payload_still_runs_infobox(monkeypatch):
    from db.services import wikipedia

    monkeypatch.setattr(af, "search_title", lambda q: "Tiger")
    monkeypatch.setattr(af, "fetch_wikitext", lambda title: "| population = 3,900")
    monkeypatch.setattr(
        wikipedia,
        "get_json",
        lambda url, params=None, **kw: {"extract": "A large cat.", "originalimage": "oops"},
    )

    result = af.autofill("tiger")
    assert result.draft.description == "A large cat."
    assert result.draft.image == ""
    assert result.draft.total_population == "3,900"
