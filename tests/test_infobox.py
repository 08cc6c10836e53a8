# tests/test_infobox.py
import pytest

from api.services.infobox import extract_population, population_from_line, strip_markup

TIGER_WIKITEXT = """{{Short description|Large cat}}
{{Speciesbox
| name = Tiger
| status = EN
| population_total = {{circa|3900}}
| genus = Panthera
}}
The '''tiger''' (''Panthera tigris'') is a large cat. About 5,574 live in India.
"""


@pytest.mark.parametrize(
    "line, expected",
    [
        ("| population_total = {{circa|3900}}", "3900"),
        ("| population = 3,900<ref>{{cite web|year=2015}}</ref>", "3,900"),
        ("|population=3,000–3,900 mature individuals", "3,000"),
        ("| pop_estimate = about [[Estimate|3 900]] adults", "3900"),
        ("| population = {{formatnum:12345}}", "12345"),
        ("| population = ~4,500. (2019)", "4,500"),
        ("| population = <small>est.</small> 250", "250"),
        ("| population = [https://example.org 2015 survey] unknown", None),
        ("| population = unknown", None),
    ],
)
def test_population_from_line(line, expected):
    assert population_from_line(line) == expected


def test_extract_population_uses_first_matching_line():
    assert extract_population(TIGER_WIKITEXT) == "3900"

    text = "| population = unknown\n| pop_estimate = 1,200\n"
    assert extract_population(text) is None


def test_extract_population_ignores_other_parameters():
    assert extract_population("| population_trend = 5\n| status = EN") is None
    assert extract_population("") is None
    assert extract_population(None) is None


def test_strip_markup_unwraps_nested_templates():
    assert strip_markup("{{nowrap|{{circa|3900}}}}").split() == ["3900"]
    assert strip_markup("[[Bengal tiger|tigers]] <br/>").split() == ["tigers"]


def test_line_finder_is_case_sensitive():
    assert extract_population("| Population = 5\n| population = 1,200") == "1,200"
    assert extract_population("| POPULATION_TOTAL = 5") is None
