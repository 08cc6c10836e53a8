from typing import Optional
import re

# infobox parameters that carry a head count
POPULATION_KEYS = ("population", "population_total", "pop_estimate")

# line finder matches the lower-case keys only; the prefix strip is lenient
PARAM_RE = re.compile(r"\|\s*(?:" + "|".join(POPULATION_KEYS) + r")\s*=")
PARAM_STRIP_RE = re.compile(PARAM_RE.pattern, re.IGNORECASE)
REF_RE = re.compile(r"<ref[^>]*/>|<ref[^>]*>.*?</ref>", re.IGNORECASE | re.DOTALL)
TAG_RE = re.compile(r"<[^>]+>")
WIKILINK_RE = re.compile(r"\[\[(?:[^\]|]*\|)?([^\]]*)\]\]")
BRACKET_RE = re.compile(r"\[[^\]]*\]")
TEMPLATE_RE = re.compile(r"\{\{([^{}]*)\}\}")
DIGITS_RE = re.compile(r"\d[\d,.\s]*")


def _unwrap_template(m: re.Match) -> str:
    # {{circa|3900}} -> "3900", {{formatnum:3900}} -> "3900"; named args dropped
    parts = m.group(1).split("|")
    name, args = parts[0], parts[1:]
    if ":" in name:
        args = [name.split(":", 1)[1]] + args
    return " " + " ".join(a for a in args if "=" not in a) + " "


def strip_markup(line: str) -> str:
    """Reduce one wikitext line to plain text (footnotes and tags dropped, links and templates unwrapped)."""
    s = REF_RE.sub(" ", line)
    s = TAG_RE.sub(" ", s)
    s = WIKILINK_RE.sub(r"\1", s)
    s = BRACKET_RE.sub(" ", s)
    # unwrap innermost templates first until none are left
    while True:
        s, n = TEMPLATE_RE.subn(_unwrap_template, s)
        if n == 0:
            break
    return s.replace("{{", " ").replace("}}", " ")


def population_from_line(line: str) -> Optional[str]:
    """First digit run after the parameter name, separators kept, whitespace removed."""
    cleaned = PARAM_STRIP_RE.sub(" ", line, count=1)
    cleaned = strip_markup(cleaned)
    m = DIGITS_RE.search(cleaned)
    if not m:
        return None
    digits = re.sub(r"\s+", "", m.group(0)).rstrip(",.")
    return digits or None


def find_population_line(wikitext: str) -> Optional[str]:
    for line in wikitext.splitlines():
        if PARAM_RE.search(line):
            return line
    return None


def extract_population(wikitext: Optional[str]) -> Optional[str]:
    """
    Best-effort population estimate from page markup.

    Only the first line assigning one of POPULATION_KEYS is considered, and only
    its first number: "3,000–3,900" gives "3,000".
    """
    if not wikitext:
        return None
    line = find_population_line(wikitext)
    if line is None:
        return None
    return population_from_line(line)
