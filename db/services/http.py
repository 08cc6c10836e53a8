# services/http.py
from __future__ import annotations
import os
from typing import Any, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

# (connect, read); unset means no timeout, matching plain requests
Timeout = Optional[Tuple[Optional[float], Optional[float]]]


def timeout_from_env() -> Timeout:
    connect = os.getenv("HTTP_CONNECT_TIMEOUT")
    read = os.getenv("HTTP_READ_TIMEOUT")
    if not connect and not read:
        return None
    return (float(connect) if connect else None, float(read) if read else None)


DEFAULT_TIMEOUT: Timeout = timeout_from_env()

# Wikimedia asks API clients to identify themselves.
HEADERS = {
    "User-Agent": os.getenv(
        "HTTP_USER_AGENT", "SpeciesCatalog/Autofill (species-catalog@example.org)"
    ),
    "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    "Accept-Encoding": "gzip, deflate",
}


def _retry(total: int, backoff: float) -> Retry:
    # total=0 disables retries; lookups are re-run by the user, not by us
    return Retry(
        total=total,
        connect=total,
        read=total,
        status=total,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET"}),
        respect_retry_after_header=True,
        raise_on_status=False,
    )


def make_session(total_retries: int = 0, backoff: float = 0.2) -> requests.Session:
    pool_conns = int(os.getenv("HTTP_POOL_CONNECTIONS", "16"))
    pool_size = int(os.getenv("HTTP_POOL_MAXSIZE", "16"))
    adapter = HTTPAdapter(
        max_retries=_retry(total_retries, backoff),
        pool_connections=pool_conns,
        pool_maxsize=pool_size,
    )
    s = requests.Session()
    s.headers.update(HEADERS)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    return s


# Global shared session (thread-safe for concurrent GETs)
SESSION = make_session()


def get(
    url: str, *, timeout: Timeout = DEFAULT_TIMEOUT, **kwargs
) -> requests.Response:
    """Wrapper so callers inherit default session + timeout."""
    return SESSION.get(url, timeout=timeout, **kwargs)


def get_json(url: str, params: dict | None = None, **kwargs) -> Any:
    """GET and decode JSON; raises requests.HTTPError on non-2xx and ValueError on bad JSON."""
    r = get(url, params=params, **kwargs)
    r.raise_for_status()
    return r.json()
