import hashlib
import json
import os
import sys
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Optional, Union

import requests

from . import __version__
from .errors import FetchError

CACHE_DIR = Path(os.getenv("CHESSSTATS_CACHE_DIR", "cache"))
USER_AGENT = os.getenv("CHESSSTATS_USER_AGENT", f"chessstats/{__version__}")
FETCH_TIMEOUT_S = float(os.getenv("CHESSSTATS_FETCH_TIMEOUT_S", "30"))
QUIET = bool(os.getenv("CHESSSTATS_QUIET"))


def log(msg: str):
    if QUIET:
        return
    print(f"[chessstats] {msg}", file=sys.stderr, flush=True)


def percent(count: int, total_count: int) -> str:
    """
    Format count/total as a percentage with one decimal, dropping a trailing ".0".
    Halves round up: percent(1, 3) == "33.3%", percent(1, 2) == "50%", percent(1, 400) == "0.3%".
    """
    if not total_count:
        return "0%"
    res = str((Decimal(count * 100) / Decimal(total_count)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    if res.endswith(".0"):
        res = res[:-2]
    return f"{res}%"


class FetchResponse:
    def __init__(self, status: int, text: str):
        self.status = status
        self.text = text

    def json(self) -> Any:
        return json.loads(self.text)


def cache_file_for(url: str, cache_dir: Optional[Union[str, Path]] = None) -> Path:
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()
    return Path(cache_dir or CACHE_DIR) / f"{digest}.json"


def fetch(url: str) -> FetchResponse:
    r = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=FETCH_TIMEOUT_S)
    if r.status_code != 200:
        raise FetchError(url, r.status_code)
    return FetchResponse(r.status_code, r.text)


def cached_fetch(url: str, cache_dir: Optional[Union[str, Path]] = None) -> FetchResponse:
    """
    Like fetch(), but keeps every successful body on disk keyed by sha256(url).
    There is no expiry: chess.com archives of finished months do not change.
    """
    cache_file = cache_file_for(url, cache_dir)
    if cache_file.exists():
        log(f"cache hit {url}")
        return FetchResponse(200, cache_file.read_text(encoding="utf-8"))

    log(f"cache miss {url}")
    response = fetch(url)
    if response.text:
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(response.text, encoding="utf-8")
    return response
