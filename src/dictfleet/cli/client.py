"""
HTTP client for a running dictfleet front door.
"""

import httpx

BASE_URL = "http://127.0.0.1:3000/api"


def get_info(base_url: str = BASE_URL) -> list[dict]:
    r = httpx.post(f"{base_url}/info", timeout=30)
    r.raise_for_status()
    return r.json()["data"]


def word_query(term: str, base_url: str = BASE_URL) -> list[str]:
    r = httpx.get(f"{base_url}/wq", params={"q": term}, timeout=30)
    r.raise_for_status()
    return r.json()["suggestions"]
