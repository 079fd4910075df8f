"""Small helpers shared by the CLI and the reporters."""
from __future__ import annotations

from datetime import datetime


def normalize_url(url: str) -> str:
    """Prefix ``https://`` when no http(s) scheme is given."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        return "https://" + url
    return url


def format_timestamp(iso: str) -> str:
    """Render an ISO-8601 timestamp in local time for people to read."""
    try:
        dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except ValueError:
        return iso
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def truncate(text: str, limit: int = 100) -> str:
    return text[:limit] + "..." if len(text) > limit else text
