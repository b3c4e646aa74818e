"""
Cache key derivation and per-operation TTL policy.

Keys are namespaced by operation so one store can hold every tool's results:

    video_info:{video_id}
    captions_list:{video_id}
    captions:{video_id}:{lang}:{format}
    search:{base64(query)[:16]}:{lang or "all"}

The search key only keeps the first 16 characters of the base64-encoded
query, so queries sharing their first 12 bytes share a cache entry. The
``limit`` argument is not part of the key either.
"""

from __future__ import annotations

import base64
from enum import Enum, IntEnum

SEARCH_HASH_LENGTH = 16


class CacheTTL(IntEnum):
    """Time-to-live per operation, in seconds."""

    VIDEO_INFO = 3600
    CAPTIONS_LIST = 86400
    CAPTIONS_DATA = 86400
    SEARCH_RESULTS = 1800


def generate_key(prefix: str, *parts: str | int | Enum) -> str:
    """Join a namespace prefix and key parts with ':'."""
    return ":".join([prefix, *(str(p.value if isinstance(p, Enum) else p) for p in parts)])


def video_info_key(video_id: str) -> str:
    return generate_key("video_info", video_id)


def captions_list_key(video_id: str) -> str:
    return generate_key("captions_list", video_id)


def captions_data_key(video_id: str, lang: str, format: str) -> str:
    return generate_key("captions", video_id, lang, format)


def search_key(query: str, lang: str | None = None) -> str:
    query_hash = base64.b64encode(query.encode("utf-8")).decode("ascii")
    return generate_key("search", query_hash[:SEARCH_HASH_LENGTH], lang or "all")
