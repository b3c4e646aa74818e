"""
In-memory TTL caching for tool results.
"""

from ytcaptions.cache.keys import (
    CacheTTL,
    captions_data_key,
    captions_list_key,
    generate_key,
    search_key,
    video_info_key,
)
from ytcaptions.cache.store import (
    CacheConfig,
    CacheObserver,
    CacheStats,
    CacheStore,
    LoggingCacheObserver,
)

__all__ = [
    "CacheConfig",
    "CacheObserver",
    "CacheStats",
    "CacheStore",
    "CacheTTL",
    "LoggingCacheObserver",
    "captions_data_key",
    "captions_list_key",
    "generate_key",
    "search_key",
    "video_info_key",
]
