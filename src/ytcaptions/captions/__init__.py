"""
Caption segment transformation and formatting.
"""

from ytcaptions.captions.transformer import (
    adjust_timing,
    clean_segments,
    extract_time_range,
    filter_segments,
    format_captions,
    get_statistics,
    merge_segments,
    normalize_text,
    search_text,
    validate_captions,
)

__all__ = [
    "adjust_timing",
    "clean_segments",
    "extract_time_range",
    "filter_segments",
    "format_captions",
    "get_statistics",
    "merge_segments",
    "normalize_text",
    "search_text",
    "validate_captions",
]
