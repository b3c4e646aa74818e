"""
ytcaptions - YouTube captions for MCP clients.

Exposes four tools over the Model Context Protocol:
1. Look up basic video information
2. List the caption tracks of a video
3. Download captions as raw segments, SRT or WebVTT
4. Search for videos that have captions
"""

# Caption transformation
from ytcaptions.captions import (
    extract_time_range,
    format_captions,
    merge_segments,
    search_text,
    validate_captions,
)

# Exceptions
from ytcaptions.exceptions import (
    AccessDeniedError,
    CacheError,
    CaptionsNotAvailableError,
    ErrorKind,
    InternalError,
    NetworkError,
    RateLimitError,
    ValidationError,
    VideoNotFoundError,
    YtCaptionsError,
)

# Models
from ytcaptions.models import CaptionFormat, CaptionsData, CaptionSegment

# Input parsing
from ytcaptions.parsing import extract_video_id, normalize_language_code

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Captions
    "CaptionFormat",
    "CaptionSegment",
    "CaptionsData",
    "extract_time_range",
    "format_captions",
    "merge_segments",
    "search_text",
    "validate_captions",
    # Parsing
    "extract_video_id",
    "normalize_language_code",
    # Exceptions
    "ErrorKind",
    "YtCaptionsError",
    "ValidationError",
    "VideoNotFoundError",
    "CaptionsNotAvailableError",
    "AccessDeniedError",
    "RateLimitError",
    "NetworkError",
    "CacheError",
    "InternalError",
]
