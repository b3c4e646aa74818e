"""
Input parsing and request validation.
"""

from ytcaptions.parsing.validators import (
    TOOL_REQUESTS,
    DownloadCaptionsRequest,
    GetCaptionsListRequest,
    GetVideoInfoRequest,
    SearchVideosRequest,
    extract_video_id,
    normalize_language_code,
    sanitize_string,
    validate_request,
)

__all__ = [
    "TOOL_REQUESTS",
    "GetVideoInfoRequest",
    "GetCaptionsListRequest",
    "DownloadCaptionsRequest",
    "SearchVideosRequest",
    "extract_video_id",
    "normalize_language_code",
    "sanitize_string",
    "validate_request",
]
