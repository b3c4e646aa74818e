"""
External tool wrappers for ytcaptions.

Provides the yt-dlp backed video platform client.
"""

from ytcaptions.tools.base import ToolResult, VideoTool
from ytcaptions.tools.yt_dlp import (
    YtDlpClient,
    YtDlpError,
    classify_yt_dlp_error,
    yt_dlp_error_to_exception,
)

__all__ = [
    "VideoTool",
    "ToolResult",
    "YtDlpClient",
    "YtDlpError",
    "classify_yt_dlp_error",
    "yt_dlp_error_to_exception",
]
