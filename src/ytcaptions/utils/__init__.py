"""
Utility functions for ytcaptions.
"""

from ytcaptions.utils.formatting import (
    clean_caption_text,
    format_srt_time,
    format_to_srt,
    format_to_vtt,
    format_vtt_time,
)
from ytcaptions.utils.logging import configure_logging, log_timed
from ytcaptions.utils.system import find_tool

__all__ = [
    "clean_caption_text",
    "format_srt_time",
    "format_vtt_time",
    "format_to_srt",
    "format_to_vtt",
    "configure_logging",
    "log_timed",
    "find_tool",
]
