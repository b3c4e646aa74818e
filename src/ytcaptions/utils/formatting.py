"""
Text formatting utilities: subtitle timestamps, SRT/VTT serialization and
human-readable display helpers.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ytcaptions.models.captions import CaptionSegment

VTT_HEADER = "WEBVTT\n\n"

_ANNOTATION_RE = re.compile(r"\[.*?\]|\(.*?\)")
_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_FILENAME_RE = re.compile(r'[<>:"/\\|?*]')


def _split_timestamp(seconds: float) -> tuple[int, int, int, int]:
    """Split seconds into (hours, minutes, seconds, milliseconds)."""
    total_ms = max(0, round(seconds * 1000))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, millis = divmod(rem, 1000)
    return hours, minutes, secs, millis


def format_srt_time(seconds: float) -> str:
    """Format seconds as SRT timestamp (HH:MM:SS,mmm).

    Args:
        seconds: Time in seconds

    Returns:
        Formatted timestamp string
    """
    hours, minutes, secs, millis = _split_timestamp(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def format_vtt_time(seconds: float) -> str:
    """Format seconds as WebVTT timestamp (HH:MM:SS.mmm)."""
    hours, minutes, secs, millis = _split_timestamp(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def format_to_srt(segments: Iterable[CaptionSegment]) -> str:
    """Serialize segments as SubRip text.

    Each cue is ``index``, ``start --> end`` and the text, cues separated
    by a blank line. Indices start at 1.
    """
    cues = [
        f"{i}\n{format_srt_time(seg.start)} --> "
        f"{format_srt_time(seg.start + seg.duration)}\n{seg.text}\n"
        for i, seg in enumerate(segments, start=1)
    ]
    return "\n".join(cues)


def format_to_vtt(segments: Iterable[CaptionSegment]) -> str:
    """Serialize segments as WebVTT text (header, then unnumbered cues)."""
    cues = [
        f"{format_vtt_time(seg.start)} --> "
        f"{format_vtt_time(seg.start + seg.duration)}\n{seg.text}\n"
        for seg in segments
    ]
    return VTT_HEADER + "\n".join(cues)


def format_duration(seconds: float | None) -> str | None:
    """Format seconds as human-readable duration string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string (e.g., "1:30" or "1:05:30"), or None
    """
    if seconds is None:
        return None

    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_number(num: int | None) -> str | None:
    """Abbreviate a count: 1234 -> "1.2K", 5_600_000 -> "5.6M"."""
    if num is None:
        return None
    for threshold, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if num >= threshold:
            return f"{num / threshold:.1f}{suffix}"
    return str(num)


def truncate_text(text: str, max_length: int) -> str:
    """Truncate text to max_length characters, ending with '...' when cut."""
    if len(text) <= max_length:
        return text
    return text[: max(0, max_length - 3)] + "..."


def decode_html_entities(text: str) -> str:
    """Decode HTML character references (&amp;, &#39;, ...)."""
    return html.unescape(text)


def clean_caption_text(text: str) -> str:
    """Strip sound annotations like [Music] or (laughs) and collapse whitespace."""
    text = decode_html_entities(text)
    text = _ANNOTATION_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def sanitize_filename(filename: str) -> str:
    """Make a string safe to use as a file name (max 100 chars)."""
    name = _UNSAFE_FILENAME_RE.sub("_", filename)
    name = re.sub(r"\s+", "_", name)
    name = re.sub(r"_{2,}", "_", name)
    name = name.strip("_")
    return name[:100]


def format_bytes(num_bytes: int) -> str:
    """Format a byte count as "1.5 KB", "2 MB", ..."""
    if num_bytes <= 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB"]
    i = min((num_bytes.bit_length() - 1) // 10, len(units) - 1)
    value = round(num_bytes / (1024**i), 2)
    return f"{value:g} {units[i]}"
