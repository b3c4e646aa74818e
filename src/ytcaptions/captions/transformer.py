"""
Caption segment transformations.

Every function here is pure: it takes a sequence of CaptionSegment and
returns a new list (or a result object). Inputs are never modified.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ytcaptions.models.captions import (
    CaptionFormat,
    CaptionsData,
    CaptionSegment,
    CaptionStatistics,
    CaptionValidationReport,
    SegmentMatch,
)
from ytcaptions.utils.formatting import clean_caption_text, format_to_srt, format_to_vtt

DEFAULT_MAX_GAP = 1.0
DEFAULT_MIN_DURATION = 0.5

_WHITESPACE_RUN_RE = re.compile(r"\s+")
_NEWLINE_RUN_RE = re.compile(r"\n+")


def format_captions(data: CaptionsData) -> CaptionsData:
    """Render ``formatted_content`` for the data's format.

    SRT and VTT get serialized text; RAW gets None. Segments are carried
    over untouched.
    """
    if data.format == CaptionFormat.SRT:
        content = format_to_srt(data.segments)
    elif data.format == CaptionFormat.VTT:
        content = format_to_vtt(data.segments)
    else:
        content = None
    return data.with_formatted_content(content)


def merge_segments(
    segments: Sequence[CaptionSegment],
    max_gap: float = DEFAULT_MAX_GAP,
) -> list[CaptionSegment]:
    """Coalesce segments separated by at most ``max_gap`` seconds.

    The running segment is extended to the end of each merged segment and
    the texts are joined with a single space. A segment lying entirely
    inside the running one never shortens it.

    Example:
        >>> merge_segments([
        ...     CaptionSegment(0.0, 1.0, "hello"),
        ...     CaptionSegment(1.5, 1.0, "world"),
        ... ])
        [CaptionSegment(start=0.0, duration=2.5, text='hello world')]
    """
    if not segments:
        return []

    merged: list[CaptionSegment] = []
    current = segments[0]

    for nxt in segments[1:]:
        gap = nxt.start - current.end
        if gap <= max_gap:
            end = max(current.end, nxt.end)
            current = CaptionSegment(
                start=current.start,
                duration=end - current.start,
                text=f"{current.text} {nxt.text}",
            )
        else:
            merged.append(current)
            current = nxt

    merged.append(current)
    return merged


def filter_segments(
    segments: Sequence[CaptionSegment],
    min_duration: float = DEFAULT_MIN_DURATION,
) -> list[CaptionSegment]:
    """Drop segments shorter than ``min_duration`` or with blank text."""
    return [s for s in segments if s.duration >= min_duration and s.text.strip()]


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to one space and newline runs to one newline.

    Whitespace runs are collapsed first, so newlines never survive and the
    result is always a single line.
    """
    text = _WHITESPACE_RUN_RE.sub(" ", text)
    text = _NEWLINE_RUN_RE.sub("\n", text)
    return text.strip()


def adjust_timing(
    segments: Sequence[CaptionSegment],
    offset: float = 0.0,
) -> list[CaptionSegment]:
    """Shift every segment by ``offset`` seconds. Start times never go below 0."""
    return [
        CaptionSegment(start=max(0.0, s.start + offset), duration=s.duration, text=s.text)
        for s in segments
    ]


def get_statistics(segments: Sequence[CaptionSegment]) -> CaptionStatistics:
    """Count segments, seconds and words. Averages are per segment."""
    if not segments:
        return CaptionStatistics()

    total_duration = sum(s.duration for s in segments)
    total_words = sum(len(s.text.split()) for s in segments)
    count = len(segments)

    return CaptionStatistics(
        total_segments=count,
        total_duration=total_duration,
        total_words=total_words,
        average_segment_duration=total_duration / count,
        average_words_per_segment=total_words / count,
    )


def extract_time_range(
    segments: Sequence[CaptionSegment],
    start_time: float,
    end_time: float,
) -> list[CaptionSegment]:
    """Cut out the segments overlapping ``[start_time, end_time)``.

    Kept segments are clipped to the range and their start is made relative
    to ``start_time``. A segment lying fully inside the range keeps its
    original duration.
    """
    result: list[CaptionSegment] = []
    for s in segments:
        if not (s.start < end_time and s.end > start_time):
            continue

        new_start = max(s.start, start_time)
        new_end = min(s.end, end_time)
        if new_start == s.start and new_end == s.end:
            duration = s.duration
        else:
            duration = new_end - new_start

        result.append(
            CaptionSegment(start=new_start - start_time, duration=duration, text=s.text)
        )
    return result


def search_text(
    segments: Sequence[CaptionSegment],
    query: str,
    case_sensitive: bool = False,
) -> list[SegmentMatch]:
    """Find segments whose text contains ``query``.

    Returns:
        Matches in segment order, each with the segment's original index
    """
    needle = query if case_sensitive else query.casefold()
    matches = []
    for index, s in enumerate(segments):
        haystack = s.text if case_sensitive else s.text.casefold()
        if needle in haystack:
            matches.append(SegmentMatch(segment=s, match_index=index))
    return matches


def validate_captions(segments: Sequence[CaptionSegment]) -> CaptionValidationReport:
    """Check caption quality without changing anything.

    Reports, in order: an empty sequence, then per segment (1-based) a
    negative start, a non-positive duration, blank text, and overlap with
    the previous segment.
    """
    issues: list[str] = []

    if not segments:
        issues.append("No caption segments exist")

    for i, s in enumerate(segments):
        n = i + 1
        if s.start < 0:
            issues.append(f"Segment {n}: Start time is negative")
        if s.duration <= 0:
            issues.append(f"Segment {n}: Duration is zero or negative")
        if not s.text.strip():
            issues.append(f"Segment {n}: Text is empty")
        if i > 0 and s.start < segments[i - 1].end:
            issues.append(f"Segment {n}: Overlaps with previous segment")

    return CaptionValidationReport(is_valid=not issues, issues=issues)


def clean_segments(segments: Sequence[CaptionSegment]) -> list[CaptionSegment]:
    """Strip markup and sound annotations from texts; drop segments left blank."""
    cleaned = []
    for s in segments:
        text = clean_caption_text(s.text)
        if text:
            cleaned.append(CaptionSegment(start=s.start, duration=s.duration, text=text))
    return cleaned
