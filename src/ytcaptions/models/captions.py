"""
Caption data model: segments, caption tracks with content, and the result
types produced by the caption transformer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class CaptionFormat(str, Enum):
    """Output format for downloaded captions."""

    RAW = "raw"
    SRT = "srt"
    VTT = "vtt"


@dataclass(frozen=True)
class CaptionSegment:
    """A single timed caption cue.

    Times are in seconds. Well-formedness (start >= 0, duration > 0,
    ordering) is not enforced here; see ``validate_captions``.
    """

    start: float
    duration: float
    text: str

    @property
    def end(self) -> float:
        return self.start + self.duration

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "start": self.start,
            "duration": self.duration,
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CaptionSegment:
        """Create from dictionary."""
        return cls(
            start=float(data["start"]),
            duration=float(data["duration"]),
            text=str(data.get("text", "")),
        )


@dataclass(frozen=True)
class CaptionsData:
    """Captions for one video in one language and output format."""

    video_id: str
    language: str
    format: CaptionFormat = CaptionFormat.RAW
    segments: tuple[CaptionSegment, ...] = ()
    formatted_content: str | None = None

    def with_formatted_content(self, content: str | None) -> CaptionsData:
        """Return a copy with ``formatted_content`` replaced."""
        return replace(self, formatted_content=content)

    def to_dict(self) -> dict:
        data = {
            "video_id": self.video_id,
            "language": self.language,
            "format": self.format.value,
            "segments": [s.to_dict() for s in self.segments],
        }
        if self.formatted_content is not None:
            data["formatted_content"] = self.formatted_content
        return data

    @classmethod
    def from_dict(cls, data: dict) -> CaptionsData:
        return cls(
            video_id=data["video_id"],
            language=data["language"],
            format=CaptionFormat(data.get("format", "raw")),
            segments=tuple(CaptionSegment.from_dict(s) for s in data.get("segments", [])),
            formatted_content=data.get("formatted_content"),
        )


@dataclass(frozen=True)
class SegmentMatch:
    """A segment matched by a text search, with its position in the source."""

    segment: CaptionSegment
    match_index: int

    def to_dict(self) -> dict:
        return {**self.segment.to_dict(), "match_index": self.match_index}


@dataclass(frozen=True)
class CaptionStatistics:
    """Aggregate counts over a segment sequence."""

    total_segments: int = 0
    total_duration: float = 0.0
    total_words: int = 0
    average_segment_duration: float = 0.0
    average_words_per_segment: float = 0.0

    def to_dict(self) -> dict:
        return {
            "total_segments": self.total_segments,
            "total_duration": self.total_duration,
            "total_words": self.total_words,
            "average_segment_duration": self.average_segment_duration,
            "average_words_per_segment": self.average_words_per_segment,
        }


@dataclass(frozen=True)
class CaptionValidationReport:
    """Result of a caption quality check. Issues are in segment order."""

    is_valid: bool
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "issues": list(self.issues)}
