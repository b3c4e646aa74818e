"""
Data models for ytcaptions.

Dataclasses for caption segments, caption data and transformer results,
plus the video metadata returned by the platform client.
"""

from ytcaptions.models.captions import (
    CaptionFormat,
    CaptionsData,
    CaptionSegment,
    CaptionStatistics,
    CaptionValidationReport,
    SegmentMatch,
)
from ytcaptions.models.video import CaptionTrack, VideoInfo, VideoSearchResult

__all__ = [
    "CaptionFormat",
    "CaptionSegment",
    "CaptionsData",
    "CaptionStatistics",
    "CaptionValidationReport",
    "SegmentMatch",
    "CaptionTrack",
    "VideoInfo",
    "VideoSearchResult",
]
