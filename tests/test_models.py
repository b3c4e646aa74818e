"""Tests for caption and video models."""

from ytcaptions.models.captions import (
    CaptionFormat,
    CaptionsData,
    CaptionSegment,
    CaptionStatistics,
    CaptionValidationReport,
)
from ytcaptions.models.video import CaptionTrack, VideoInfo, VideoSearchResult


class TestCaptionSegment:
    """Tests for CaptionSegment."""

    def test_end(self):
        assert CaptionSegment(start=1.5, duration=2, text="x").end == 3.5

    def test_from_dict_coerces_numbers(self):
        segment = CaptionSegment.from_dict({"start": "1", "duration": 2, "text": "hi"})
        assert segment == CaptionSegment(start=1.0, duration=2.0, text="hi")


class TestCaptionsData:
    """Tests for CaptionsData."""

    def test_dict_round_trip_keeps_formatted_content(self):
        data = CaptionsData(
            video_id="dQw4w9WgXcQ",
            language="en",
            format=CaptionFormat.SRT,
            segments=(CaptionSegment(0, 1, "a"),),
            formatted_content="1\n...",
        )
        assert CaptionsData.from_dict(data.to_dict()) == data

    def test_with_formatted_content_returns_copy(self):
        data = CaptionsData(video_id="dQw4w9WgXcQ", language="en")
        updated = data.with_formatted_content("WEBVTT\n\n")
        assert updated.formatted_content == "WEBVTT\n\n"
        assert data.formatted_content is None


class TestResultModels:
    """Tests for the remaining to_dict methods."""

    def test_statistics_defaults(self):
        assert CaptionStatistics().to_dict()["total_segments"] == 0

    def test_validation_report(self):
        report = CaptionValidationReport(is_valid=False, issues=["No caption segments exist"])
        assert report.to_dict() == {"is_valid": False, "issues": ["No caption segments exist"]}

    def test_video_models(self):
        info = VideoInfo(video_id="dQw4w9WgXcQ", title="T", tags=["a"])
        assert info.to_dict()["tags"] == ["a"]
        assert CaptionTrack(language="en").to_dict()["formats"] == []
        result = VideoSearchResult(video_id="dQw4w9WgXcQ", title="T", url="u")
        assert result.to_dict()["caption_languages"] == []
