"""Tests for tool request validation."""

import pytest

from ytcaptions.exceptions import ErrorKind, ValidationError
from ytcaptions.models.captions import CaptionFormat
from ytcaptions.parsing.validators import (
    TOOL_REQUESTS,
    DownloadCaptionsRequest,
    GetCaptionsListRequest,
    GetVideoInfoRequest,
    SearchVideosRequest,
    extract_video_id,
    normalize_language_code,
    parse_video_id,
    sanitize_string,
    validate_request,
)

VIDEO_ID = "dQw4w9WgXcQ"


class TestExtractVideoId:
    """Tests for extract_video_id."""

    @pytest.mark.parametrize(
        "value",
        [
            VIDEO_ID,
            f"https://www.youtube.com/watch?v={VIDEO_ID}",
            f"https://youtube.com/watch?v={VIDEO_ID}&t=42s",
            f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}?t=10",
            f"https://www.youtube.com/embed/{VIDEO_ID}",
            f"https://www.youtube.com/v/{VIDEO_ID}",
            f"https://www.youtube.com/shorts/{VIDEO_ID}",
            f"https://www.youtube.com/live/{VIDEO_ID}",
            f"https://www.youtube-nocookie.com/embed/{VIDEO_ID}",
            f"  {VIDEO_ID}  ",
        ],
    )
    def test_extracts_id(self, value):
        """Bare IDs and every supported URL form yield the same ID."""
        assert extract_video_id(value) == VIDEO_ID

    def test_id_with_dash_and_underscore(self):
        """IDs may contain '-' and '_'."""
        assert extract_video_id("a-b_c-d_e-f") == "a-b_c-d_e-f"

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "short",
            "dQw4w9WgXcQQ",
            "https://example.com/watch?v=dQw4w9WgXcQ",
            f"https://www.youtube.com/watch?v={VIDEO_ID}X",
            "https://www.youtube.com/",
        ],
    )
    def test_rejects_invalid(self, value):
        """Anything without an exact 11-character ID is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            extract_video_id(value)
        assert exc_info.value.kind == ErrorKind.VALIDATION_ERROR
        assert exc_info.value.details["input"] == value
        assert exc_info.value.details["examples"]

    def test_parse_video_id_returns_none(self):
        """parse_video_id returns None instead of raising."""
        assert parse_video_id("not a video") is None


class TestNormalizeLanguageCode:
    """Tests for normalize_language_code."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("en", "en"),
            ("EN", "en"),
            (" ja ", "ja"),
            ("jp", "ja"),
            ("Japanese", "ja"),
            ("english", "en"),
            ("en-US", "en"),
            ("EN_us", "en"),
            ("en-gb", "en"),
            ("pt-br", "pt-BR"),
            ("zh_tw", "zh-TW"),
        ],
    )
    def test_normalizes(self, value, expected):
        assert normalize_language_code(value) == expected


class TestSanitizeString:
    """Tests for sanitize_string."""

    def test_removes_angle_brackets_and_trims(self):
        assert sanitize_string("  <b>python</b>  ") == "bpython/b"

    def test_removes_control_characters(self):
        assert sanitize_string("py\x00th\x1fon\x7f") == "python"


class TestVideoRequests:
    """Tests for the video_id based requests."""

    @pytest.mark.parametrize("model", [GetVideoInfoRequest, GetCaptionsListRequest])
    def test_url_is_normalized_to_id(self, model):
        request = validate_request(model, {"video_id": f"https://youtu.be/{VIDEO_ID}"})
        assert request.video_id == VIDEO_ID

    def test_missing_video_id(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(GetVideoInfoRequest, {})
        errors = exc_info.value.details["errors"]
        assert errors[0]["path"] == "video_id"
        assert errors[0]["code"] == "missing"

    def test_invalid_video_id_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(GetVideoInfoRequest, {"video_id": "nope"})
        error = exc_info.value.details["errors"][0]
        assert error["path"] == "video_id"
        assert error["message"] == "Please provide a valid YouTube URL or video ID"
        assert error["code"] == "invalid_video_id"

    def test_none_arguments(self):
        """A missing arguments object is treated as an empty one."""
        with pytest.raises(ValidationError):
            validate_request(GetVideoInfoRequest, None)

    def test_extra_fields_ignored(self):
        request = validate_request(
            GetVideoInfoRequest, {"video_id": VIDEO_ID, "unexpected": 1}
        )
        assert request.video_id == VIDEO_ID


class TestDownloadCaptionsRequest:
    """Tests for DownloadCaptionsRequest."""

    def test_defaults_to_raw(self):
        request = validate_request(
            DownloadCaptionsRequest, {"video_id": VIDEO_ID, "lang": "ja"}
        )
        assert request.format == CaptionFormat.RAW

    def test_null_format_is_raw(self):
        request = validate_request(
            DownloadCaptionsRequest, {"video_id": VIDEO_ID, "lang": "ja", "format": None}
        )
        assert request.format == CaptionFormat.RAW

    def test_format_case_insensitive(self):
        request = validate_request(
            DownloadCaptionsRequest, {"video_id": VIDEO_ID, "lang": "en", "format": "SRT"}
        )
        assert request.format == CaptionFormat.SRT

    def test_lang_normalized(self):
        request = validate_request(
            DownloadCaptionsRequest, {"video_id": VIDEO_ID, "lang": "EN_us"}
        )
        assert request.lang == "en"

    def test_invalid_format(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(
                DownloadCaptionsRequest,
                {"video_id": VIDEO_ID, "lang": "en", "format": "ass"},
            )
        error = exc_info.value.details["errors"][0]
        assert error["path"] == "format"
        assert error["message"] == "Format must be one of: raw, srt, vtt"

    @pytest.mark.parametrize("lang", ["e", "eng", "en-USA", "12", ""])
    def test_invalid_language(self, lang):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(DownloadCaptionsRequest, {"video_id": VIDEO_ID, "lang": lang})
        assert exc_info.value.details["errors"][0]["path"] == "lang"

    def test_collects_every_error(self):
        """All violated fields are reported at once."""
        with pytest.raises(ValidationError) as exc_info:
            validate_request(
                DownloadCaptionsRequest,
                {"video_id": "bad", "lang": "xyz", "format": "doc"},
            )
        paths = {e["path"] for e in exc_info.value.details["errors"]}
        assert paths == {"video_id", "lang", "format"}
        assert exc_info.value.message == "Invalid input parameters"


class TestSearchVideosRequest:
    """Tests for SearchVideosRequest."""

    def test_defaults(self):
        request = validate_request(SearchVideosRequest, {"query": "python"})
        assert request.query == "python"
        assert request.lang is None
        assert request.limit == 10

    def test_query_sanitized(self):
        request = validate_request(SearchVideosRequest, {"query": "  <python>\x00 "})
        assert request.query == "python"

    @pytest.mark.parametrize("query", ["", "   ", "<>"])
    def test_empty_query_rejected(self, query):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(SearchVideosRequest, {"query": query})
        error = exc_info.value.details["errors"][0]
        assert error["path"] == "query"
        assert error["message"] == "Please enter a search query"

    @pytest.mark.parametrize(
        ("limit", "expected"),
        [(None, 10), (1, 1), (50, 50), (0, 1), (-5, 1), (51, 50), (1000, 50)],
    )
    def test_limit_clamped(self, limit, expected):
        request = validate_request(SearchVideosRequest, {"query": "q", "limit": limit})
        assert request.limit == expected

    def test_bool_limit_rejected(self):
        with pytest.raises(ValidationError):
            validate_request(SearchVideosRequest, {"query": "q", "limit": True})

    def test_lang_optional_but_checked(self):
        request = validate_request(SearchVideosRequest, {"query": "q", "lang": "JP"})
        assert request.lang == "ja"
        with pytest.raises(ValidationError):
            validate_request(SearchVideosRequest, {"query": "q", "lang": "japanese!"})


class TestToolRequests:
    """Tests for the tool name -> request model table."""

    def test_every_tool_has_a_model(self):
        assert TOOL_REQUESTS == {
            "get_video_info": GetVideoInfoRequest,
            "get_captions_list": GetCaptionsListRequest,
            "download_captions": DownloadCaptionsRequest,
            "search_videos_with_captions": SearchVideosRequest,
        }

    def test_exported_from_package(self):
        from ytcaptions import parsing

        assert parsing.TOOL_REQUESTS is TOOL_REQUESTS
