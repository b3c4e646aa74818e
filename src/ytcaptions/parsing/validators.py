"""
Request validation for the caption tools.

Raw tool arguments are parsed into pydantic request models. Every field
error is collected and re-raised as a single ``ValidationError`` whose
``details["errors"]`` lists ``{"path", "message", "code"}`` entries.
"""

from __future__ import annotations

import re
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from ytcaptions.exceptions import ValidationError
from ytcaptions.models.captions import CaptionFormat

VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")
LANGUAGE_CODE_RE = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")

# An id token must be exactly 11 chars, not the prefix of a longer token
_ID = r"([A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"

_VIDEO_URL_PATTERNS = [
    re.compile(
        r"(?:youtube(?:-nocookie)?\.com/(?:watch\?v=|embed/|v/|shorts/|live/)|youtu\.be/)"
        + _ID,
        re.IGNORECASE,
    ),
    re.compile(r"youtube\.com/watch\?(?:[^#]*&)?v=" + _ID, re.IGNORECASE),
]

VIDEO_ID_EXAMPLES = [
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "https://youtu.be/dQw4w9WgXcQ",
    "dQw4w9WgXcQ",
]

LANGUAGE_ALIASES: dict[str, str] = {
    "jp": "ja",
    "japanese": "ja",
    "english": "en",
    "en-us": "en",
    "en-gb": "en",
}

DEFAULT_SEARCH_LIMIT = 10
MIN_SEARCH_LIMIT = 1
MAX_SEARCH_LIMIT = 50

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")

RequestT = TypeVar("RequestT", bound=BaseModel)


def parse_video_id(value: str) -> str | None:
    """Return the canonical video ID in ``value``, or None if there is none."""
    value = value.strip()
    if VIDEO_ID_RE.match(value):
        return value

    for pattern in _VIDEO_URL_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None


def extract_video_id(value: str) -> str:
    """Extract the canonical video ID from a bare ID or a video URL.

    Supports watch, short-link (youtu.be), embed, /v/, shorts and live URLs.

    Raises:
        ValidationError: If no 11-character video ID can be found
    """
    video_id = parse_video_id(value)
    if video_id is None:
        raise ValidationError(
            "Please provide a valid YouTube URL or video ID",
            details={"input": value, "examples": VIDEO_ID_EXAMPLES},
        )
    return video_id


def normalize_language_code(lang: str) -> str:
    """Normalize a language code: "EN_us" -> "en", "jp" -> "ja", "pt_br" -> "pt-BR"."""
    normalized = lang.strip().lower().replace("_", "-")
    normalized = LANGUAGE_ALIASES.get(normalized, normalized)

    primary, sep, region = normalized.partition("-")
    if sep:
        return f"{primary}-{region.upper()}"
    return primary


def sanitize_string(value: str) -> str:
    """Remove angle brackets and control characters, then trim."""
    value = value.replace("<", "").replace(">", "")
    return _CONTROL_CHARS_RE.sub("", value).strip()


def _check_video_id(value: str) -> str:
    video_id = parse_video_id(value)
    if video_id is None:
        raise PydanticCustomError(
            "invalid_video_id",
            "Please provide a valid YouTube URL or video ID",
        )
    return video_id


def _normalize_lang_input(value: Any) -> Any:
    if isinstance(value, str):
        return normalize_language_code(value)
    return value


def _check_language_code(value: str) -> str:
    if not LANGUAGE_CODE_RE.match(value):
        raise PydanticCustomError(
            "invalid_language",
            "Invalid language code (e.g., ja, en-US)",
        )
    return value


class _ToolRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class _VideoRequest(_ToolRequest):
    video_id: str

    @field_validator("video_id")
    @classmethod
    def check_video_id(cls, value: str) -> str:
        return _check_video_id(value)


class GetVideoInfoRequest(_VideoRequest):
    """Arguments of ``get_video_info``."""


class GetCaptionsListRequest(_VideoRequest):
    """Arguments of ``get_captions_list``."""


class DownloadCaptionsRequest(_VideoRequest):
    """Arguments of ``download_captions``."""

    lang: str
    format: CaptionFormat = CaptionFormat.RAW

    @field_validator("lang", mode="before")
    @classmethod
    def normalize_lang(cls, value: Any) -> Any:
        return _normalize_lang_input(value)

    @field_validator("lang")
    @classmethod
    def check_lang(cls, value: str) -> str:
        return _check_language_code(value)

    @field_validator("format", mode="before")
    @classmethod
    def check_format(cls, value: Any) -> Any:
        if value is None:
            return CaptionFormat.RAW
        if isinstance(value, str):
            value = value.strip().lower()
            if value not in {f.value for f in CaptionFormat}:
                raise PydanticCustomError(
                    "invalid_format",
                    "Format must be one of: raw, srt, vtt",
                )
        return value


class SearchVideosRequest(_ToolRequest):
    """Arguments of ``search_videos_with_captions``."""

    query: str
    lang: str | None = None
    limit: int = DEFAULT_SEARCH_LIMIT

    @field_validator("query", mode="before")
    @classmethod
    def sanitize_query(cls, value: Any) -> Any:
        if isinstance(value, str):
            return sanitize_string(value)
        return value

    @field_validator("query")
    @classmethod
    def require_query(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("empty_query", "Please enter a search query")
        return value

    @field_validator("lang", mode="before")
    @classmethod
    def normalize_lang(cls, value: Any) -> Any:
        return _normalize_lang_input(value)

    @field_validator("lang")
    @classmethod
    def check_lang(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _check_language_code(value)

    @field_validator("limit", mode="before")
    @classmethod
    def coerce_limit(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_SEARCH_LIMIT
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Limit must be an integer")
        return value

    @field_validator("limit")
    @classmethod
    def clamp_limit(cls, value: int) -> int:
        return max(MIN_SEARCH_LIMIT, min(MAX_SEARCH_LIMIT, value))


TOOL_REQUESTS: dict[str, type[BaseModel]] = {
    "get_video_info": GetVideoInfoRequest,
    "get_captions_list": GetCaptionsListRequest,
    "download_captions": DownloadCaptionsRequest,
    "search_videos_with_captions": SearchVideosRequest,
}


def validate_request(model: type[RequestT], data: Any) -> RequestT:
    """Validate raw tool arguments against a request model.

    Args:
        model: Request model class (e.g. DownloadCaptionsRequest)
        data: Raw arguments, normally a dict decoded from the tool call

    Returns:
        Validated request instance

    Raises:
        ValidationError: With one entry per violated constraint
    """
    try:
        return model.model_validate(data if data is not None else {})
    except pydantic.ValidationError as e:
        errors = [
            {
                "path": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
                "code": err["type"],
            }
            for err in e.errors()
        ]
        raise ValidationError(
            "Invalid input parameters", details={"errors": errors}
        ) from e
