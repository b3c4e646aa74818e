"""
Custom exceptions for ytcaptions.

Every error carries a machine-readable ``kind`` plus a payload (message,
structured details, optional suggestion). Callers dispatch on ``kind``;
the subclasses only exist to fill in the kind and the suggestion.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable error classification."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    VIDEO_NOT_FOUND = "VIDEO_NOT_FOUND"
    CAPTIONS_NOT_AVAILABLE = "CAPTIONS_NOT_AVAILABLE"
    ACCESS_DENIED = "ACCESS_DENIED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    NETWORK_ERROR = "NETWORK_ERROR"
    CACHE_ERROR = "CACHE_ERROR"
    SYSTEM_ERROR = "SYSTEM_ERROR"


class YtCaptionsError(Exception):
    """Base exception for all ytcaptions errors.

    Attributes:
        kind: Error classification
        message: Human-readable error message
        details: Additional structured information
        suggestion: Recommended remediation steps
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        suggestion: str = "",
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for MCP error responses."""
        result: dict[str, Any] = {
            "type": self.kind.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


class ValidationError(YtCaptionsError):
    """Malformed or missing input fields."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(
            ErrorKind.VALIDATION_ERROR,
            message,
            details=details,
            suggestion="Check the input parameters and try again.",
        )


class VideoNotFoundError(YtCaptionsError):
    """The requested video does not exist."""

    def __init__(
        self,
        video_id: str,
        message: str = "The requested video was not found",
        *,
        details: dict[str, Any] | None = None,
    ):
        details = {"video_id": video_id, **(details or {})}
        super().__init__(
            ErrorKind.VIDEO_NOT_FOUND,
            message,
            details=details,
            suggestion="Check the video ID or URL.",
        )
        self.video_id = video_id


class CaptionsNotAvailableError(YtCaptionsError):
    """The video has no captions (in the requested language)."""

    def __init__(
        self,
        video_id: str,
        language: str | None = None,
        message: str = "No captions are available for the requested video",
    ):
        details: dict[str, Any] = {"video_id": video_id}
        if language:
            details["language"] = language
        super().__init__(
            ErrorKind.CAPTIONS_NOT_AVAILABLE,
            message,
            details=details,
            suggestion="Check whether captions exist in another language.",
        )
        self.video_id = video_id
        self.language = language


class AccessDeniedError(YtCaptionsError):
    """Video is private, removed, or otherwise restricted."""

    def __init__(
        self,
        video_id: str,
        message: str = "The video cannot be accessed (private or removed)",
        *,
        details: dict[str, Any] | None = None,
    ):
        details = {"video_id": video_id, **(details or {})}
        super().__init__(
            ErrorKind.ACCESS_DENIED,
            message,
            details=details,
            suggestion="Make sure the video is public.",
        )
        self.video_id = video_id


class RateLimitError(YtCaptionsError):
    """Too many requests, rate limited by the video platform."""

    def __init__(
        self,
        message: str = "Request limit reached",
        *,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            ErrorKind.RATE_LIMIT_EXCEEDED,
            message,
            details=details,
            suggestion="Wait a few minutes before retrying.",
        )


class NetworkError(YtCaptionsError):
    """Network-related error (connection issues, timeouts, SSL errors)."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(
            ErrorKind.NETWORK_ERROR,
            message,
            details=details,
            suggestion="Check your internet connection and try again.",
        )


class CacheError(YtCaptionsError):
    """Error with a cache store operation."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(
            ErrorKind.CACHE_ERROR,
            message,
            details=details,
            suggestion="Clear the cache and retry.",
        )


class InternalError(YtCaptionsError):
    """Catch-all for unclassified failures."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(
            ErrorKind.SYSTEM_ERROR,
            message,
            details=details,
            suggestion="Wait a moment and try again.",
        )
