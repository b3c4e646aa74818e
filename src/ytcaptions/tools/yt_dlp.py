"""
yt-dlp platform client: video metadata, caption tracks, caption download
and caption-filtered search.
"""

from __future__ import annotations

import json
import logging
import re
import subprocess
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

import pysubs2
from pysubs2.exceptions import Pysubs2Error

from ytcaptions.captions.transformer import clean_segments
from ytcaptions.config.defaults import CLIENT_TIMEOUT
from ytcaptions.exceptions import (
    AccessDeniedError,
    CaptionsNotAvailableError,
    ErrorKind,
    InternalError,
    NetworkError,
    RateLimitError,
    VideoNotFoundError,
    YtCaptionsError,
)
from ytcaptions.models.captions import CaptionFormat, CaptionsData, CaptionSegment
from ytcaptions.models.video import CaptionTrack, VideoInfo, VideoSearchResult
from ytcaptions.tools.base import ToolResult, VideoTool
from ytcaptions.utils.formatting import (
    format_duration,
    format_number,
    truncate_text,
)
from ytcaptions.utils.logging import log_timed
from ytcaptions.utils.system import find_tool

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
SEARCH_URL = "https://www.youtube.com/results"

# "Subtitles/CC" search filter
CAPTIONS_SEARCH_FILTER = "EgIoAQ=="

# Tracks listed under "subtitles" that are not captions
_NON_CAPTION_TRACKS = {"live_chat"}

_SUBTITLE_EXTENSIONS = (".vtt", ".srt")
_TAG_RE = re.compile(r"<[^>]+>")
_STDERR_EXCERPT = 500


@dataclass
class YtDlpError:
    """Structured error information parsed from yt-dlp stderr.

    Attributes:
        kind: Error classification
        message: The main ERROR line from yt-dlp (or the whole stderr)
        stderr: Full stderr output for debugging
    """

    kind: ErrorKind
    message: str
    stderr: str


# Checked in order, first match wins. Rate limiting comes before the
# generic HTTP 403 so a 429 is never reported as an access problem.
_ERROR_PATTERNS: list[tuple[re.Pattern, ErrorKind]] = [
    (
        re.compile(r"HTTP Error 429|too many requests|rate.?limit", re.IGNORECASE),
        ErrorKind.RATE_LIMIT_EXCEEDED,
    ),
    (
        re.compile(
            r"private video|video is private|members.only|Sign in to confirm|"
            r"age.restricted|not available in your country|HTTP Error 403",
            re.IGNORECASE,
        ),
        ErrorKind.ACCESS_DENIED,
    ),
    (
        re.compile(
            r"Video unavailable|This video is unavailable|has been removed|"
            r"Incomplete YouTube ID|No video could be found|HTTP Error 404",
            re.IGNORECASE,
        ),
        ErrorKind.VIDEO_NOT_FOUND,
    ),
    (
        re.compile(r"There are no subtitles|no subtitles|no captions", re.IGNORECASE),
        ErrorKind.CAPTIONS_NOT_AVAILABLE,
    ),
    (
        re.compile(
            r"Unable to download|Connection reset|Connection refused|"
            r"timed out|Temporary failure in name resolution|"
            r"SSL.*error|certificate verify failed",
            re.IGNORECASE,
        ),
        ErrorKind.NETWORK_ERROR,
    ),
]


def classify_yt_dlp_error(stderr: str) -> YtDlpError:
    """Parse yt-dlp stderr output into structured error information.

    Args:
        stderr: The stderr output from a failed yt-dlp command

    Returns:
        YtDlpError with kind and main message. Unrecognized output is
        classified as SYSTEM_ERROR.
    """
    error_match = re.search(r"ERROR:\s*(.+?)(?:\n|$)", stderr)
    message = error_match.group(1).strip() if error_match else stderr.strip()

    for pattern, kind in _ERROR_PATTERNS:
        if pattern.search(stderr):
            return YtDlpError(kind=kind, message=message, stderr=stderr)

    return YtDlpError(kind=ErrorKind.SYSTEM_ERROR, message=message, stderr=stderr)


def yt_dlp_error_to_exception(
    error: YtDlpError,
    video_id: str | None = None,
    language: str | None = None,
) -> YtCaptionsError:
    """Convert a YtDlpError to the matching typed exception.

    Args:
        error: The parsed YtDlpError
        video_id: Video the failed command was about, if any
        language: Requested caption language, if any

    Returns:
        Exception whose kind matches ``error.kind``
    """
    details = {"reason": truncate_text(error.message, _STDERR_EXCERPT)}

    if error.kind == ErrorKind.RATE_LIMIT_EXCEEDED:
        return RateLimitError(details=details)
    if error.kind == ErrorKind.NETWORK_ERROR:
        return NetworkError("A network error occurred", details=details)

    if video_id is not None:
        if error.kind == ErrorKind.ACCESS_DENIED:
            return AccessDeniedError(video_id, details=details)
        if error.kind == ErrorKind.VIDEO_NOT_FOUND:
            return VideoNotFoundError(video_id, details=details)
        if error.kind == ErrorKind.CAPTIONS_NOT_AVAILABLE:
            return CaptionsNotAvailableError(video_id, language)

    return InternalError("yt-dlp failed", details=details)


def _upload_date(value: str | None) -> str | None:
    """YYYYMMDD -> YYYY-MM-DD."""
    if value and len(value) == 8 and value.isdigit():
        return f"{value[:4]}-{value[4:6]}-{value[6:]}"
    return value


class YtDlpClient(VideoTool):
    """Video platform client backed by the yt-dlp executable.

    Every public method blocks on a subprocess; callers on an event loop
    should run them with ``asyncio.to_thread``.
    """

    def __init__(self, timeout: int = CLIENT_TIMEOUT):
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "yt-dlp"

    def is_available(self) -> bool:
        """Check if yt-dlp is installed."""
        try:
            result = subprocess.run(
                [self.get_path(), "--version"],
                capture_output=True,
                timeout=5,
            )
        except (OSError, subprocess.TimeoutExpired):
            return False
        return result.returncode == 0

    def get_path(self) -> str:
        """Get path to yt-dlp executable."""
        return find_tool("yt-dlp")

    def _run(self, args: list[str]) -> ToolResult:
        """Run yt-dlp with given arguments.

        Args:
            args: Command arguments (without the yt-dlp executable)
        """
        cmd = [self.get_path(), *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return ToolResult.from_error(f"Timeout after {self.timeout}s", timed_out=True)
        except OSError as e:
            return ToolResult.from_error(str(e))

        return ToolResult(
            success=result.returncode == 0,
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
        )

    def _run_checked(
        self,
        args: list[str],
        video_id: str | None = None,
        language: str | None = None,
    ) -> ToolResult:
        """Run yt-dlp and raise a typed exception when it fails."""
        result = self._run(args)
        if result.success:
            return result

        if result.timed_out:
            raise NetworkError(
                "The request timed out",
                details={"timeout": self.timeout},
            )
        if result.error is not None:
            raise InternalError(
                f"Could not run {self.name}",
                details={"reason": result.error},
            )

        error = classify_yt_dlp_error(result.stderr or "")
        logger.warning(f"{self.name} failed ({error.kind.value}): {error.message}")
        raise yt_dlp_error_to_exception(error, video_id=video_id, language=language)

    def _fetch_metadata(self, video_id: str) -> dict[str, Any]:
        """Fetch the full metadata JSON for a video."""
        result = self._run_checked(
            [
                "--dump-json",
                "--skip-download",
                "--no-playlist",
                "--no-warnings",
                WATCH_URL.format(video_id=video_id),
            ],
            video_id=video_id,
        )
        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise InternalError(
                "Invalid metadata response from yt-dlp",
                details={"video_id": video_id, "reason": str(e)},
            ) from e

    @staticmethod
    def _tracks_from_metadata(meta: dict[str, Any]) -> list[CaptionTrack]:
        tracks = []
        for key, auto in (("subtitles", False), ("automatic_captions", True)):
            for lang, formats in (meta.get(key) or {}).items():
                if lang in _NON_CAPTION_TRACKS:
                    continue
                formats = formats or []
                name = next((f.get("name") for f in formats if f.get("name")), lang)
                tracks.append(
                    CaptionTrack(
                        language=lang,
                        name=name,
                        is_auto_generated=auto,
                        formats=[f["ext"] for f in formats if f.get("ext")],
                    )
                )
        return tracks

    def get_video_info(self, video_id: str) -> VideoInfo:
        """Fetch basic information about a video.

        Raises:
            VideoNotFoundError, AccessDeniedError, NetworkError, RateLimitError
        """
        start = time.time()
        meta = self._fetch_metadata(video_id)
        languages = sorted({t.language for t in self._tracks_from_metadata(meta)})
        duration = meta.get("duration")
        view_count = meta.get("view_count")

        info = VideoInfo(
            video_id=meta.get("id") or video_id,
            title=meta.get("title") or "",
            description=meta.get("description") or "",
            channel=meta.get("channel") or meta.get("uploader"),
            channel_id=meta.get("channel_id"),
            upload_date=_upload_date(meta.get("upload_date")),
            duration=duration,
            duration_string=format_duration(duration),
            view_count=view_count,
            view_count_string=format_number(view_count),
            like_count=meta.get("like_count"),
            thumbnail=meta.get("thumbnail"),
            tags=list(meta.get("tags") or []),
            has_captions=bool(languages),
            caption_languages=languages,
        )
        log_timed(f"Fetched video info for {video_id}", start)
        return info

    def get_captions_list(self, video_id: str) -> list[CaptionTrack]:
        """List uploaded tracks first, then automatic ones."""
        start = time.time()
        tracks = self._tracks_from_metadata(self._fetch_metadata(video_id))
        log_timed(f"Found {len(tracks)} caption tracks for {video_id}", start)
        return tracks

    def download_captions(
        self,
        video_id: str,
        lang: str,
        format: CaptionFormat | str = CaptionFormat.RAW,
    ) -> CaptionsData:
        """Download one caption track and parse it into segments.

        The result carries the requested format but no formatted content;
        rendering to SRT/VTT is left to the caller.

        Raises:
            CaptionsNotAvailableError: If there is no track for ``lang``
        """
        start = time.time()
        with tempfile.TemporaryDirectory(prefix="ytcaptions-") as tmp:
            output_dir = Path(tmp)
            self._run_checked(
                [
                    "--write-subs",
                    "--write-auto-subs",
                    "--sub-langs",
                    lang,
                    "--sub-format",
                    "vtt/srt/best",
                    "--skip-download",
                    "--no-playlist",
                    "--no-warnings",
                    "-o",
                    str(output_dir / "%(id)s.%(ext)s"),
                    WATCH_URL.format(video_id=video_id),
                ],
                video_id=video_id,
                language=lang,
            )

            sub_file = self._find_subtitle_file(output_dir)
            if sub_file is None:
                raise CaptionsNotAvailableError(video_id, lang)
            segments = self._parse_subtitle_file(sub_file, video_id)

        if not segments:
            raise CaptionsNotAvailableError(video_id, lang)

        log_timed(f"Downloaded {len(segments)} caption segments for {video_id}", start)
        return CaptionsData(
            video_id=video_id,
            language=lang,
            format=CaptionFormat(format),
            segments=tuple(segments),
        )

    @staticmethod
    def _find_subtitle_file(output_dir: Path) -> Path | None:
        files = sorted(p for p in output_dir.iterdir() if p.is_file())
        for ext in _SUBTITLE_EXTENSIONS:
            for path in files:
                if path.suffix == ext:
                    return path
        return files[0] if files else None

    @staticmethod
    def _parse_subtitle_file(path: Path, video_id: str) -> list[CaptionSegment]:
        """Parse a subtitle file with pysubs2.

        Cue texts go through ``clean_segments``; consecutive cues with
        identical text (rolling automatic captions) are folded into one
        segment.
        """
        try:
            subs = pysubs2.load(str(path), encoding="utf-8")
        except (OSError, UnicodeDecodeError, Pysubs2Error) as e:
            raise InternalError(
                "Failed to parse caption file",
                details={"video_id": video_id, "reason": str(e)},
            ) from e

        cues = [
            CaptionSegment(
                start=event.start / 1000,
                duration=(event.end - event.start) / 1000,
                text=_TAG_RE.sub("", event.plaintext),
            )
            for event in subs
            if not event.is_comment
        ]

        segments: list[CaptionSegment] = []
        for cue in clean_segments(cues):
            if segments and segments[-1].text == cue.text:
                prev = segments[-1]
                segments[-1] = CaptionSegment(
                    start=prev.start,
                    duration=max(prev.end, cue.end) - prev.start,
                    text=cue.text,
                )
                continue
            segments.append(cue)
        return segments

    def search_videos_with_captions(
        self,
        query: str,
        lang: str | None = None,
        limit: int = 10,
    ) -> list[VideoSearchResult]:
        """Search for videos that have captions.

        When ``lang`` is given, each hit's track list is fetched and only
        videos with a track in that language (or a regional variant of it)
        are kept; hits whose track list cannot be fetched are skipped.
        """
        start = time.time()
        url = f"{SEARCH_URL}?{urlencode({'search_query': query, 'sp': CAPTIONS_SEARCH_FILTER})}"
        result = self._run_checked(
            [
                "--flat-playlist",
                "--dump-single-json",
                "--playlist-end",
                str(limit),
                "--no-warnings",
                url,
            ]
        )
        try:
            entries = json.loads(result.stdout).get("entries") or []
        except (json.JSONDecodeError, AttributeError) as e:
            raise InternalError(
                "Invalid search response from yt-dlp",
                details={"query": query, "reason": str(e)},
            ) from e

        results = []
        for entry in entries[:limit]:
            video_id = entry.get("id")
            if not video_id:
                continue

            languages: list[str] = []
            if lang:
                try:
                    tracks = self.get_captions_list(video_id)
                except YtCaptionsError as e:
                    logger.warning(f"Skipping {video_id}: {e.message}")
                    continue
                languages = sorted({t.language for t in tracks})
                if not any(code == lang or code.split("-")[0] == lang for code in languages):
                    continue

            duration = entry.get("duration")
            results.append(
                VideoSearchResult(
                    video_id=video_id,
                    title=entry.get("title") or "",
                    url=entry.get("url") or WATCH_URL.format(video_id=video_id),
                    channel=entry.get("channel") or entry.get("uploader"),
                    duration=duration,
                    duration_string=format_duration(duration),
                    view_count=entry.get("view_count"),
                    caption_languages=languages,
                )
            )

        log_timed(f"Search returned {len(results)} videos for {query!r}", start)
        return results
