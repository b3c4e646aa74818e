"""
Caption service: the four caption tools wired to validation, the cache
store and the platform client.

Every operation follows the same flow:

    validate -> cache key -> cache.get -> (miss) client call in a worker
    thread -> cache.set with the operation's TTL -> plain JSON-safe result

Example:
    >>> service = CaptionService(YtDlpClient(), CacheStore())
    >>> info = await service.get_video_info({"video_id": "dQw4w9WgXcQ"})
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from ytcaptions.cache.keys import (
    CacheTTL,
    captions_data_key,
    captions_list_key,
    search_key,
    video_info_key,
)
from ytcaptions.cache.store import CacheStore
from ytcaptions.captions.transformer import format_captions
from ytcaptions.exceptions import ValidationError
from ytcaptions.parsing.validators import (
    TOOL_REQUESTS,
    DownloadCaptionsRequest,
    GetCaptionsListRequest,
    GetVideoInfoRequest,
    SearchVideosRequest,
    validate_request,
)
from ytcaptions.tools.base import VideoTool

logger = logging.getLogger(__name__)


class CaptionService:
    """Run caption tool calls against a platform client with caching.

    Args:
        client: Platform client (normally a YtDlpClient). Its methods block
            and are run with ``asyncio.to_thread``.
        cache: Cache store shared by all operations.
    """

    def __init__(self, client: VideoTool, cache: CacheStore):
        self.client = client
        self.cache = cache
        self._handlers: dict[str, Callable[[Any], Any]] = {
            name: getattr(self, name) for name in TOOL_REQUESTS
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def _cached(self, key: str) -> Any | None:
        value = self.cache.get(key)
        if value is not None:
            logger.debug(f"Cache hit: {key}")
        else:
            logger.debug(f"Cache miss: {key}")
        return value

    async def get_video_info(self, arguments: Any) -> dict:
        """Basic information about a video."""
        request = validate_request(GetVideoInfoRequest, arguments)
        key = video_info_key(request.video_id)

        cached = self._cached(key)
        if cached is not None:
            return cached

        info = await asyncio.to_thread(self.client.get_video_info, request.video_id)
        result = info.to_dict()
        self.cache.set(key, result, CacheTTL.VIDEO_INFO)
        return result

    async def get_captions_list(self, arguments: Any) -> list[dict]:
        """Caption tracks available for a video."""
        request = validate_request(GetCaptionsListRequest, arguments)
        key = captions_list_key(request.video_id)

        cached = self._cached(key)
        if cached is not None:
            return cached

        tracks = await asyncio.to_thread(self.client.get_captions_list, request.video_id)
        result = [track.to_dict() for track in tracks]
        self.cache.set(key, result, CacheTTL.CAPTIONS_LIST)
        return result

    async def download_captions(self, arguments: Any) -> dict:
        """Caption segments for one language, rendered in the requested format."""
        request = validate_request(DownloadCaptionsRequest, arguments)
        key = captions_data_key(request.video_id, request.lang, request.format)

        cached = self._cached(key)
        if cached is not None:
            return cached

        data = await asyncio.to_thread(
            self.client.download_captions,
            request.video_id,
            request.lang,
            request.format,
        )
        result = format_captions(data).to_dict()
        self.cache.set(key, result, CacheTTL.CAPTIONS_DATA)
        return result

    async def search_videos_with_captions(self, arguments: Any) -> list[dict]:
        """Search for videos that have captions, optionally in one language."""
        request = validate_request(SearchVideosRequest, arguments)
        key = search_key(request.query, request.lang)

        cached = self._cached(key)
        if cached is not None:
            return cached

        videos = await asyncio.to_thread(
            self.client.search_videos_with_captions,
            request.query,
            request.lang,
            request.limit,
        )
        result = [video.to_dict() for video in videos]
        self.cache.set(key, result, CacheTTL.SEARCH_RESULTS)
        return result

    async def call_tool(self, name: str, arguments: Any) -> Any:
        """Dispatch a tool call by name.

        Raises:
            ValidationError: If ``name`` is not one of the caption tools
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise ValidationError(
                f"Unknown tool: {name}",
                details={"tool": name, "available": self.tool_names},
            )
        return await handler(arguments)
