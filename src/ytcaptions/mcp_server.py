"""
ytcaptions MCP server - expose YouTube caption tools via Model Context Protocol.

Run as: ytcaptions-mcp (stdio transport)
"""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from ytcaptions.cache.store import CacheStore, LoggingCacheObserver
from ytcaptions.config import get_config
from ytcaptions.exceptions import InternalError, YtCaptionsError
from ytcaptions.operations.service import CaptionService
from ytcaptions.tools.yt_dlp import YtDlpClient
from ytcaptions.utils.formatting import format_bytes
from ytcaptions.utils.logging import configure_logging

# All logging goes to stderr so stdout stays clean for JSON-RPC
configure_logging()
logger = logging.getLogger(__name__)

mcp = FastMCP("ytcaptions")

_service: CaptionService | None = None


def get_service() -> CaptionService:
    """Get the process-wide CaptionService, building it on first use."""
    global _service
    if _service is None:
        config = get_config()
        cache = CacheStore(config.cache, observers=[LoggingCacheObserver()])
        cache.start()
        _service = CaptionService(YtDlpClient(timeout=config.client_timeout), cache)
        logger.info(f"Caption service ready (cache enabled={config.cache.enabled})")
    return _service


def set_service(service: CaptionService | None) -> None:
    """Replace the process-wide CaptionService (None resets it)."""
    global _service
    if _service is not None and _service is not service:
        _service.cache.close()
    _service = service


def error_response(error: Exception) -> str:
    """Serialize an exception as a tool error reply."""
    if not isinstance(error, YtCaptionsError):
        error = InternalError(str(error) or "Unknown error occurred")
    return json.dumps({"error": error.to_dict()}, indent=2)


async def _call(name: str, arguments: dict[str, Any]) -> str:
    try:
        result = await get_service().call_tool(name, arguments)
    except YtCaptionsError as e:
        logger.warning(f"{name} failed: [{e.kind.value}] {e.message}")
        return error_response(e)
    except Exception as e:
        logger.exception(f"Error in tool {name}")
        return error_response(e)
    return json.dumps(result, indent=2, ensure_ascii=False)


@mcp.tool()
async def get_video_info(video_id: str) -> str:
    """Get basic information of a YouTube video.

    Returns JSON with title, channel, duration, view count and the
    languages that have captions.

    Args:
        video_id: YouTube video ID or URL.
    """
    return await _call("get_video_info", {"video_id": video_id})


@mcp.tool()
async def get_captions_list(video_id: str) -> str:
    """Get list of available captions for a YouTube video.

    Args:
        video_id: YouTube video ID or URL.
    """
    return await _call("get_captions_list", {"video_id": video_id})


@mcp.tool()
async def download_captions(video_id: str, lang: str, format: str = "raw") -> str:
    """Download captions for a YouTube video.

    Returns JSON with the caption segments. For srt and vtt the rendered
    subtitle text is included as ``formatted_content``.

    Args:
        video_id: YouTube video ID or URL.
        lang: Language code (e.g., ja, en, en-US).
        format: Output format: raw, srt or vtt.
    """
    return await _call(
        "download_captions",
        {"video_id": video_id, "lang": lang, "format": format},
    )


@mcp.tool()
async def search_videos_with_captions(
    query: str,
    lang: str | None = None,
    limit: int = 10,
) -> str:
    """Search for videos with captions.

    Args:
        query: Search query.
        lang: Caption language filter (e.g., ja, en).
        limit: Maximum number of search results (1-50).
    """
    return await _call(
        "search_videos_with_captions",
        {"query": query, "lang": lang, "limit": limit},
    )


@mcp.tool()
async def get_cache_stats() -> str:
    """Get cache statistics: key count, hits, misses and approximate sizes."""
    try:
        cache = get_service().cache
        stats = cache.stats()
    except YtCaptionsError as e:
        return error_response(e)

    return json.dumps(
        {
            "enabled": cache.config.enabled,
            **stats.to_dict(),
            "key_size": format_bytes(stats.ksize),
            "value_size": format_bytes(stats.vsize),
        },
        indent=2,
    )


@mcp.tool()
async def clear_cache() -> str:
    """Remove every cached result."""
    try:
        cache = get_service().cache
        removed = cache.stats().keys
        cache.clear()
    except YtCaptionsError as e:
        return error_response(e)

    return json.dumps({"cleared": True, "keys_removed": removed}, indent=2)


def main():
    """Entry point for the ytcaptions-mcp command."""
    mcp.run()


if __name__ == "__main__":
    main()
