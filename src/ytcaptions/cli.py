#!/usr/bin/env python3
"""
ytcaptions CLI - Fetch YouTube video info and captions from the terminal.

Usage:
    ytcaptions info "https://youtube.com/watch?v=VIDEO_ID"
    ytcaptions tracks VIDEO_ID
    ytcaptions captions VIDEO_ID --lang ja --format srt
    ytcaptions search "python tutorial" --lang en --limit 5
    ytcaptions config
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from ytcaptions.cache.store import CacheStore
from ytcaptions.config import get_config
from ytcaptions.exceptions import YtCaptionsError
from ytcaptions.operations.service import CaptionService
from ytcaptions.tools.yt_dlp import YtDlpClient
from ytcaptions.utils.formatting import sanitize_filename
from ytcaptions.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _build_service() -> CaptionService:
    config = get_config()
    return CaptionService(YtDlpClient(timeout=config.client_timeout), CacheStore(config.cache))


def _write_captions(result: dict, output_dir: Path) -> Path:
    """Write downloaded captions into output_dir and return the file path."""
    fmt = result.get("format", "raw")
    ext = "json" if fmt == "raw" else fmt
    name = sanitize_filename(f"{result['video_id']}_{result['language']}") or "captions"
    path = output_dir / f"{name}.{ext}"

    output_dir.mkdir(parents=True, exist_ok=True)
    if fmt == "raw":
        path.write_text(json.dumps(result, indent=2, ensure_ascii=False), encoding="utf-8")
    else:
        path.write_text(result.get("formatted_content") or "", encoding="utf-8")
    return path


def _cmd_info(service: CaptionService, args) -> None:
    _print_json(asyncio.run(service.get_video_info({"video_id": args.video})))


def _cmd_tracks(service: CaptionService, args) -> None:
    _print_json(asyncio.run(service.get_captions_list({"video_id": args.video})))


def _cmd_captions(service: CaptionService, args) -> None:
    lang = args.lang or get_config().default_language
    result = asyncio.run(
        service.download_captions(
            {"video_id": args.video, "lang": lang, "format": args.format}
        )
    )
    if args.output:
        path = _write_captions(result, args.output)
        print(f"Saved: {path}")
    elif result.get("formatted_content") is not None:
        print(result["formatted_content"])
    else:
        _print_json(result)


def _cmd_search(service: CaptionService, args) -> None:
    _print_json(
        asyncio.run(
            service.search_videos_with_captions(
                {"query": args.query, "lang": args.lang, "limit": args.limit}
            )
        )
    )


def _cmd_config(args) -> None:
    """Show the resolved configuration."""
    config = get_config()
    _print_json(
        {
            "root_dir": str(config.root_dir),
            "source": config.source.value,
            "default_language": config.default_language,
            "client_timeout": config.client_timeout,
            "cache": {
                "enabled": config.cache.enabled,
                "default_ttl": config.cache.default_ttl,
                "max_keys": config.cache.max_keys,
                "check_period": config.cache.check_period,
            },
        }
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ytcaptions",
        description="Fetch YouTube video info and captions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s info "https://youtube.com/watch?v=VIDEO_ID"
    %(prog)s tracks VIDEO_ID
    %(prog)s captions VIDEO_ID --lang ja --format srt
    %(prog)s captions VIDEO_ID --format vtt -o ./subs
    %(prog)s search "python tutorial" --lang en --limit 5
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    info_parser = subparsers.add_parser("info", help="Show basic video information")
    info_parser.add_argument("video", help="Video ID or URL")

    tracks_parser = subparsers.add_parser("tracks", help="List available caption tracks")
    tracks_parser.add_argument("video", help="Video ID or URL")

    captions_parser = subparsers.add_parser("captions", help="Download captions")
    captions_parser.add_argument("video", help="Video ID or URL")
    captions_parser.add_argument(
        "--lang", default=None,
        help="Language code (default: configured default_language)",
    )
    captions_parser.add_argument(
        "--format", default="raw", choices=["raw", "srt", "vtt"],
        help="Output format (default: raw)",
    )
    captions_parser.add_argument("-o", "--output", type=Path, help="Output directory")

    search_parser = subparsers.add_parser("search", help="Search videos with captions")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument("--lang", default=None, help="Caption language filter")
    search_parser.add_argument(
        "--limit", type=int, default=10, help="Maximum results, 1-50 (default: 10)"
    )

    subparsers.add_parser("config", help="Show the resolved configuration")

    return parser


_COMMANDS = {
    "info": _cmd_info,
    "tracks": _cmd_tracks,
    "captions": _cmd_captions,
    "search": _cmd_search,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "config":
        _cmd_config(args)
        return 0

    command = _COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        command(_build_service(), args)
    except YtCaptionsError as e:
        _print_json({"error": e.to_dict()})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
