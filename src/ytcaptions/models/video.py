"""
Video metadata dataclasses returned by the platform client.
"""

from dataclasses import dataclass, field


@dataclass
class VideoInfo:
    """Basic information about a video.

    Attributes:
        video_id: Canonical 11-character video ID
        title: Video title
        channel: Channel/uploader name
        duration: Length in seconds (None if unknown, e.g. live streams)
        duration_string: Human-readable duration ("4:13", "1:02:03")
        view_count_string: Abbreviated view count ("1.2M")
        caption_languages: Language codes with uploaded or automatic captions
    """

    video_id: str
    title: str
    description: str = ""
    channel: str | None = None
    channel_id: str | None = None
    upload_date: str | None = None
    duration: float | None = None
    duration_string: str | None = None
    view_count: int | None = None
    view_count_string: str | None = None
    like_count: int | None = None
    thumbnail: str | None = None
    tags: list[str] = field(default_factory=list)
    has_captions: bool = False
    caption_languages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "video_id": self.video_id,
            "title": self.title,
            "description": self.description,
            "channel": self.channel,
            "channel_id": self.channel_id,
            "upload_date": self.upload_date,
            "duration": self.duration,
            "duration_string": self.duration_string,
            "view_count": self.view_count,
            "view_count_string": self.view_count_string,
            "like_count": self.like_count,
            "thumbnail": self.thumbnail,
            "tags": list(self.tags),
            "has_captions": self.has_captions,
            "caption_languages": list(self.caption_languages),
        }


@dataclass
class CaptionTrack:
    """One available caption track for a video."""

    language: str
    name: str = ""
    is_auto_generated: bool = False
    formats: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "name": self.name,
            "is_auto_generated": self.is_auto_generated,
            "formats": list(self.formats),
        }


@dataclass
class VideoSearchResult:
    """A search hit for a video that has captions."""

    video_id: str
    title: str
    url: str
    channel: str | None = None
    duration: float | None = None
    duration_string: str | None = None
    view_count: int | None = None
    caption_languages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "video_id": self.video_id,
            "title": self.title,
            "url": self.url,
            "channel": self.channel,
            "duration": self.duration,
            "duration_string": self.duration_string,
            "view_count": self.view_count,
            "caption_languages": list(self.caption_languages),
        }
