"""YouTube video source."""

from .youtube_client import YouTubeVideoSource, parse_iso_duration

__all__ = ["YouTubeVideoSource", "parse_iso_duration"]
