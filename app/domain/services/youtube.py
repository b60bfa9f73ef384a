from __future__ import annotations

import re
from dataclasses import dataclass


_YOUTUBE_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/v/([^&\n?#]+)"),
    re.compile(r"youtube\.com/watch\?.*v=([^&\n?#]+)"),
)


@dataclass(frozen=True)
class YoutubeMetadata:
    title: str
    description: str
    thumbnail: str


def extract_youtube_id(url: str) -> str | None:
    for pattern in _YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def build_youtube_metadata(youtube_id: str) -> YoutubeMetadata:
    # Placeholder metadata; no call to the YouTube Data API.
    return YoutubeMetadata(
        title=f"Video {youtube_id}",
        description=f"Description for video {youtube_id}",
        thumbnail=f"https://img.youtube.com/vi/{youtube_id}/maxresdefault.jpg",
    )
