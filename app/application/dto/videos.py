from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AddVideoInput:
    user_id: str
    youtube_url: str | None


@dataclass(frozen=True)
class VideoOutput:
    id: str
    title: str
    youtube_url: str
    youtube_id: str
    description: str | None
    thumbnail: str | None
    created_at: datetime
