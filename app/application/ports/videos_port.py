from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.domain.entities.video import Video


class VideosPort(Protocol):
    def list_videos_for_user(self, *, user_id: str) -> list[Video]:
        ...

    def get_video_by_youtube_id(self, *, youtube_id: str) -> Video | None:
        ...

    def create_video(
        self,
        *,
        video_id: str,
        user_id: str,
        title: str,
        youtube_url: str,
        youtube_id: str,
        description: str | None,
        thumbnail: str | None,
        created_at: datetime,
    ) -> Video:
        ...
