from __future__ import annotations

from app.application.dto.videos import VideoOutput
from app.application.ports.videos_port import VideosPort
from app.domain.entities.video import Video


def build_video_output(video: Video) -> VideoOutput:
    return VideoOutput(
        id=video.id,
        title=video.title,
        youtube_url=video.youtube_url,
        youtube_id=video.youtube_id,
        description=video.description,
        thumbnail=video.thumbnail,
        created_at=video.created_at,
    )


class ListVideosUseCase:
    def __init__(self, *, videos_port: VideosPort):
        self._videos_port = videos_port

    def execute(self, *, user_id: str) -> list[VideoOutput]:
        videos = self._videos_port.list_videos_for_user(user_id=user_id)
        return [build_video_output(video) for video in videos]
