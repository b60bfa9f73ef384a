from __future__ import annotations

from uuid import uuid4

from app.application.dto.videos import AddVideoInput, VideoOutput
from app.application.ports.videos_port import VideosPort
from app.domain.exceptions import InvalidInputError, InvalidVideoUrlError, VideoAlreadyExistsError
from app.domain.services.youtube import build_youtube_metadata, extract_youtube_id

from .common import utcnow
from .list_videos import build_video_output


class AddVideoUseCase:
    def __init__(self, *, videos_port: VideosPort):
        self._videos_port = videos_port

    def execute(self, command: AddVideoInput) -> VideoOutput:
        youtube_url = (command.youtube_url or "").strip()
        if not youtube_url:
            raise InvalidInputError("YouTube URL is required.")

        youtube_id = extract_youtube_id(youtube_url)
        if not youtube_id:
            raise InvalidVideoUrlError("Invalid YouTube URL.")

        if self._videos_port.get_video_by_youtube_id(youtube_id=youtube_id) is not None:
            raise VideoAlreadyExistsError("Video already exists in the library.")

        metadata = build_youtube_metadata(youtube_id)
        video = self._videos_port.create_video(
            video_id=str(uuid4()),
            user_id=command.user_id,
            title=metadata.title,
            youtube_url=youtube_url,
            youtube_id=youtube_id,
            description=metadata.description,
            thumbnail=metadata.thumbnail,
            created_at=utcnow(),
        )
        return build_video_output(video)
