from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_add_video_use_case, get_list_videos_use_case, require_active_subscription
from app.api.schemas.videos import AddVideoRequest, AddVideoResponse, VideoListResponse, VideoResponse
from app.application.dto.videos import AddVideoInput, VideoOutput
from app.application.use_cases.add_video import AddVideoUseCase
from app.application.use_cases.list_videos import ListVideosUseCase
from app.domain.entities.user import User
from app.domain.exceptions import InvalidInputError, InvalidVideoUrlError, VideoAlreadyExistsError


router = APIRouter()


def _video_response(video: VideoOutput) -> VideoResponse:
    return VideoResponse(
        id=video.id,
        title=video.title,
        youtube_url=video.youtube_url,
        youtube_id=video.youtube_id,
        description=video.description,
        thumbnail=video.thumbnail,
        created_at=video.created_at,
    )


@router.get("/v1/videos", response_model=VideoListResponse)
def list_videos(
    user: User = Depends(require_active_subscription),
    use_case: ListVideosUseCase = Depends(get_list_videos_use_case),
):
    videos = use_case.execute(user_id=user.id)
    return VideoListResponse(videos=[_video_response(video) for video in videos])


@router.post("/v1/videos", response_model=AddVideoResponse)
def add_video(
    req: AddVideoRequest,
    user: User = Depends(require_active_subscription),
    use_case: AddVideoUseCase = Depends(get_add_video_use_case),
):
    try:
        video = use_case.execute(AddVideoInput(user_id=user.id, youtube_url=req.youtube_url))
    except (InvalidInputError, InvalidVideoUrlError, VideoAlreadyExistsError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return AddVideoResponse(video=_video_response(video))
