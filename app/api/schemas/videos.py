from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AddVideoRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    youtube_url: str | None = Field(default=None, alias="youtubeUrl")


class VideoResponse(BaseModel):
    id: str
    title: str
    youtube_url: str
    youtube_id: str
    description: str | None
    thumbnail: str | None
    created_at: datetime


class VideoListResponse(BaseModel):
    videos: list[VideoResponse]


class AddVideoResponse(BaseModel):
    video: VideoResponse
