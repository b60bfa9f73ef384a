from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_add_video_use_case, get_current_user, get_list_videos_use_case
from app.application.dto.videos import AddVideoInput
from app.application.use_cases.add_video import AddVideoUseCase
from app.application.use_cases.list_videos import ListVideosUseCase
from app.domain.entities.video import Video
from app.domain.exceptions import InvalidInputError, InvalidVideoUrlError, VideoAlreadyExistsError
from app.domain.services.youtube import extract_youtube_id
from app.main import app
from support import make_user


class FakeVideosPort:
    def __init__(self):
        self.videos: dict[str, Video] = {}

    def list_videos_for_user(self, *, user_id: str) -> list[Video]:
        owned = [video for video in self.videos.values() if video.user_id == user_id]
        return sorted(owned, key=lambda video: video.created_at, reverse=True)

    def get_video_by_youtube_id(self, *, youtube_id: str) -> Video | None:
        for video in self.videos.values():
            if video.youtube_id == youtube_id:
                return video
        return None

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
        video = Video(
            id=video_id,
            user_id=user_id,
            title=title,
            youtube_url=youtube_url,
            youtube_id=youtube_id,
            description=description,
            thumbnail=thumbnail,
            created_at=created_at,
        )
        self.videos[video.id] = video
        return video


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ?t=42", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/v/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://vimeo.com/12345", None),
    ],
)
def test_extract_youtube_id(url, expected):
    assert extract_youtube_id(url) == expected


def test_add_video_stores_placeholder_metadata():
    videos_port = FakeVideosPort()

    output = AddVideoUseCase(videos_port=videos_port).execute(
        AddVideoInput(user_id="user-1", youtube_url=" https://youtu.be/abc123 ")
    )

    assert output.youtube_id == "abc123"
    assert output.youtube_url == "https://youtu.be/abc123"
    assert output.title == "Video abc123"
    assert output.thumbnail == "https://img.youtube.com/vi/abc123/maxresdefault.jpg"
    assert [video.user_id for video in videos_port.videos.values()] == ["user-1"]


@pytest.mark.parametrize(
    "url, error",
    [(None, InvalidInputError), ("   ", InvalidInputError), ("https://example.com/video", InvalidVideoUrlError)],
)
def test_add_video_rejects_bad_input(url, error):
    with pytest.raises(error):
        AddVideoUseCase(videos_port=FakeVideosPort()).execute(AddVideoInput(user_id="user-1", youtube_url=url))


def test_add_video_rejects_duplicate():
    use_case = AddVideoUseCase(videos_port=FakeVideosPort())
    use_case.execute(AddVideoInput(user_id="user-1", youtube_url="https://youtu.be/abc123"))

    with pytest.raises(VideoAlreadyExistsError):
        use_case.execute(AddVideoInput(user_id="user-2", youtube_url="https://www.youtube.com/watch?v=abc123"))


def test_list_videos_returns_only_own_videos():
    videos_port = FakeVideosPort()
    add = AddVideoUseCase(videos_port=videos_port)
    add.execute(AddVideoInput(user_id="user-1", youtube_url="https://youtu.be/aaa"))
    add.execute(AddVideoInput(user_id="user-2", youtube_url="https://youtu.be/bbb"))

    listed = ListVideosUseCase(videos_port=videos_port).execute(user_id="user-1")

    assert [video.youtube_id for video in listed] == ["aaa"]


def test_videos_router_is_gated_by_subscription_status():
    videos_port = FakeVideosPort()
    app.dependency_overrides[get_list_videos_use_case] = lambda: ListVideosUseCase(videos_port=videos_port)
    app.dependency_overrides[get_add_video_use_case] = lambda: AddVideoUseCase(videos_port=videos_port)

    client = TestClient(app)

    app.dependency_overrides[get_current_user] = lambda: make_user(subscription_status="past_due")
    assert client.get("/v1/videos").status_code == 403
    assert client.post("/v1/videos", json={"youtubeUrl": "https://youtu.be/aaa"}).status_code == 403

    app.dependency_overrides[get_current_user] = lambda: make_user(subscription_status="active")
    created = client.post("/v1/videos", json={"youtubeUrl": "https://youtu.be/aaa"})
    duplicate = client.post("/v1/videos", json={"youtubeUrl": "https://youtu.be/aaa"})
    listed = client.get("/v1/videos")

    assert created.status_code == 200
    assert created.json()["video"]["youtube_id"] == "aaa"
    assert duplicate.status_code == 400
    assert [video["youtube_id"] for video in listed.json()["videos"]] == ["aaa"]

    app.dependency_overrides.clear()
