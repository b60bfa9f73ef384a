from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.exc import IntegrityError

from app.application.ports.videos_port import VideosPort
from app.domain.exceptions import VideoAlreadyExistsError
from app.infrastructure.db.mappers.videos_mapper import map_row_to_video


_VIDEO_COLUMNS = """
    id, user_id, title, youtube_url, youtube_id, description, thumbnail, created_at
"""


def _select_videos(sql: str):
    return text(sql).columns(created_at=DateTime(timezone=True))


class SqlVideosRepository(VideosPort):
    def __init__(self, engine):
        self._engine = engine

    def list_videos_for_user(self, *, user_id: str):
        sql = f"""
            SELECT {_VIDEO_COLUMNS}
            FROM videos
            WHERE user_id = :user_id
            ORDER BY created_at DESC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(_select_videos(sql), {"user_id": user_id}).mappings().all()
        return [map_row_to_video(row) for row in rows]

    def get_video_by_youtube_id(self, *, youtube_id: str):
        sql = f"""
            SELECT {_VIDEO_COLUMNS}
            FROM videos
            WHERE youtube_id = :youtube_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(_select_videos(sql), {"youtube_id": youtube_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_video(row)

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
    ):
        sql = """
            INSERT INTO videos (
                id, user_id, title, youtube_url, youtube_id, description, thumbnail, created_at
            ) VALUES (
                :id, :user_id, :title, :youtube_url, :youtube_id, :description, :thumbnail, :created_at
            )
        """
        params = {
            "id": video_id,
            "user_id": user_id,
            "title": title,
            "youtube_url": youtube_url,
            "youtube_id": youtube_id,
            "description": description,
            "thumbnail": thumbnail,
            "created_at": created_at,
        }
        statement = text(sql).bindparams(bindparam("created_at", type_=DateTime(timezone=True)))
        try:
            with self._engine.begin() as conn:
                conn.execute(statement, params)
        except IntegrityError as exc:
            raise VideoAlreadyExistsError("Video already exists in the library.") from exc
        video = self.get_video_by_youtube_id(youtube_id=youtube_id)
        if video is None:
            raise RuntimeError(f"Video {youtube_id} missing after insert.")
        return video
