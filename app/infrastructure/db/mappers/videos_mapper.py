from __future__ import annotations

from typing import Any, Mapping

from app.domain.entities.video import Video
from app.infrastructure.db.mappers.accounts_mapper import as_utc


def map_row_to_video(row: Mapping[str, Any]) -> Video:
    return Video(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=row["title"],
        youtube_url=row["youtube_url"],
        youtube_id=row["youtube_id"],
        description=row.get("description"),
        thumbnail=row.get("thumbnail"),
        created_at=as_utc(row["created_at"]),
    )
