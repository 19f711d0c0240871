from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True, slots=True)
class Track:
    artist: str
    song: str
    start_time: int = 0


@dataclass(slots=True)
class PremiumOptions:
    # RFC-3339 UTC timestamp, already validated as being in the future.
    publish_date: str | None = None
    disable_comments: bool = False
    hide_stats: bool = False
    unlisted: bool = False


@dataclass(slots=True)
class Configuration:
    access_token: str = ""
    default_tags: str = ""

    def to_json_dict(self) -> dict[str, str]:
        return {"ACCESS_TOKEN": self.access_token, "DEFAULT_TAGS": self.default_tags}

    @classmethod
    def from_json_dict(cls, data: dict[str, Any]) -> "Configuration":
        return cls(
            access_token=str(data.get("ACCESS_TOKEN") or ""),
            default_tags=str(data.get("DEFAULT_TAGS") or ""),
        )


# API payloads
class User(BaseModel):
    """Profile of the authenticated account, as returned by the "me" endpoint."""
    username: str = ""
    name: str = ""
    key: str = ""
    url: str = ""
    is_pro: bool = False


class ResponseError(BaseModel):
    message: str = ""
    type: str | None = None


class UploadResult(BaseModel):
    success: bool = False
    key: str = ""
    message: str | None = None


class UploadResponse(BaseModel):
    """Decoded upload reply. At most one of ``error`` / ``result`` is expected."""
    error: ResponseError | None = None
    details: Any = None
    result: UploadResult | None = None


# Tracklist input file
class TracklistEntry(BaseModel):
    title: str = ""
    artist: str = ""
    label: str = ""
    url: str = ""
    time_str: str = ""
    time: int = Field(default=0, ge=0)

    @field_validator("title", "artist", "label", "url", "time_str", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("time", mode="before")
    @classmethod
    def _null_to_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class TracklistFile(BaseModel):
    tracklist: list[TracklistEntry]
    episode: str | int | None = None


@dataclass(slots=True)
class RunContext:
    """State shared by the pipeline stages of a single run."""
    configuration: Configuration
    user: User = field(default_factory=User)
    audio_path: str = ""
    cover_path: str | None = None
    tracklist: list[Track] = field(default_factory=list)
