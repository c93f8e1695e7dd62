from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, Relationship, SQLModel


class TranscriptionStatus(str, Enum):
    """Persisted pipeline outcome. A NULL column means the status is unset."""

    PROCESSING = "PROCESSING"
    COMPLETE = "COMPLETE"
    SKIPPED = "SKIPPED"
    NO_AUDIO = "NO_AUDIO"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=64)
    email: Optional[str] = Field(default=None, max_length=255)

    videos: List["Video"] = Relationship(back_populates="owner")


class Organization(SQLModel, table=True):
    __tablename__ = "organizations"

    id: str = Field(primary_key=True, max_length=64)
    name: Optional[str] = Field(default=None, max_length=255)
    settings: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=Column(JSON, nullable=True)
    )


class S3Bucket(SQLModel, table=True):
    __tablename__ = "s3_buckets"

    id: str = Field(primary_key=True, max_length=64)
    owner_id: str = Field(foreign_key="users.id", max_length=64)
    endpoint: str = Field(max_length=255)
    access_key_id: str = Field(max_length=255)
    secret_access_key: str = Field(max_length=255)
    bucket_name: str = Field(max_length=255)
    region: Optional[str] = Field(default=None, max_length=64)
    secure: bool = True


class Video(SQLModel, table=True):
    __tablename__ = "videos"

    id: str = Field(primary_key=True, max_length=64)
    owner_id: str = Field(foreign_key="users.id", max_length=64)
    org_id: Optional[str] = Field(
        default=None, foreign_key="organizations.id", max_length=64
    )
    bucket: Optional[str] = Field(
        default=None, foreign_key="s3_buckets.id", max_length=64
    )
    settings: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=Column(JSON, nullable=True)
    )
    transcription_status: Optional[str] = Field(default=None, max_length=32)

    owner: User = Relationship(back_populates="videos")
