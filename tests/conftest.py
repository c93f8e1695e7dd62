from contextlib import contextmanager

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from video_transcriber.config import AssemblyAIConfig
from video_transcriber.db_models import Organization, S3Bucket, User, Video
from video_transcriber.handlers import TranscriptionHandler
from video_transcriber.repositories import VideoRepository

from fakes import (
    USER_ID,
    VIDEO_ID,
    FakeBucket,
    FakeExtractor,
    FakeProbe,
    FakeResolver,
    FakeTranscriber,
    FakeTrigger,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    @contextmanager
    def factory():
        with Session(engine) as session:
            yield session

    return factory


@pytest.fixture
def repository(session_factory):
    return VideoRepository(session_factory)


@pytest.fixture
def seed(session_factory):
    """Returns a function that inserts the owner, an organization and a video."""

    def _seed(video_settings=None, org_settings=None, bucket: S3Bucket | None = None):
        with session_factory() as db_session:
            db_session.add(User(id=USER_ID, email="owner@example.com"))
            db_session.add(Organization(id="org-1", settings=org_settings))
            if bucket is not None:
                db_session.add(bucket)
            db_session.add(
                Video(
                    id=VIDEO_ID,
                    owner_id=USER_ID,
                    org_id="org-1",
                    bucket=bucket.id if bucket else None,
                    settings=video_settings,
                )
            )
            db_session.commit()

    return _seed


@pytest.fixture
def load_status(session_factory):
    def _load(video_id: str = VIDEO_ID):
        with session_factory() as db_session:
            return db_session.get(Video, video_id).transcription_status

    return _load


@pytest.fixture
def bucket():
    return FakeBucket()


@pytest.fixture
def resolver(bucket):
    return FakeResolver(bucket)


@pytest.fixture
def probe():
    return FakeProbe()


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def transcriber():
    return FakeTranscriber()


@pytest.fixture
def trigger():
    return FakeTrigger()


@pytest.fixture
def make_handler(repository, resolver, probe, extractor, transcriber, trigger):
    def _make(**overrides):
        components = {
            "repository": repository,
            "bucket_resolver": resolver,
            "probe": probe,
            "extractor": extractor,
            "transcription_service": transcriber,
            "generation_trigger": trigger,
            "config": AssemblyAIConfig(api_key="test-key"),
        }
        components.update(overrides)
        return TranscriptionHandler(**components)

    return _make
