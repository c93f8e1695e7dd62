from datetime import timedelta

import pytest

from video_transcriber.domain import BucketRef
from video_transcriber.exceptions import StorageDeleteError, StorageUploadError
from video_transcriber.infrastructure import MinioBucketResolver, MinioStorageBucket


class FakeMinio:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls: list[tuple] = []

    def presigned_get_object(self, bucket_name, object_name, expires):
        self.calls.append(("presign", bucket_name, object_name, expires))
        return f"http://minio/{bucket_name}/{object_name}?X-Amz-Signature=abc"

    def put_object(self, bucket_name, object_name, data, length, content_type):
        if self.fail:
            raise ConnectionError("minio down")
        self.calls.append(("put", bucket_name, object_name, data.read(), length, content_type))

    def remove_object(self, bucket_name, object_name):
        if self.fail:
            raise ConnectionError("minio down")
        self.calls.append(("remove", bucket_name, object_name))


def test_bucket_operations():
    client = FakeMinio()
    bucket = MinioStorageBucket(client, "videos", 600)

    url = bucket.get_signed_url("u/v/result.mp4")
    bucket.put_object("u/v/transcription.vtt", b"WEBVTT\n", "text/vtt")
    bucket.delete_object("u/v/audio-temp.mp3")

    assert url.startswith("http://minio/videos/u/v/result.mp4")
    assert client.calls == [
        ("presign", "videos", "u/v/result.mp4", timedelta(seconds=600)),
        ("put", "videos", "u/v/transcription.vtt", b"WEBVTT\n", 7, "text/vtt"),
        ("remove", "videos", "u/v/audio-temp.mp3"),
    ]


def test_bucket_errors_are_wrapped():
    bucket = MinioStorageBucket(FakeMinio(fail=True), "videos", 600)

    with pytest.raises(StorageUploadError):
        bucket.put_object("k", b"x", "audio/mpeg")
    with pytest.raises(StorageDeleteError):
        bucket.delete_object("k")


def test_resolver_defaults_and_custom_bucket():
    default = MinioStorageBucket(FakeMinio(), "videos", 600)
    resolver = MinioBucketResolver(default, 600)

    assert resolver.resolve(None) is default

    custom = resolver.resolve(
        BucketRef(
            id="b1",
            endpoint="https://s3.eu-west-1.amazonaws.com",
            access_key_id="AKIA",
            secret_access_key="secret",
            bucket_name="customer-videos",
            region="eu-west-1",
        )
    )
    assert custom.name == "customer-videos"
