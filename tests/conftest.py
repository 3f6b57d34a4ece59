"""
Shared fixtures: incoming files and in-process doubles of the three SDK clients.
"""
import io
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import NotFound

from remote_storage.storage.types import IncomingFile


class CountingStream(io.BytesIO):
    """BytesIO that remembers how many bytes were read."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self.bytes_read = 0

    def read(self, size=-1):
        chunk = super().read(size)
        self.bytes_read += len(chunk)
        return chunk


@pytest.fixture
def make_file():
    """Factory for IncomingFile descriptors backed by an in-memory stream."""

    def _make(originalname: str = "photo.png", data: bytes = b"x" * 1024, mimetype: str | None = None):
        return IncomingFile(
            fieldname="file",
            originalname=originalname,
            stream=CountingStream(data),
            mimetype=mimetype,
            size=len(data),
        )

    return _make


@pytest.fixture
def cloudinary_client():
    """Stand-in for the configured ``cloudinary`` module."""
    uploader = MagicMock()
    uploader.upload.return_value = {
        "public_id": "photo.png",
        "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/photo.png",
        "bytes": 1024,
        "etag": "d41d8cd98f00b204e9800998ecf8427e",
        "width": 640,
        "height": 480,
        "signature": "abc123",
        "created_at": "2024-05-01T10:00:00Z",
        "version_id": "v-1",
    }
    uploader.upload_large.return_value = dict(uploader.upload.return_value)
    uploader.destroy.return_value = {"result": "ok"}
    return SimpleNamespace(config=MagicMock(), uploader=uploader)


class FakeBlob:
    """Minimal google.cloud.storage.Blob double."""

    def __init__(self, bucket: "FakeBucket", name: str, chunk_size=None):
        self.bucket = bucket
        self.name = name
        self.chunk_size = chunk_size
        self.metadata = None
        self.content_type = None
        self.etag = None
        self.size = None
        self.storage_class = None
        self.time_created = None
        self.upload_kwargs = None

    def upload_from_file(self, file_obj, **kwargs):
        self.upload_kwargs = kwargs
        self.bucket.events.append(("upload", self.name))
        if self.bucket.fail_after is not None:
            partial = file_obj.read(self.bucket.fail_after)
            if self.bucket.store_partial:
                self.bucket.objects[self.name] = partial
            raise self.bucket.error
        data = file_obj.read()
        self.bucket.objects[self.name] = data
        self.content_type = kwargs.get("content_type", "application/octet-stream")
        self.etag = "CKih16GjycICEAE="
        self.size = len(data)
        self.storage_class = "STANDARD"
        self.time_created = datetime(2024, 5, 1, tzinfo=timezone.utc)

    def delete(self):
        self.bucket.events.append(("delete", self.name))
        if self.name not in self.bucket.objects:
            raise NotFound(f"No such object: {self.bucket.name}/{self.name}")
        del self.bucket.objects[self.name]


class FakeBucket:
    def __init__(self, name: str):
        self.name = name
        self.objects: dict[str, bytes] = {}
        self.events: list[tuple[str, str]] = []
        self.blobs: dict[str, FakeBlob] = {}
        self.fail_after: int | None = None
        self.store_partial = True
        self.error: Exception = ConnectionError("connection reset")

    def blob(self, name: str, chunk_size=None) -> FakeBlob:
        blob = FakeBlob(self, name, chunk_size=chunk_size)
        self.blobs[name] = blob
        return blob


class FakeGCSClient:
    """Minimal google.cloud.storage.Client double."""

    def __init__(self):
        self.buckets: dict[str, FakeBucket] = {}

    def bucket(self, name: str) -> FakeBucket:
        return self.buckets.setdefault(name, FakeBucket(name))


@pytest.fixture
def gcs_client():
    return FakeGCSClient()


@pytest.fixture
def s3_client():
    """boto3 S3 client double recording the managed upload call."""
    client = MagicMock()
    client.meta.endpoint_url = "https://s3.us-east-1.amazonaws.com"

    def upload_fileobj(Fileobj, Bucket, Key, ExtraArgs=None, Config=None):
        client.uploaded[(Bucket, Key)] = Fileobj.read()

    client.uploaded = {}
    client.upload_fileobj.side_effect = upload_fileobj
    client.head_object.return_value = {
        "ETag": '"9b2cf535f27731c974343645a3985328"',
        "ContentLength": 1024,
        "VersionId": "3HL4kqtJlcpXroDTDmjVBH40Nrjfkd",
        "ServerSideEncryption": "AES256",
    }
    def delete_object(Bucket, Key):
        client.uploaded.pop((Bucket, Key), None)
        return {}

    client.delete_object.side_effect = delete_object
    return client
