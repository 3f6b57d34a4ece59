"""
Storage backends for the remote storage adapter.

One StorageBackend implementation per supported service, each providing
translate, transfer, normalize and delete.
"""

from remote_storage.storage.base import StorageBackend
from remote_storage.storage.cloudinary import CloudinaryBackend
from remote_storage.storage.content_types import resolve_content_type
from remote_storage.storage.exceptions import StorageError, UnrecognizedBackendError
from remote_storage.storage.gcs import GCSBackend
from remote_storage.storage.s3 import S3Backend

__all__ = [
    "StorageBackend",
    "CloudinaryBackend",
    "GCSBackend",
    "S3Backend",
    "resolve_content_type",
    "StorageError",
    "UnrecognizedBackendError",
]
