"""
Remote storage engine for incoming file uploads.

Forwards each uploaded file to Cloudinary, Google Cloud Storage or S3 and
reports a normalized record of where it was stored.
"""

from remote_storage.adapter import RemoteStorage
from remote_storage.schemas.upload import UploadOutcome
from remote_storage.storage.exceptions import StorageError, UnrecognizedBackendError
from remote_storage.storage.types import IncomingFile, StorageTarget, UploadOptions

__all__ = [
    "RemoteStorage",
    "UploadOutcome",
    "IncomingFile",
    "StorageTarget",
    "UploadOptions",
    "StorageError",
    "UnrecognizedBackendError",
]
