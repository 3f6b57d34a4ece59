"""
Storage-specific exceptions.

Backend SDK errors are never wrapped in these; they propagate as raised by
the SDK so callers can branch on backend-specific error shapes.
"""


class StorageError(Exception):
    """Base exception for storage adapter operations."""

    pass


class UnrecognizedBackendError(StorageError):
    """Raised when no storage backend matches the construction input."""

    def __init__(self, target: object):
        self.target = target
        super().__init__(
            f"Unrecognized storage backend: {target!r}. Must be one of "
            "CLOUDINARY, GCS or AWS_S3, or a client handle of one of those SDKs"
        )
