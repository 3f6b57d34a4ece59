"""
Per-call and per-adapter value types shared by the storage backends.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO, Callable, Mapping

from fastapi import UploadFile


class StorageTarget(str, Enum):
    """Closed set of supported remote storage backends."""

    CLOUDINARY = "CLOUDINARY"
    GCS = "GCS"
    AWS_S3 = "AWS_S3"


@dataclass
class IncomingFile:
    """
    One file of an incoming multipart request.

    The caller owns the stream; the adapter reads it once and never keeps it.
    """

    fieldname: str
    originalname: str
    stream: BinaryIO
    encoding: str = "7bit"
    mimetype: str | None = None
    size: int | None = None

    @classmethod
    def from_upload_file(cls, upload: UploadFile, fieldname: str = "file") -> "IncomingFile":
        """
        Build a descriptor from a FastAPI UploadFile.

        Args:
            upload: The uploaded file as received by an endpoint
            fieldname: Form field the file was sent under

        Returns:
            IncomingFile reading from the UploadFile's spooled file
        """
        encoding = upload.headers.get("content-transfer-encoding", "7bit")
        return cls(
            fieldname=fieldname,
            originalname=upload.filename or "",
            stream=upload.file,
            encoding=encoding,
            mimetype=upload.content_type,
            size=upload.size,
        )


# (request, file) -> destination identifier
PublicIdFn = Callable[[Any, IncomingFile], str]
# (request, file) -> accept?
ValidatorFn = Callable[[Any, IncomingFile], bool]


@dataclass(frozen=True)
class UploadOptions:
    """
    Behavioral options of an adapter.

    Attributes:
        chunk_size: Transfer chunk/part size in bytes
        public_id: Destination override, literal or computed per call
        trash: Where rejected uploads are drained. A directory holds one
            rejected-<uuid>.tmp per call; a file path such as "trash.txt"
            is used as a prefix, "trash.txt.<uuid>". Defaults to the system
            temp directory. Every call gets its own file, removed afterwards.
        validator: Gate deciding whether a file is uploaded at all
        tags: Object-store tags, mapping or list of {"Key", "Value"} pairs
        queue_size: Object-store concurrent part uploads
        leave_parts_on_error: Ask to keep the parts of a failed object-store
            upload; boto3 aborts them regardless, so only a warning is logged
    """

    chunk_size: int | None = None
    public_id: str | PublicIdFn | None = None
    trash: str | None = None
    validator: ValidatorFn | None = None
    tags: Mapping[str, str] | list[dict[str, str]] | None = None
    queue_size: int | None = None
    leave_parts_on_error: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "UploadOptions":
        """
        Build options from a plain mapping.

        Accepts the camelCase object-store keys (queueSize, leavePartsOnError)
        as well as snake_case ones. Unknown keys raise TypeError.
        """
        if not options:
            return cls()
        aliases = {"queueSize": "queue_size", "leavePartsOnError": "leave_parts_on_error"}
        return cls(**{aliases.get(key, key): value for key, value in options.items()})

    def resolve_public_id(self, request: Any, file: IncomingFile) -> str | None:
        """Return the destination override for this call, if any."""
        if not self.public_id:
            return None
        if isinstance(self.public_id, str):
            return self.public_id
        if callable(self.public_id):
            return self.public_id(request, file)
        return None
