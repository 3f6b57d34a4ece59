"""
Remote storage adapter.

``RemoteStorage`` is constructed once per deployment and called once per
incoming file. It gates the file through an optional validator, streams it
to the selected backend and returns a normalized ``UploadOutcome``.
"""
import asyncio
import os
import tempfile
import uuid
from enum import Enum
from typing import Any, Mapping

import aiofiles
import aiofiles.os

from remote_storage.logging_config import setup_logging
from remote_storage.schemas.upload import UploadOutcome, rejected_outcome
from remote_storage.storage.base import StorageBackend
from remote_storage.storage.cloudinary import CloudinaryBackend
from remote_storage.storage.exceptions import UnrecognizedBackendError
from remote_storage.storage.gcs import GCSBackend
from remote_storage.storage.s3 import S3Backend
from remote_storage.storage.types import IncomingFile, StorageTarget, UploadOptions

logger = setup_logging(__name__)

# Order matters for structural matching: the Cloudinary and GCS checks are
# duck-typed, the S3 one is an isinstance check.
BACKENDS: dict[StorageTarget, type[StorageBackend]] = {
    StorageTarget.AWS_S3: S3Backend,
    StorageTarget.CLOUDINARY: CloudinaryBackend,
    StorageTarget.GCS: GCSBackend,
}

DRAIN_CHUNK_SIZE = 64 * 1024  # 64KB


class UploadState(str, Enum):
    VALIDATING = "validating"
    TRANSFERRING = "transferring"
    NORMALIZING = "normalizing"
    REJECTED = "rejected"
    FAILED = "failed"


def resolve_target(target: StorageTarget | str) -> StorageTarget:
    """
    Map an explicit target selector to a StorageTarget.

    Raises:
        UnrecognizedBackendError: If the selector names no supported backend
    """
    if isinstance(target, StorageTarget):
        return target
    try:
        return StorageTarget(str(target).upper())
    except ValueError:
        raise UnrecognizedBackendError(target) from None


def classify_client(client: Any) -> StorageTarget:
    """
    Infer the backend of a client handle from its shape.

    Best-effort fallback for callers that pass a client without a target.

    Raises:
        UnrecognizedBackendError: If the handle matches no backend
    """
    for target, backend_cls in BACKENDS.items():
        if backend_cls.matches(client):
            logger.warning(
                f"Storage target inferred as {target.value} from a "
                f"{type(client).__name__} handle; pass target explicitly instead"
            )
            return target
    raise UnrecognizedBackendError(type(client).__name__)


class RemoteStorage:
    """
    Storage engine forwarding incoming files to one remote backend.

    The backend, its static params and the options are fixed at construction
    and only read afterwards, so one instance serves concurrent uploads.
    """

    def __init__(
        self,
        target: StorageTarget | str | None = None,
        client: Any = None,
        config: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        options: UploadOptions | Mapping[str, Any] | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            target: Backend selector (CLOUDINARY, GCS, AWS_S3)
            client: Pre-built SDK client; classified by shape if target is None
            config: SDK configuration used to build the client when none is given
            params: Backend-native static parameters (bucket, folder, ...)
            options: Behavioral options, UploadOptions or a plain mapping

        Raises:
            UnrecognizedBackendError: If no backend can be determined
        """
        if target is not None:
            resolved = resolve_target(target)
        elif client is not None:
            resolved = classify_client(client)
        else:
            raise UnrecognizedBackendError(None)

        backend_cls = BACKENDS[resolved]
        if client is None:
            client = backend_cls.create_client(config)

        self._backend = backend_cls(client, params)
        if isinstance(options, UploadOptions):
            self._options = options
        else:
            self._options = UploadOptions.from_mapping(options)

        logger.info(f"Remote storage configured for {resolved.value}")

    @property
    def target(self) -> StorageTarget:
        return self._backend.target

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def options(self) -> UploadOptions:
        return self._options

    async def handle_file(self, request: Any, file: IncomingFile) -> UploadOutcome:
        """
        Upload one incoming file.

        Args:
            request: Request context, handed to the validator and public_id
            file: Incoming file descriptor

        Returns:
            Normalized outcome, or the rejection outcome (filename "/", size 0)
            when the validator refuses the file

        Raises:
            Whatever the validator or the backend raised, unmodified
        """
        state = UploadState.VALIDATING
        try:
            if self._options.validator and not self._options.validator(request, file):
                state = UploadState.REJECTED
                logger.info(f"Upload of {file.originalname} rejected by validator")
                await self._discard(file)
                return rejected_outcome()

            state = UploadState.TRANSFERRING
            translated = self._backend.translate(request, file, self._options)
            payload = await self._backend.upload(file, translated, self._options)

            state = UploadState.NORMALIZING
            outcome = self._backend.normalize(payload, translated)
        except Exception:
            logger.error(
                f"Upload of {file.originalname}: {state.value} -> {UploadState.FAILED.value}",
                exc_info=True,
            )
            raise

        logger.info(f"Uploaded {file.originalname} as {outcome.filename}")
        return outcome

    async def remove_file(self, request: Any, file: Any) -> None:
        """
        Delete a stored file; deleting a missing file is not an error.

        Args:
            request: Request context (unused by the backends)
            file: Anything with a ``filename`` attribute, e.g. an UploadOutcome
        """
        logger.info(f"Removing {file.filename} from {self.target.value}")
        await self._backend.remove(file.filename)

    async def _discard(self, file: IncomingFile) -> None:
        """
        Drain a rejected file's stream into a private temporary file.

        Sink failures are logged and ignored; the stream is consumed regardless.
        """
        sink_path = await self._sink_path()
        opened = False
        try:
            # "x": fail rather than share a file with another call
            async with aiofiles.open(sink_path, "xb") as sink:
                opened = True
                while chunk := await asyncio.to_thread(file.stream.read, DRAIN_CHUNK_SIZE):
                    await sink.write(chunk)
        except OSError as e:
            logger.warning(f"Discard sink {sink_path} failed: {str(e)}")
            while await asyncio.to_thread(file.stream.read, DRAIN_CHUNK_SIZE):
                pass
        finally:
            if opened:
                try:
                    await aiofiles.os.remove(sink_path)
                except OSError as e:
                    logger.warning(f"Could not remove discard sink {sink_path}: {str(e)}")

    async def _sink_path(self) -> str:
        """
        Pick a discard file name unique to this call.

        A ``trash`` directory gets ``rejected-<uuid>.tmp`` inside it; any other
        ``trash`` value is a file path and gets a ``.<uuid>`` suffix.
        """
        suffix = uuid.uuid4().hex
        trash = self._options.trash
        if trash is None:
            return os.path.join(tempfile.gettempdir(), f"rejected-{suffix}.tmp")
        if await aiofiles.os.path.isdir(trash):
            return os.path.join(trash, f"rejected-{suffix}.tmp")
        return f"{trash}.{suffix}"
