"""
Cloudinary media CDN backend.

The handle is the ``cloudinary`` module itself after ``cloudinary.config``.
Cloudinary infers content type on its side, so none is sent.
"""
from typing import Any, Mapping

import cloudinary
import cloudinary.uploader

from remote_storage.logging_config import setup_logging
from remote_storage.schemas.upload import UploadOutcome, build_outcome
from remote_storage.storage.base import StorageBackend
from remote_storage.storage.types import IncomingFile, StorageTarget, UploadOptions

logger = setup_logging(__name__)


class CloudinaryBackend(StorageBackend):
    """Uploads through ``uploader.upload`` or, with a chunk size, ``uploader.upload_large``."""

    target = StorageTarget.CLOUDINARY

    @classmethod
    def create_client(cls, config: Mapping[str, Any] | None) -> Any:
        cloudinary.config(**dict(config or {}))
        return cloudinary

    @classmethod
    def matches(cls, client: Any) -> bool:
        return callable(getattr(client, "config", None)) and hasattr(client, "uploader")

    def translate(
        self,
        request: Any,
        file: IncomingFile,
        options: UploadOptions,
    ) -> dict[str, Any]:
        """
        Flat-merge the overrides into a copy of the static params.

        Returns:
            Keyword arguments for ``uploader.upload``/``upload_large``
        """
        output = dict(self.params)
        if options.chunk_size:
            output["chunk_size"] = options.chunk_size
        public_id = options.resolve_public_id(request, file)
        if public_id:
            output["public_id"] = public_id
        elif not output.get("public_id"):
            output["public_id"] = file.originalname
        return output

    def transfer(self, file: IncomingFile, translated: dict[str, Any], options: UploadOptions) -> dict:
        uploader = self.client.uploader
        if options.chunk_size:
            logger.info(
                f"Chunked upload of {file.originalname} to Cloudinary "
                f"(chunk_size={translated['chunk_size']})"
            )
            return uploader.upload_large(file.stream, **translated)
        logger.info(f"Streaming upload of {file.originalname} to Cloudinary")
        return uploader.upload(file.stream, **translated)

    def normalize(self, payload: Mapping[str, Any], translated: Mapping[str, Any]) -> UploadOutcome:
        return build_outcome(
            etag=payload.get("etag"),
            filename=payload.get("public_id", translated.get("public_id")),
            folder=payload.get("folder") or payload.get("asset_folder"),
            height=payload.get("height"),
            width=payload.get("width"),
            path=payload.get("secure_url"),
            signature=payload.get("signature"),
            size=payload.get("bytes"),
            time_created=payload.get("created_at"),
            version_id=payload.get("version_id"),
        )

    def delete(self, filename: str) -> None:
        # destroy() reports a missing asset as {"result": "not found"}, not an error
        result = self.client.uploader.destroy(filename, invalidate=True)
        logger.info(f"Cloudinary destroy {filename}: {result.get('result') if result else None}")
