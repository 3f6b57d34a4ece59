"""
Google Cloud Storage blob backend.

Static params must carry ``bucket``; every other key is forwarded as a
native upload keyword (content_type, predefined_acl, metadata, ...).
"""
from typing import Any, Mapping

from google.api_core.exceptions import NotFound
from google.cloud import storage

from remote_storage.logging_config import setup_logging
from remote_storage.schemas.upload import UploadOutcome, build_outcome
from remote_storage.storage.base import StorageBackend
from remote_storage.storage.types import IncomingFile, StorageTarget, UploadOptions

logger = setup_logging(__name__)

PUBLIC_URL = "https://storage.googleapis.com"


class GCSBackend(StorageBackend):
    """
    Writes each file to ``bucket.blob(destination)``.

    A configured chunk size turns the write into a resumable upload in
    chunks of that size (GCS requires multiples of 256 KiB).
    """

    target = StorageTarget.GCS

    @classmethod
    def create_client(cls, config: Mapping[str, Any] | None) -> Any:
        return storage.Client(**dict(config or {}))

    @classmethod
    def matches(cls, client: Any) -> bool:
        return isinstance(client, storage.Client) or callable(getattr(client, "bucket", None))

    @property
    def bucket_name(self) -> str:
        return self.params.get("bucket")

    def translate(
        self,
        request: Any,
        file: IncomingFile,
        options: UploadOptions,
    ) -> tuple[dict[str, Any], str]:
        """
        Build write options and the destination object name.

        Returns:
            (write options, destination name)
        """
        write_options = {key: value for key, value in self.params.items() if key != "bucket"}
        if options.chunk_size:
            write_options["chunk_size"] = options.chunk_size
        destination = options.resolve_public_id(request, file) or file.originalname
        return write_options, destination

    def transfer(
        self,
        file: IncomingFile,
        translated: tuple[dict[str, Any], str],
        options: UploadOptions,
    ) -> Any:
        write_options, destination = translated
        upload_kwargs = dict(write_options)
        chunk_size = upload_kwargs.pop("chunk_size", None)
        metadata = upload_kwargs.pop("metadata", None)

        blob = self.client.bucket(self.bucket_name).blob(destination, chunk_size=chunk_size)
        if metadata:
            blob.metadata = metadata

        logger.info(f"Writing {file.originalname} to gs://{self.bucket_name}/{destination}")
        try:
            blob.upload_from_file(file.stream, **upload_kwargs)
        except Exception:
            logger.error(
                f"Upload to gs://{self.bucket_name}/{destination} failed, removing partial object",
                exc_info=True,
            )
            self._discard_partial(blob)
            raise
        return blob

    def _discard_partial(self, blob: Any) -> None:
        try:
            blob.delete()
        except NotFound:
            pass
        except Exception as e:
            # The upload error is what the caller sees
            logger.warning(f"Could not remove partial object {blob.name}: {str(e)}")

    def normalize(self, payload: Any, translated: tuple[dict[str, Any], str]) -> UploadOutcome:
        _, destination = translated
        size = payload.size
        return build_outcome(
            bucket=self.bucket_name,
            content_type=payload.content_type,
            etag=payload.etag,
            filename=destination,
            path=f"{PUBLIC_URL}/{self.bucket_name}/{destination}",
            size=int(size) if size is not None else None,
            storage_class=payload.storage_class,
            time_created=payload.time_created,
        )

    def delete(self, filename: str) -> None:
        try:
            self.client.bucket(self.bucket_name).blob(filename).delete()
        except NotFound:
            logger.info(f"gs://{self.bucket_name}/{filename} already absent")
