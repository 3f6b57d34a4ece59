"""
S3 (or S3-compatible) object store backend.

Uploads go through boto3's managed transfer (``upload_fileobj``), which
switches to a multipart upload once the stream exceeds one part.
"""
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote, urlencode

import boto3
from boto3.s3.transfer import TransferConfig
from botocore.client import BaseClient

from remote_storage.logging_config import setup_logging
from remote_storage.schemas.upload import UploadOutcome, build_outcome
from remote_storage.storage.base import StorageBackend
from remote_storage.storage.content_types import resolve_content_type
from remote_storage.storage.types import IncomingFile, StorageTarget, UploadOptions

logger = setup_logging(__name__)


@dataclass
class S3UploadOptions:
    """
    Arguments of one managed upload.

    Attributes:
        params: Keyword arguments for ``upload_fileobj`` (Fileobj, Bucket, Key, ExtraArgs)
        config: Part size and concurrency of the transfer
        leave_parts_on_error: Caller asked to keep the parts of a failed upload
    """

    params: dict[str, Any]
    config: TransferConfig
    leave_parts_on_error: bool = False

    @property
    def content_type(self) -> str | None:
        return self.params["ExtraArgs"].get("ContentType")

    @property
    def metadata(self) -> dict[str, str] | None:
        return self.params["ExtraArgs"].get("Metadata")


def encode_tags(tags: Any) -> str:
    """
    Encode tags the way the Tagging header expects ("k1=v1&k2=v2").

    Args:
        tags: Mapping, or list of {"Key": ..., "Value": ...} pairs

    Returns:
        URL-encoded tag string
    """
    if isinstance(tags, Mapping):
        pairs = list(tags.items())
    else:
        pairs = [(tag["Key"], tag["Value"]) for tag in tags]
    return urlencode(pairs)


class S3Backend(StorageBackend):
    """Static params use the S3 API names: Bucket, Key, ContentType, Metadata, ..."""

    target = StorageTarget.AWS_S3

    @classmethod
    def create_client(cls, config: Mapping[str, Any] | None) -> Any:
        return boto3.client("s3", **dict(config or {}))

    @classmethod
    def matches(cls, client: Any) -> bool:
        if not isinstance(client, BaseClient):
            return False
        return client.meta.service_model.service_name == "s3"

    @property
    def bucket_name(self) -> str:
        return self.params.get("Bucket")

    def translate(
        self,
        request: Any,
        file: IncomingFile,
        options: UploadOptions,
    ) -> S3UploadOptions:
        extra_args = {
            key: value for key, value in self.params.items() if key not in ("Bucket", "Key", "Body")
        }
        extra_args["ContentType"] = self.params.get("ContentType") or resolve_content_type(
            file.originalname
        )
        if self.params.get("Metadata"):
            extra_args["Metadata"] = dict(self.params["Metadata"])
        if options.tags:
            extra_args["Tagging"] = encode_tags(options.tags)

        key = options.resolve_public_id(request, file) or self.params.get("Key") or file.originalname

        config_kwargs: dict[str, Any] = {}
        if options.chunk_size:
            config_kwargs["multipart_chunksize"] = options.chunk_size
        if options.queue_size:
            config_kwargs["max_concurrency"] = options.queue_size

        return S3UploadOptions(
            params={
                "Fileobj": file.stream,
                "Bucket": self.bucket_name,
                "Key": key,
                "ExtraArgs": extra_args,
            },
            config=TransferConfig(**config_kwargs),
            leave_parts_on_error=options.leave_parts_on_error,
        )

    def transfer(self, file: IncomingFile, translated: S3UploadOptions, options: UploadOptions) -> dict:
        bucket, key = translated.params["Bucket"], translated.params["Key"]
        logger.info(f"Managed upload of {file.originalname} to s3://{bucket}/{key}")
        try:
            self.client.upload_fileobj(Config=translated.config, **translated.params)
        except Exception:
            # A failed managed upload is never visible under the key and
            # s3transfer aborts its own multipart upload; the key is not touched.
            logger.error(f"Upload to s3://{bucket}/{key} failed", exc_info=True)
            if translated.leave_parts_on_error:
                logger.warning(
                    f"leave_parts_on_error set for s3://{bucket}/{key}, but the managed "
                    "transfer aborts its incomplete multipart upload on failure"
                )
            raise

        head = self.client.head_object(Bucket=bucket, Key=key)
        return {**head, "Bucket": bucket, "Key": key, "Location": self._location(bucket, key)}

    def _location(self, bucket: str, key: str) -> str:
        endpoint = self.client.meta.endpoint_url.rstrip("/")
        return f"{endpoint}/{bucket}/{quote(key)}"

    def normalize(self, payload: Mapping[str, Any], translated: S3UploadOptions) -> UploadOutcome:
        return build_outcome(
            bucket=payload.get("Bucket"),
            content_type=translated.content_type,
            etag=payload.get("ETag"),
            filename=payload.get("Key"),
            metadata=translated.metadata,
            path=payload.get("Location"),
            encryption=payload.get("ServerSideEncryption"),
            version_id=payload.get("VersionId"),
            size=payload.get("ContentLength"),
        )

    def delete(self, filename: str) -> None:
        # DeleteObject succeeds for missing keys
        self.client.delete_object(Bucket=self.bucket_name, Key=filename)
