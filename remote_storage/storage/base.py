"""
Abstract base class for remote storage backends.

Each backend bundles the three per-upload steps (translate options,
transfer bytes, normalize the response) plus delete, so the adapter can
select one implementation at construction and call it uniformly.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping

from remote_storage.schemas.upload import UploadOutcome
from remote_storage.storage.types import IncomingFile, StorageTarget, UploadOptions


class StorageBackend(ABC):
    """
    Abstract base class for remote storage backends.

    Implementations wrap an SDK client handle that they own for their whole
    lifetime, plus the static parameter bag of backend-native defaults.
    Neither is mutated after construction.
    """

    target: ClassVar[StorageTarget]

    def __init__(self, client: Any, params: Mapping[str, Any] | None = None):
        """
        Initialize the backend.

        Args:
            client: Native SDK client handle
            params: Backend-native defaults (bucket, folder, ...)
        """
        self.client = client
        self.params: Mapping[str, Any] = dict(params or {})

    @classmethod
    @abstractmethod
    def create_client(cls, config: Mapping[str, Any] | None) -> Any:
        """
        Build the native SDK client from configuration.

        Args:
            config: SDK configuration/credentials

        Returns:
            Native client handle
        """
        pass

    @classmethod
    @abstractmethod
    def matches(cls, client: Any) -> bool:
        """
        Check whether a client handle looks like this backend's SDK client.

        Only used when no explicit target was given.
        """
        pass

    @abstractmethod
    def translate(
        self,
        request: Any,
        file: IncomingFile,
        options: UploadOptions,
    ) -> Any:
        """
        Build the native upload arguments for one call.

        Must return fresh objects every call and never mutate ``self.params``.

        Args:
            request: Request context, passed to a computed public_id
            file: Incoming file descriptor
            options: Adapter behavioral options

        Returns:
            Backend-specific argument shape
        """
        pass

    @abstractmethod
    def transfer(self, file: IncomingFile, translated: Any, options: UploadOptions) -> Any:
        """
        Stream the file into the backend (blocking).

        On failure any partially created remote object is removed first,
        then the original error is re-raised.

        Returns:
            Native success payload
        """
        pass

    @abstractmethod
    def normalize(self, payload: Any, translated: Any) -> UploadOutcome:
        """
        Map a native success payload to an UploadOutcome.

        Args:
            payload: What ``transfer`` returned
            translated: The options the transfer used

        Returns:
            Normalized outcome
        """
        pass

    @abstractmethod
    def delete(self, filename: str) -> None:
        """
        Remove a stored object (blocking), treating "not found" as success.

        Args:
            filename: Destination identifier the object was stored under
        """
        pass

    async def upload(self, file: IncomingFile, translated: Any, options: UploadOptions) -> Any:
        """Run ``transfer`` off the event loop."""
        return await asyncio.to_thread(self.transfer, file, translated, options)

    async def remove(self, filename: str) -> None:
        """Run ``delete`` off the event loop."""
        await asyncio.to_thread(self.delete, filename)
