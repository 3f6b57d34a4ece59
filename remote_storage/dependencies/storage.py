"""
Storage dependency injection for FastAPI.

This module provides the dependency function that hands the configured
RemoteStorage adapter to endpoints.
"""
from functools import lru_cache

from remote_storage.adapter import RemoteStorage
from remote_storage.config import settings


@lru_cache
def get_remote_storage() -> RemoteStorage:
    """
    Return the adapter configured from settings.

    The adapter is built once and shared; it holds no per-call state.

    Returns:
        RemoteStorage for STORAGE_TARGET

    Raises:
        ValueError: If STORAGE_TARGET is not set
        UnrecognizedBackendError: If STORAGE_TARGET is not supported
    """
    if not settings.STORAGE_TARGET:
        raise ValueError("STORAGE_TARGET is not configured")

    return RemoteStorage(
        target=settings.STORAGE_TARGET,
        config=settings.client_config(),
        params=settings.STORAGE_PARAMS,
        options=settings.upload_options(),
    )
