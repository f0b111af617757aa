"""Binary storage for uploaded documents."""

import logging
from datetime import datetime
from typing import Any, BinaryIO, final, override

from django.core.exceptions import SuspiciousFileOperation
from django.core.files.base import File as DjangoFile
from django.core.files.storage import Storage
from storages.backends.s3 import S3Storage

from pdfshelf.apps.documents.exceptions import (
    BinaryNotFoundError,
    StorageDeleteError,
    StorageReadError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)


@final
class PdfStorage(S3Storage):
    """S3 storage backend for PDF binaries.

    Every object is written with a PDF content type and an inline
    content disposition, so presigned URLs open in the browser's viewer
    instead of triggering a download.
    """

    @override
    def get_object_parameters(self, name: str) -> dict[str, Any]:
        """Add PDF headers to the configured object parameters.

        Args:
            name: Storage key of the object being written.

        Returns:
            Extra arguments for the S3 upload.
        """
        params = super().get_object_parameters(name)
        params.setdefault('ContentType', 'application/pdf')
        params.setdefault('ContentDisposition', 'inline')
        return params


@final
class BinaryStore:
    """Content blobs addressed by storage key.

    Wraps a Django storage backend and translates its failures into the
    documents error taxonomy. The store has no knowledge of metadata
    records; keeping the two in step is up to the pipelines.
    """

    def __init__(self, storage: Storage) -> None:
        """Initialize the store.

        Args:
            storage: Django storage backend holding the binaries.
        """
        self.storage = storage

    def save(self, storage_key: str, content: BinaryIO | DjangoFile) -> str:
        """Write a binary.

        Args:
            storage_key: Requested key for the binary.
            content: File-like object to store.

        Returns:
            Key actually used by the backend (may differ on conflicts).

        Raises:
            StorageWriteError: If the backend write fails.
        """
        try:
            logger.info('Writing binary to storage: %s', storage_key)
            saved_key = self.storage.save(storage_key, content)
        except Exception as error:
            logger.exception('Failed to write binary to storage: %s', storage_key)
            raise StorageWriteError(storage_key) from error
        logger.info('Successfully wrote binary: %s', saved_key)
        return saved_key

    def size(self, storage_key: str) -> int:
        """Get the stored length of a binary.

        Args:
            storage_key: Key of the binary.

        Returns:
            Size in bytes as reported by the backend.

        Raises:
            StorageReadError: If the backend cannot report the size.
        """
        try:
            return self.storage.size(storage_key)
        except Exception as error:
            logger.exception('Failed to read size of binary: %s', storage_key)
            raise StorageReadError(storage_key) from error

    def exists(self, storage_key: str) -> bool:
        """Check whether a binary exists.

        Raises:
            StorageReadError: If the backend cannot be queried.
        """
        try:
            return self.storage.exists(storage_key)
        except SuspiciousFileOperation:
            # Keys escaping the storage root can never exist in it
            return False
        except Exception as error:
            logger.exception('Failed to query storage for: %s', storage_key)
            raise StorageReadError(storage_key) from error

    def open(self, storage_key: str) -> DjangoFile:
        """Open a binary for reading, unmodified.

        Args:
            storage_key: Key of the binary.

        Returns:
            File object opened in binary mode. The caller closes it.

        Raises:
            BinaryNotFoundError: If no binary exists under the key.
            StorageReadError: If the backend read fails.
        """
        if not self.exists(storage_key):
            raise BinaryNotFoundError(storage_key)

        try:
            return self.storage.open(storage_key, 'rb')
        except FileNotFoundError as error:
            # Deleted between the existence check and the open
            raise BinaryNotFoundError(storage_key) from error
        except Exception as error:
            logger.exception('Failed to open binary: %s', storage_key)
            raise StorageReadError(storage_key) from error

    def url(self, storage_key: str) -> str:
        """Get an addressable URL for a binary.

        Raises:
            StorageReadError: If the backend cannot build the URL.
        """
        try:
            return self.storage.url(storage_key)
        except Exception as error:
            logger.exception('Failed to build URL for binary: %s', storage_key)
            raise StorageReadError(storage_key) from error

    def delete(self, storage_key: str) -> bool:
        """Delete a binary, tolerating its absence.

        Args:
            storage_key: Key of the binary to delete.

        Returns:
            True if a binary was deleted, False if it was already absent.

        Raises:
            StorageDeleteError: If the backend delete fails.
        """
        try:
            if not self.storage.exists(storage_key):
                logger.warning(
                    'Binary not found in storage (already deleted?): %s',
                    storage_key,
                )
                return False
            logger.info('Deleting binary from storage: %s', storage_key)
            self.storage.delete(storage_key)
        except Exception as error:
            logger.exception(
                'Failed to delete binary from storage: %s',
                storage_key,
            )
            raise StorageDeleteError(storage_key) from error
        logger.info('Successfully deleted binary: %s', storage_key)
        return True

    def rollback_upload(self, storage_key: str) -> None:
        """Delete a freshly written binary after a failed metadata insert.

        This is a best-effort operation - if deletion fails, the error
        is logged but not raised. An orphaned binary is acceptable, it can
        be removed later by the ``cleanup_orphans`` command.

        Args:
            storage_key: Key of the binary to delete.
        """
        try:
            logger.warning('Rolling back upload, deleting binary: %s', storage_key)
            self.delete(storage_key)
            logger.info('Successfully rolled back upload: %s', storage_key)
        except StorageDeleteError:
            logger.exception(
                'Failed to rollback upload, orphaned binary: %s',
                storage_key,
            )

    def keys(self) -> list[str]:
        """List every binary key in the flat storage namespace.

        Raises:
            StorageReadError: If the backend listing fails.
        """
        try:
            _, files = self.storage.listdir('')
        except Exception as error:
            logger.exception('Failed to list storage')
            raise StorageReadError('') from error
        return sorted(files)

    def modified_at(self, storage_key: str) -> datetime:
        """Get the last modification time of a binary.

        Raises:
            BinaryNotFoundError: If no binary exists under the key.
            StorageReadError: If the backend cannot report the time.
        """
        try:
            return self.storage.get_modified_time(storage_key)
        except FileNotFoundError as error:
            raise BinaryNotFoundError(storage_key) from error
        except Exception as error:
            # S3 reports a missing object as a generic client error
            if not self.exists(storage_key):
                raise BinaryNotFoundError(storage_key) from error
            logger.exception('Failed to read mtime of binary: %s', storage_key)
            raise StorageReadError(storage_key) from error
