"""Metadata store for document records."""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections, transaction
from django.db.models import QuerySet

from pdfshelf.apps.documents.exceptions import (
    DocumentNotFoundError,
    MetadataDeleteError,
    MetadataReadError,
    MetadataWriteError,
)
from pdfshelf.apps.documents.models import Document

logger = logging.getLogger(__name__)


class MetadataStore:
    """Persists one ``Document`` row per uploaded binary.

    Bound to a single database alias. Database failures are translated
    into the documents error taxonomy; the store never touches binaries.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        """Initialize the store.

        Args:
            using: Database alias the records live in.
        """
        self.using = using

    def _documents(self) -> QuerySet[Document]:
        return Document.objects.using(self.using)

    def insert(
        self,
        original_name: str,
        storage_key: str,
        size_bytes: int,
    ) -> Document:
        """Create a record for a binary that has already been written.

        Args:
            original_name: Filename supplied by the client.
            storage_key: Key the binary was stored under.
            size_bytes: Stored size of the binary.

        Returns:
            Created Document instance.

        Raises:
            MetadataWriteError: If the insert fails.
        """
        document = Document(
            original_name=original_name,
            storage_key=storage_key,
            size_bytes=size_bytes,
        )
        try:
            with transaction.atomic(using=self.using):
                document.save(using=self.using, force_insert=True)
        except DatabaseError as error:
            logger.exception('Failed to create record for: %s', storage_key)
            raise MetadataWriteError(
                f'Failed to create record for {storage_key}',
            ) from error

        logger.info(
            'Document record created: %s (ID: %s)',
            storage_key,
            document.id,
        )
        return document

    def list_newest_first(self) -> list[Document]:
        """Materialize every record, most recent upload first.

        Raises:
            MetadataReadError: If the query fails.
        """
        try:
            return list(self._documents().order_by('-uploaded_at'))
        except DatabaseError as error:
            logger.exception('Failed to list document records')
            raise MetadataReadError('Failed to list documents') from error

    def find(self, document_id: UUID | str) -> Document:
        """Get a record by id.

        Args:
            document_id: Record id. Malformed ids are treated as unknown.

        Returns:
            Document instance.

        Raises:
            DocumentNotFoundError: If no record has this id.
            MetadataReadError: If the query fails.
        """
        try:
            return self._documents().get(pk=document_id)
        except (Document.DoesNotExist, ValidationError) as error:
            raise DocumentNotFoundError(document_id) from error
        except DatabaseError as error:
            logger.exception('Failed to read record: ID=%s', document_id)
            raise MetadataReadError(
                f'Failed to read document {document_id}',
            ) from error

    def delete(self, document_id: UUID | str) -> None:
        """Delete a record by id.

        Raises:
            DocumentNotFoundError: If no record has this id.
            MetadataDeleteError: If the delete fails.
        """
        try:
            with transaction.atomic(using=self.using):
                deleted, _ = self._documents().filter(pk=document_id).delete()
        except ValidationError as error:
            raise DocumentNotFoundError(document_id) from error
        except DatabaseError as error:
            logger.exception('Failed to delete record: ID=%s', document_id)
            raise MetadataDeleteError(
                f'Failed to delete document {document_id}',
            ) from error

        if not deleted:
            raise DocumentNotFoundError(document_id)
        logger.info('Document record deleted: ID=%s', document_id)

    def storage_keys(self) -> set[str]:
        """Collect the storage keys of all live records.

        Raises:
            MetadataReadError: If the query fails.
        """
        try:
            return set(
                self._documents().values_list('storage_key', flat=True),
            )
        except DatabaseError as error:
            logger.exception('Failed to collect storage keys')
            raise MetadataReadError('Failed to collect storage keys') from error

    def close(self) -> None:
        """Release the database connection held for this store."""
        connections[self.using].close()
