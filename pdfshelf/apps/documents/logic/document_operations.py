"""Business logic for document operations."""

import logging
from typing import BinaryIO
from uuid import UUID

from django.core.files.base import File as DjangoFile

from pdfshelf.apps.documents.exceptions import StorageError, StorageWriteError
from pdfshelf.apps.documents.infrastructure.metadata import (
    generate_storage_key,
    get_file_size,
    validate_pdf,
)
from pdfshelf.apps.documents.infrastructure.records import MetadataStore
from pdfshelf.apps.documents.infrastructure.storage import BinaryStore
from pdfshelf.apps.documents.models import Document

logger = logging.getLogger(__name__)


def upload_document(  # noqa: WPS211
    binary_store: BinaryStore,
    metadata_store: MetadataStore,
    file_obj: BinaryIO | DjangoFile,
    original_name: str,
    declared_mime_type: str | None,
) -> Document:
    """Store a PDF and create its record.

    Transaction safety: validate first, write to storage second, create
    the record last. If the record cannot be created, the binary is
    deleted again (best-effort rollback).

    Args:
        binary_store: Store the binary is written to.
        metadata_store: Store the record is inserted into.
        file_obj: Uploaded content.
        original_name: Filename supplied by the client.
        declared_mime_type: Content type supplied by the client.

    Returns:
        Created Document instance.

    Raises:
        InvalidFileTypeError: If the upload is not a PDF. Nothing is written.
        StorageWriteError: If the binary cannot be stored. No record exists.
        MetadataWriteError: If the record cannot be created.
    """
    # Reject before anything touches storage
    validate_pdf(file_obj, original_name, declared_mime_type)
    expected_size = get_file_size(file_obj)
    storage_key = generate_storage_key(original_name)

    # Step 1: Write binary
    saved_key = binary_store.save(storage_key, file_obj)

    # Step 2: Measure what actually landed in storage
    try:
        size_bytes = binary_store.size(saved_key)
    except StorageError as error:
        binary_store.rollback_upload(saved_key)
        raise StorageWriteError(saved_key) from error

    if size_bytes != expected_size:
        logger.error(
            'Stored size mismatch for %s: wrote %d of %d bytes',
            saved_key,
            size_bytes,
            expected_size,
        )
        binary_store.rollback_upload(saved_key)
        raise StorageWriteError(saved_key)

    # Step 3: Create record
    try:
        document = metadata_store.insert(
            original_name=original_name,
            storage_key=saved_key,
            size_bytes=size_bytes,
        )
    except Exception:
        # Rollback: Delete binary since the record was not created
        logger.exception(
            'Record creation failed, rolling back storage upload: %s',
            saved_key,
        )
        binary_store.rollback_upload(saved_key)
        raise

    logger.info(
        'PDF uploaded: %s as %s (%d bytes)',
        original_name,
        saved_key,
        size_bytes,
    )
    return document


def list_documents(metadata_store: MetadataStore) -> list[Document]:
    """List all documents, most recently uploaded first.

    Args:
        metadata_store: Store to read from.

    Returns:
        Documents ordered by upload time, descending. Empty if none.
    """
    documents = metadata_store.list_newest_first()
    logger.debug('Listed %d documents', len(documents))
    return documents


def get_document(
    metadata_store: MetadataStore,
    document_id: UUID | str,
) -> Document:
    """Get a document by id.

    Raises:
        DocumentNotFoundError: If no record has this id.
    """
    return metadata_store.find(document_id)


def open_document(binary_store: BinaryStore, storage_key: str) -> DjangoFile:
    """Open a stored binary for viewing.

    The content is returned exactly as written at upload time.

    Args:
        binary_store: Store holding the binary.
        storage_key: Key of a document returned by ``list_documents``.

    Returns:
        File object opened in binary mode. The caller closes it.

    Raises:
        BinaryNotFoundError: If the binary is missing (e.g. deleted).
        StorageReadError: If the storage read fails.
    """
    return binary_store.open(storage_key)


def delete_document(
    binary_store: BinaryStore,
    metadata_store: MetadataStore,
    document_id: UUID | str,
) -> None:
    """Delete a document's binary and then its record.

    Order: read record, delete binary, delete record. A binary that is
    already gone is not an error. If the binary delete fails, the record
    is kept so it still points at an existing binary.

    Args:
        binary_store: Store holding the binary.
        metadata_store: Store holding the record.
        document_id: ID of the document to delete.

    Raises:
        DocumentNotFoundError: If the document doesn't exist.
        StorageDeleteError: If the binary cannot be deleted.
        MetadataDeleteError: If the record cannot be deleted.
    """
    # Step 1: Read record
    document = metadata_store.find(document_id)
    storage_key = document.storage_key
    logger.info(
        'Deleting document: ID=%s, key=%s',
        document.id,
        storage_key,
    )

    # Step 2: Delete binary, absence tolerated
    binary_store.delete(storage_key)

    # Step 3: Delete record
    metadata_store.delete(document.id)
    logger.info('PDF deleted: %s (ID: %s)', document.original_name, document.id)
