"""Exceptions for documents app.

Every failure of the document lifecycle derives from ``DocumentError`` so
callers can tell client mistakes, storage failures, metadata failures and
expected not-found outcomes apart.
"""


class DocumentError(Exception):
    """Base class for document lifecycle failures."""


class InvalidFileTypeError(DocumentError):
    """Raised when a submission is not a PDF document."""

    def __init__(self, original_name: str, mime_type: str) -> None:
        """Initialize InvalidFileTypeError.

        Args:
            original_name: Filename supplied by the client.
            mime_type: Declared or detected MIME type that was rejected.
        """
        self.original_name = original_name
        self.mime_type = mime_type
        super().__init__(
            f'Only PDF files are accepted: {original_name!r} '
            f'is {mime_type}',
        )


class StorageError(DocumentError):
    """Base class for binary storage failures."""

    action = 'access'

    def __init__(self, storage_key: str) -> None:
        """Initialize storage error.

        Args:
            storage_key: Key of the binary the operation was acting on.
        """
        self.storage_key = storage_key
        super().__init__(f'Failed to {self.action} binary: {storage_key}')


class StorageWriteError(StorageError):
    """Raised when a binary cannot be written to storage."""

    action = 'write'


class StorageReadError(StorageError):
    """Raised when a binary cannot be read from storage."""

    action = 'read'


class StorageDeleteError(StorageError):
    """Raised when a binary cannot be deleted from storage."""

    action = 'delete'


class MetadataError(DocumentError):
    """Base class for metadata store failures."""


class MetadataWriteError(MetadataError):
    """Raised when a document record cannot be inserted."""


class MetadataReadError(MetadataError):
    """Raised when document records cannot be queried."""


class MetadataDeleteError(MetadataError):
    """Raised when a document record cannot be deleted."""


class NotFoundError(DocumentError):
    """Expected outcome for stale or duplicate requests."""


class DocumentNotFoundError(NotFoundError):
    """Raised when no document record has the requested id."""

    def __init__(self, document_id: object) -> None:
        """Initialize DocumentNotFoundError.

        Args:
            document_id: The id that was looked up.
        """
        self.document_id = document_id
        super().__init__(f'PDF not found: {document_id}')


class BinaryNotFoundError(NotFoundError):
    """Raised when no binary exists under the requested storage key."""

    def __init__(self, storage_key: str) -> None:
        """Initialize BinaryNotFoundError.

        Args:
            storage_key: The storage key that was looked up.
        """
        self.storage_key = storage_key
        super().__init__(f'File not found in storage: {storage_key}')
