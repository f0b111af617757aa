"""Database models for documents app."""

import uuid
from typing import Final, final, override

from django.db import models
from django.urls import reverse
from django.utils import timezone

# Constants for field max lengths
_ORIGINAL_NAME_MAX_LENGTH: Final = 255
_STORAGE_KEY_MAX_LENGTH: Final = 255


@final
class Document(models.Model):
    """Metadata record for one uploaded PDF.

    The binary lives in the configured storage under ``storage_key``.
    Records are immutable: they are created once the binary has been
    written and are only ever deleted afterwards.

    The storage backend has no knowledge of which records reference
    which binaries, so the upload and delete pipelines in
    ``logic.document_operations`` are responsible for keeping both
    sides consistent.
    """

    # Opaque id, never reused after deletion
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    original_name = models.CharField(
        max_length=_ORIGINAL_NAME_MAX_LENGTH,
        help_text='Filename as supplied by the client',
    )

    storage_key = models.CharField(
        max_length=_STORAGE_KEY_MAX_LENGTH,
        unique=True,
        editable=False,
        help_text='Generated name of the binary in storage',
    )

    # Measured from storage after the write, never client-declared
    size_bytes = models.PositiveBigIntegerField(
        editable=False,
        help_text='File size in bytes',
    )

    uploaded_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
        db_index=True,
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'Document'  # type: ignore[mutable-override]
        verbose_name_plural = 'Documents'  # type: ignore[mutable-override]
        ordering = ['-uploaded_at']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.original_name} ({self.storage_key})'

    def get_url(self) -> str:
        """Get the path the binary is served from.

        Returns:
            Path of the fetch-binary endpoint for this document.
        """
        return reverse('documents:binary', args=[self.storage_key])
