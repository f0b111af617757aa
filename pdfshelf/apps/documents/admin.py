"""Django admin configuration for documents app."""

import logging

from django.apps import apps
from django.contrib import admin, messages
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.html import format_html

from pdfshelf.apps.documents.exceptions import (
    DocumentError,
    DocumentNotFoundError,
)
from pdfshelf.apps.documents.logic.document_operations import delete_document
from pdfshelf.apps.documents.models import Document

logger = logging.getLogger(__name__)


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < 1024:
        return f'{size_bytes} B'
    if size_bytes < 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / 1024:.1f} KB'
    if size_bytes < 1024 * 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / (1024 * 1024):.1f} MB'
    return f'{size_bytes / (1024 * 1024 * 1024):.1f} GB'


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin[Document]):
    """Admin interface for Document model.

    Records are immutable, and deleting one goes through the deletion
    pipeline so the binary is removed along with the row.
    """

    list_display = [
        'original_name',
        'storage_key',
        'size_display',
        'uploaded_at',
        'view_link',
    ]

    list_filter = [
        'uploaded_at',
    ]

    search_fields = [
        'original_name',
        'storage_key',
    ]

    readonly_fields = [
        'id',
        'original_name',
        'storage_key',
        'size_bytes',
        'uploaded_at',
    ]

    def size_display(self, obj: Document) -> str:
        """Display file size in human-readable format."""
        return _format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def view_link(self, obj: Document) -> str:
        """Link to the stored PDF.

        Args:
            obj: Document instance.

        Returns:
            HTML anchor opening the PDF in a new tab.
        """
        return format_html(
            '<a href="{url}" target="_blank">Open</a>',
            url=obj.get_url(),
        )
    view_link.short_description = 'PDF'  # type: ignore[attr-defined]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Documents are only created by uploads."""
        return False

    def delete_model(self, request: HttpRequest, obj: Document) -> None:
        """Delete binary and record through the deletion pipeline.

        Storage and database failures are shown to the admin user, the
        record is left in place for a retry.

        Args:
            request: HTTP request.
            obj: Document to delete.
        """
        config = apps.get_app_config('documents')
        try:
            delete_document(
                config.binary_store,
                config.metadata_store,
                obj.id,
            )
        except DocumentNotFoundError:
            logger.warning('Document already deleted: ID=%s', obj.id)
        except DocumentError as error:
            logger.exception('Admin delete failed: ID=%s', obj.id)
            self.message_user(
                request,
                f'Could not delete {obj.original_name}: {error}',
                level=messages.ERROR,
            )

    def delete_queryset(
        self,
        request: HttpRequest,
        queryset: QuerySet[Document],
    ) -> None:
        """Delete every selected document through the pipeline.

        Args:
            request: HTTP request.
            queryset: Selected documents.
        """
        for document in queryset:
            self.delete_model(request, document)
