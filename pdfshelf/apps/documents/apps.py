"""Django app configuration for documents app."""

from typing import override

from django.apps import AppConfig
from django.core.files.storage import storages


class DocumentsConfig(AppConfig):
    """Configuration for documents app.

    Owns the store handles: they are built once when the app registry is
    ready and handed to the pipelines by the views and commands.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'pdfshelf.apps.documents'
    label = 'documents'
    verbose_name = 'Documents'

    @override
    def ready(self) -> None:
        """Construct the binary and metadata stores."""
        from pdfshelf.apps.documents.infrastructure.records import (  # noqa: WPS433
            MetadataStore,
        )
        from pdfshelf.apps.documents.infrastructure.storage import (  # noqa: WPS433
            BinaryStore,
        )

        self.binary_store = BinaryStore(storages['default'])
        self.metadata_store = MetadataStore()

    def close_stores(self) -> None:
        """Release resources held by the stores."""
        self.metadata_store.close()
