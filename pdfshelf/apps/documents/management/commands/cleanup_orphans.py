"""Management command to reconcile binaries with document records."""

import logging
from datetime import timedelta
from typing import Any, Final, override

from django.apps import apps
from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from pdfshelf.apps.documents.exceptions import (
    BinaryNotFoundError,
    DocumentError,
    DocumentNotFoundError,
)
from pdfshelf.apps.documents.infrastructure.records import MetadataStore
from pdfshelf.apps.documents.infrastructure.storage import BinaryStore
from pdfshelf.apps.documents.models import Document

_DEFAULT_MIN_AGE_MINUTES: Final = 60

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Delete binaries no record points at, report records with no binary.

    Orphaned binaries are left behind when the rollback after a failed
    record insert itself fails. Binaries younger than ``--min-age-minutes``
    are skipped, since their upload may still be in flight.

    Both listings are snapshots and uploads or deletes may run meanwhile,
    so every key is checked again right before acting on it.
    """

    help = 'Clean up binaries without records and report dangling records'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--min-age-minutes',
            type=int,
            default=getattr(
                settings,
                'DOCUMENTS_ORPHAN_MIN_AGE_MINUTES',
                _DEFAULT_MIN_AGE_MINUTES,
            ),
            help='Only binaries older than this count as orphans',
        )
        parser.add_argument(
            '--purge-dangling',
            action='store_true',
            help='Delete records whose binary is missing',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the cleanup command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        config = apps.get_app_config('documents')
        binary_store = config.binary_store
        metadata_store = config.metadata_store

        dry_run = options['dry_run']
        cutoff = timezone.now() - timedelta(minutes=options['min_age_minutes'])

        stored_keys = set(binary_store.keys())
        live_keys = metadata_store.storage_keys()

        removed = 0
        failed = 0
        for storage_key in sorted(stored_keys - live_keys):
            try:
                modified_at = binary_store.modified_at(storage_key)
            except BinaryNotFoundError:
                # Removed since the listing
                continue
            except DocumentError as exc:
                self.stderr.write(f'Failed to inspect {storage_key}: {exc}')
                failed += 1
                continue

            if modified_at > cutoff:
                continue

            if dry_run:
                self.stdout.write(f'Would delete orphan: {storage_key}')
                removed += 1
                continue

            try:
                binary_store.delete(storage_key)
            except DocumentError as exc:
                self.stderr.write(f'Failed to delete {storage_key}: {exc}')
                failed += 1
            else:
                logger.info('Deleted orphaned binary: %s', storage_key)
                removed += 1

        dangling, dangling_failed = self._handle_dangling(
            binary_store,
            metadata_store,
            sorted(live_keys - stored_keys),
            purge=options['purge_dangling'] and not dry_run,
        )
        failed += dangling_failed

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Would delete {removed} orphaned binaries, '
                    f'{dangling} dangling records',
                ),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Deleted {removed} orphaned binaries, {failed} failed, '
                    f'{dangling} dangling records',
                ),
            )

    def _handle_dangling(
        self,
        binary_store: BinaryStore,
        metadata_store: MetadataStore,
        storage_keys: list[str],
        *,
        purge: bool,
    ) -> tuple[int, int]:
        """Report or delete records whose binary is missing.

        A record counts as dangling only if its binary is still missing
        when checked again, so uploads finished after the storage listing
        are left alone.

        Args:
            binary_store: Store holding the binaries.
            metadata_store: Store holding the records.
            storage_keys: Keys recorded in the database but not in storage.
            purge: Delete the records.

        Returns:
            Number of dangling records found and number of failures.
        """
        dangling = 0
        failed = 0
        for document in Document.objects.filter(storage_key__in=storage_keys):
            try:
                if binary_store.exists(document.storage_key):
                    continue
            except DocumentError as exc:
                self.stderr.write(
                    f'Failed to inspect {document.storage_key}: {exc}',
                )
                failed += 1
                continue

            dangling += 1
            self.stderr.write(
                f'Dangling record: {document.id} ({document.storage_key})',
            )
            if not purge:
                continue

            try:
                metadata_store.delete(document.id)
            except DocumentNotFoundError:
                logger.info(
                    'Dangling record already deleted: ID=%s',
                    document.id,
                )
            except DocumentError as exc:
                self.stderr.write(
                    f'Failed to delete record {document.id}: {exc}',
                )
                failed += 1
            else:
                logger.warning(
                    'Deleted dangling record: %s (ID: %s)',
                    document.storage_key,
                    document.id,
                )
        return dangling, failed
