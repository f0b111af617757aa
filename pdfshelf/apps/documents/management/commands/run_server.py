"""Management command serving the HTTP API with cheroot."""

import logging
from typing import Any, final, override

from cheroot.wsgi import Server as WSGIServer
from django.apps import apps
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from pdfshelf.wsgi import application

logger = logging.getLogger(__name__)


def serve(host: str, port: int, threads: int) -> None:
    """Serve the WSGI application until interrupted.

    Module-level so the reloader can start it in a fresh process. The
    stores are closed however the server stops.

    Args:
        host: Interface to bind to.
        port: TCP port to bind to.
        threads: Size of the worker thread pool.
    """
    server = WSGIServer(
        bind_addr=(host, port),
        wsgi_app=application,
        numthreads=threads,
        server_name='pdf-shelf',
    )
    logger.info('Serving on %s:%d with %d threads', host, port, threads)
    try:
        server.start()
    except KeyboardInterrupt:
        logger.info('Interrupted, shutting down')
    finally:
        server.stop()
        apps.get_app_config('documents').close_stores()
        logger.info('Server stopped')


@final
class Command(BaseCommand):
    """Serve upload, listing, deletion and PDF fetch routes."""

    help = 'Serve the PDF shelf HTTP API'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument('--host', help='Defaults to SERVER_HOST')
        parser.add_argument('--port', type=int, help='Defaults to SERVER_PORT')
        parser.add_argument(
            '--threads',
            type=int,
            default=10,
            help='Worker threads handling requests concurrently',
        )
        parser.add_argument(
            '--reload',
            action='store_true',
            help='Restart when Python sources change (development only)',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Start the server, optionally under the reloader."""
        serve_args = (
            options['host'] or settings.SERVER_HOST,
            options['port'] or settings.SERVER_PORT,
            options['threads'],
        )
        self.stdout.write(
            self.style.SUCCESS(
                'Starting server on http://{0}:{1}'.format(*serve_args),
            ),
        )

        if not options['reload']:
            serve(*serve_args)
            return

        try:
            import watchfiles  # noqa: PLC0415
        except ImportError as error:
            raise CommandError(
                'watchfiles is required for --reload. '
                'Install with: pip install -e ".[dev]"',
            ) from error

        watchfiles.run_process(
            settings.BASE_DIR / 'pdfshelf',
            target=serve,
            args=serve_args,
            watch_filter=watchfiles.PythonFilter(),
            callback=self._on_reload,
        )

    def _on_reload(self, changes: set[tuple[Any, str]]) -> None:
        for change_type, path in sorted(changes, key=lambda change: change[1]):
            self.stdout.write(
                self.style.WARNING(f'{change_type.name}: {path}'),
            )
        self.stdout.write(self.style.SUCCESS('Reloading server...'))
