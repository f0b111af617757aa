"""WSGI server settings."""

from pdfshelf.settings.components import config

# Server host and port
SERVER_HOST = config('SERVER_HOST', default='0.0.0.0')  # noqa: S104
SERVER_PORT = config('SERVER_PORT', cast=int, default=5000)
