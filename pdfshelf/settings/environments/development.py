"""This file contains all the settings that defines the development server.

SECURITY WARNING: don't run with debug turned on in production!
"""

from pdfshelf.settings.components import config
from pdfshelf.settings.components.common import SECRET_KEY

DEBUG = True

ALLOWED_HOSTS = [
    config('DOMAIN_NAME', default='localhost'),
    '127.0.0.1',
    '[::1]',
    'testserver',
]

if not SECRET_KEY:
    SECRET_KEY = 'development-only-secret-key'  # noqa: S105
