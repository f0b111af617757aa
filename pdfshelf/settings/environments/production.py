"""This file contains all the settings used in production.

This file is required and if development.py is present these
values are overridden.
"""

from pdfshelf.settings.components import config

DEBUG = False

ALLOWED_HOSTS = [
    config('DOMAIN_NAME'),
]

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_REFERRER_POLICY = 'same-origin'
