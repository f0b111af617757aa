"""Cross-origin access for the browser front end.

The front end is served from its own origin and calls the JSON API and
the PDF route directly, so both need CORS headers.
"""

from decouple import Csv

from pdfshelf.settings.components import config

CORS_ALLOWED_ORIGINS = config(
    'CORS_ALLOWED_ORIGINS',
    cast=Csv(),
    default='http://localhost:3000,http://localhost:5173',
)

CORS_URLS_REGEX = r'^/(api|uploads)/.*$'
