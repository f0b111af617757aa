"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.
"""

from django.contrib import admin
from django.urls import include, path

from pdfshelf.apps.documents import urls as documents_urls

admin.autodiscover()

urlpatterns = [
    # Apps:
    path('', include(documents_urls, namespace='documents')),

    # django-admin:
    path('admin/', admin.site.urls),
]
