from django.urls import path

from pdfshelf.apps.documents import views

app_name = 'documents'

urlpatterns = [
    path('api/upload', views.upload_view, name='upload'),
    path('api/pdfs', views.list_view, name='list'),
    path('api/pdf/<str:document_id>', views.delete_view, name='delete'),
    path('uploads/<str:storage_key>', views.binary_view, name='binary'),
]
