"""Tests for the documents HTTP API."""

from datetime import timedelta
from typing import Final
from unittest.mock import patch

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone

from pdfshelf.apps.documents.models import Document


def _pdf_upload(content, name='report.pdf', content_type='application/pdf'):
    return SimpleUploadedFile(name, content, content_type=content_type)


@pytest.mark.django_db
class TestUploadView:
    """Tests for POST api/upload."""

    def test_upload_pdf(self, client, documents_config, make_pdf):
        """Test a valid PDF is stored and described in the response."""
        response = client.post(
            reverse('documents:upload'),
            {'pdf': _pdf_upload(make_pdf(1024))},
        )

        assert response.status_code == 200
        body = response.json()
        assert body['message'] == 'PDF uploaded successfully'
        assert body['pdf']['original_name'] == 'report.pdf'
        assert body['pdf']['size_bytes'] == 1024
        assert body['pdf']['url'] == (
            '/uploads/{0}'.format(body['pdf']['storage_key'])
        )
        assert Document.objects.filter(id=body['pdf']['id']).exists()

    def test_upload_without_file(self, client, documents_config):
        """Test request without the pdf field."""
        response = client.post(reverse('documents:upload'), {})

        assert response.status_code == 400
        assert response.json() == {'error': 'No file uploaded'}

    def test_upload_wrong_field_name(self, client, documents_config, make_pdf):
        """Test file under another field name is ignored."""
        response = client.post(
            reverse('documents:upload'),
            {'file': _pdf_upload(make_pdf())},
        )

        assert response.status_code == 400

    def test_upload_non_pdf(self, client, documents_config):
        """Test text files are rejected with no side effects."""
        response = client.post(
            reverse('documents:upload'),
            {'pdf': _pdf_upload(b'hello', 'notes.txt', 'text/plain')},
        )

        assert response.status_code == 400
        assert 'error' in response.json()
        assert Document.objects.count() == 0
        assert documents_config.binary_store.keys() == []

    def test_upload_storage_failure(self, client, documents_config, make_pdf):
        """Test storage failures surface as 500."""
        with patch.object(
            documents_config.binary_store.storage,
            'save',
            side_effect=OSError('disk full'),
        ):
            response = client.post(
                reverse('documents:upload'),
                {'pdf': _pdf_upload(make_pdf())},
            )

        assert response.status_code == 500
        assert Document.objects.count() == 0

    def test_upload_requires_post(self, client, documents_config):
        """Test other methods are not allowed."""
        response = client.get(reverse('documents:upload'))

        assert response.status_code == 405


@pytest.mark.django_db
class TestListView:
    """Tests for GET api/pdfs."""

    def test_list_empty(self, client, documents_config):
        """Test empty store returns an empty array."""
        response = client.get(reverse('documents:list'))

        assert response.status_code == 200
        assert response.json() == []

    def test_list_newest_first(self, client, documents_config):
        """Test records are returned by upload time, descending."""
        now = timezone.now()
        Document.objects.create(
            original_name='old.pdf',
            storage_key='key-old.pdf',
            size_bytes=10,
            uploaded_at=now - timedelta(days=1),
        )
        Document.objects.create(
            original_name='new.pdf',
            storage_key='key-new.pdf',
            size_bytes=20,
            uploaded_at=now,
        )

        response = client.get(reverse('documents:list'))

        names = [item['original_name'] for item in response.json()]
        assert names == ['new.pdf', 'old.pdf']


@pytest.mark.django_db
class TestDeleteView:
    """Tests for DELETE api/pdf/<id>."""

    def test_delete(self, client, documents_config, make_pdf):
        """Test deleting removes the record and the binary."""
        uploaded = client.post(
            reverse('documents:upload'),
            {'pdf': _pdf_upload(make_pdf())},
        ).json()['pdf']

        response = client.delete(
            reverse('documents:delete', args=[uploaded['id']]),
        )

        assert response.status_code == 200
        assert response.json() == {'message': 'PDF deleted successfully'}
        assert client.get(reverse('documents:list')).json() == []
        assert not documents_config.binary_store.exists(
            uploaded['storage_key'],
        )

    def test_delete_twice(self, client, documents_config, make_pdf):
        """Test second delete of the same id is 404."""
        uploaded = client.post(
            reverse('documents:upload'),
            {'pdf': _pdf_upload(make_pdf())},
        ).json()['pdf']
        url = reverse('documents:delete', args=[uploaded['id']])

        client.delete(url)
        response = client.delete(url)

        assert response.status_code == 404
        assert 'error' in response.json()

    @pytest.mark.parametrize('document_id', [
        '00000000-0000-0000-0000-000000000000',
        'not-a-uuid',
    ])
    def test_delete_unknown(self, client, documents_config, document_id):
        """Test unknown and malformed ids are 404."""
        response = client.delete(
            reverse('documents:delete', args=[document_id]),
        )

        assert response.status_code == 404


@pytest.mark.django_db
class TestBinaryView:
    """Tests for GET uploads/<storage_key>."""

    def test_fetch_binary(self, client, documents_config, make_pdf):
        """Test stored bytes are served inline as a PDF."""
        content = make_pdf(2048)
        uploaded = client.post(
            reverse('documents:upload'),
            {'pdf': _pdf_upload(content)},
        ).json()['pdf']

        response = client.get(uploaded['url'])

        assert response.status_code == 200
        assert response['Content-Type'] == 'application/pdf'
        assert response['Content-Disposition'].startswith('inline')
        assert b''.join(response.streaming_content) == content
        response.close()

    def test_fetch_after_delete(self, client, documents_config, make_pdf):
        """Test deleted binaries are gone."""
        uploaded = client.post(
            reverse('documents:upload'),
            {'pdf': _pdf_upload(make_pdf())},
        ).json()['pdf']
        client.delete(reverse('documents:delete', args=[uploaded['id']]))

        response = client.get(uploaded['url'])

        assert response.status_code == 404

    def test_fetch_missing(self, client, documents_config):
        """Test unknown keys are 404."""
        response = client.get(reverse('documents:binary', args=['nope.pdf']))

        assert response.status_code == 404


@pytest.mark.django_db
class TestCrossOrigin:
    """Tests for CORS headers on the API."""

    _FRONTEND: Final = 'http://localhost:3000'

    @pytest.fixture(autouse=True)
    def _allowed_origins(self, settings):
        settings.CORS_ALLOWED_ORIGINS = [self._FRONTEND]

    def test_allowed_origin(self, client, documents_config):
        """Test the front end origin is allowed to read responses."""
        response = client.get(
            reverse('documents:list'),
            HTTP_ORIGIN=self._FRONTEND,
        )

        assert response['Access-Control-Allow-Origin'] == self._FRONTEND

    def test_unknown_origin(self, client, documents_config):
        """Test other origins get no CORS headers."""
        response = client.get(
            reverse('documents:list'),
            HTTP_ORIGIN='http://evil.example',
        )

        assert 'Access-Control-Allow-Origin' not in response

    def test_delete_preflight(self, client, documents_config):
        """Test browsers may send cross-origin deletes."""
        response = client.options(
            reverse('documents:delete', args=['some-id']),
            HTTP_ORIGIN=self._FRONTEND,
            HTTP_ACCESS_CONTROL_REQUEST_METHOD='DELETE',
        )

        assert response.status_code == 200
        assert 'DELETE' in response['Access-Control-Allow-Methods']
