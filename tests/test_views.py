"""Tests for the estimates and invoices JSON API."""
import json
import uuid
from unittest import mock

import pytest
from django.db import IntegrityError

from opsportal.estimating.models import Estimate
from opsportal.estimating.services import transition_status
from opsportal.http import integrity_error_kind
from opsportal.invoicing.models import Invoice

class CheckViolation(Exception):
    """Stands in for a driver error carrying a SQLSTATE."""

    sqlstate = '23514'


ESTIMATE_PAYLOAD = {
    'title': 'Office wiring',
    'lineItems': [
        {'description': 'Labor', 'quantity': 2, 'unitPrice': 100},
        {'description': 'Materials', 'quantity': 1, 'unitPrice': 50},
    ],
    'taxRate': 0.08,
}


@pytest.fixture
def api(client, user):
    client.force_login(user)
    return client


def _post(client, url, body):
    return client.post(url, data=json.dumps(body), content_type='application/json')


def _patch(client, url, body):
    return client.patch(url, data=json.dumps(body), content_type='application/json')


@pytest.mark.django_db
class TestAuthentication:
    """The API requires an authenticated user."""

    def test_anonymous_gets_401(self, client):
        response = client.get('/api/estimates/')

        assert response.status_code == 401
        assert response.json() == {
            'success': False,
            'error': {'code': 'UNAUTHORIZED', 'message': 'Authentication required'},
        }

    def test_anonymous_cannot_convert(self, client, approved_estimate):
        response = client.post(f'/api/estimates/{approved_estimate.pk}/convert-to-invoice/')

        assert response.status_code == 401
        assert Invoice.objects.count() == 0


@pytest.mark.django_db
class TestEstimateCollection:
    """GET/POST /api/estimates/."""

    def test_create(self, api, client_id):
        response = _post(api, '/api/estimates/', {**ESTIMATE_PAYLOAD, 'clientId': str(client_id)})

        assert response.status_code == 201
        data = response.json()['data']
        assert data['estimateNumber'] == 'EST-1000'
        assert data['status'] == 'draft'
        assert data['subtotal'] == '250.0000'
        assert data['taxAmount'] == '20.0000'
        assert data['total'] == '270.0000'
        assert [item['description'] for item in data['lineItems']] == ['Labor', 'Materials']

    def test_create_validation_error(self, api, client_id):
        response = _post(api, '/api/estimates/', {'clientId': str(client_id), 'lineItems': []})

        assert response.status_code == 400
        body = response.json()
        assert body['success'] is False
        assert body['error']['code'] == 'VALIDATION_ERROR'
        assert body['error']['details']

    def test_malformed_json(self, api):
        response = api.post('/api/estimates/', data='{not json', content_type='application/json')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    def test_list_with_pagination(self, api, estimate):
        response = api.get('/api/estimates/?limit=10')

        assert response.status_code == 200
        body = response.json()
        assert [e['estimateNumber'] for e in body['data']] == ['EST-1000']
        assert body['meta'] == {'page': 1, 'limit': 10, 'total': 1, 'totalPages': 1}

    def test_list_filter_by_client(self, api, estimate):
        response = api.get(f'/api/estimates/?clientId={uuid.uuid4()}')
        assert response.json()['data'] == []

    def test_list_bad_client_id(self, api):
        response = api.get('/api/estimates/?clientId=nope')
        assert response.status_code == 400

    def test_method_not_allowed(self, api):
        response = api.put('/api/estimates/')

        assert response.status_code == 405
        assert response['Allow'] == 'GET, POST'


@pytest.mark.django_db
class TestEstimateDetail:
    """GET/PATCH/DELETE /api/estimates/<id>/."""

    def test_get(self, api, estimate):
        response = api.get(f'/api/estimates/{estimate.pk}/')

        assert response.status_code == 200
        data = response.json()['data']
        assert data['id'] == str(estimate.pk)
        assert len(data['lineItems']) == 2
        assert data['lineItems'][0]['unitPrice'] == '100.00'

    def test_get_missing(self, api):
        response = api.get(f'/api/estimates/{uuid.uuid4()}/')

        assert response.status_code == 404
        assert response.json()['error'] == {'code': 'NOT_FOUND', 'message': 'Estimate not found'}

    def test_patch_content(self, api, estimate):
        response = _patch(api, f'/api/estimates/{estimate.pk}/', {'title': 'Renamed'})

        assert response.status_code == 200
        assert response.json()['data']['title'] == 'Renamed'

    def test_patch_status(self, api, estimate):
        response = _patch(api, f'/api/estimates/{estimate.pk}/', {'status': 'sent'})

        assert response.status_code == 200
        assert response.json()['data']['status'] == 'sent'

    def test_patch_locked_estimate(self, api, approved_estimate):
        response = _patch(api, f'/api/estimates/{approved_estimate.pk}/', {'title': 'Nope'})

        assert response.status_code == 400
        assert response.json()['error']['message'] == 'Cannot edit approved/rejected estimates'

    def test_delete(self, api, estimate):
        response = api.delete(f'/api/estimates/{estimate.pk}/')

        assert response.status_code == 200
        assert not Estimate.objects.filter(pk=estimate.pk).exists()


@pytest.mark.django_db
class TestConvertToInvoice:
    """POST /api/estimates/<id>/convert-to-invoice/."""

    def test_convert(self, api, approved_estimate):
        response = api.post(f'/api/estimates/{approved_estimate.pk}/convert-to-invoice/')

        assert response.status_code == 201
        data = response.json()['data']
        assert data['invoiceNumber'] == 'INV-1000'
        assert data['message'] == 'Estimate converted to invoice successfully'
        assert Invoice.objects.filter(pk=data['invoiceId']).exists()

    def test_convert_not_approved(self, api, estimate):
        transition_status(estimate.pk, 'sent')

        response = api.post(f'/api/estimates/{estimate.pk}/convert-to-invoice/')

        assert response.status_code == 400
        assert response.json()['error'] == {
            'code': 'BAD_REQUEST',
            'message': 'Only approved estimates can be converted to invoices',
        }
        assert Invoice.objects.count() == 0

    def test_convert_missing(self, api):
        response = api.post(f'/api/estimates/{uuid.uuid4()}/convert-to-invoice/')
        assert response.status_code == 404

    def test_convert_twice(self, api, approved_estimate):
        api.post(f'/api/estimates/{approved_estimate.pk}/convert-to-invoice/')
        response = api.post(f'/api/estimates/{approved_estimate.pk}/convert-to-invoice/')

        assert response.status_code == 409
        assert response.json()['error']['code'] == 'CONFLICT'

    def test_get_not_allowed(self, api, approved_estimate):
        response = api.get(f'/api/estimates/{approved_estimate.pk}/convert-to-invoice/')
        assert response.status_code == 405


@pytest.mark.django_db
class TestInvoiceViews:
    """GET /api/invoices/ and /api/invoices/<id>/."""

    def test_list_and_detail(self, api, approved_estimate):
        converted = api.post(f'/api/estimates/{approved_estimate.pk}/convert-to-invoice/')
        invoice_id = converted.json()['data']['invoiceId']

        listing = api.get(f'/api/invoices/?estimateId={approved_estimate.pk}')
        assert [i['id'] for i in listing.json()['data']] == [invoice_id]

        detail = api.get(f'/api/invoices/{invoice_id}/')
        data = detail.json()['data']
        assert data['invoiceNumber'] == 'INV-1000'
        assert data['estimateId'] == str(approved_estimate.pk)
        assert data['total'] == '270.0000'
        assert [i['description'] for i in data['lineItems']] == ['Labor', 'Materials']

    def test_detail_missing(self, api):
        response = api.get(f'/api/invoices/{uuid.uuid4()}/')

        assert response.status_code == 404
        assert response.json()['error']['message'] == 'Invoice not found'


class TestIntegrityErrorKind:
    """Classification of database constraint failures."""

    @pytest.mark.parametrize('message, kind', [
        ('UNIQUE constraint failed: estimating_estimate.estimate_number', 'unique'),
        ('FOREIGN KEY constraint failed', 'foreign_key'),
        ('NOT NULL constraint failed: invoicing_invoice.due_date', 'not_null'),
        ('CHECK constraint failed: estimate_total_equals_subtotal_plus_tax', 'check'),
        ('something else', None),
    ])
    def test_sqlite_messages(self, message, kind):
        assert integrity_error_kind(IntegrityError(message)) == kind

    def test_postgres_sqlstate(self):
        exc = IntegrityError('new row violates check constraint')
        exc.__cause__ = CheckViolation()

        assert integrity_error_kind(exc) == 'check'


@pytest.mark.django_db
class TestIntegrityErrorResponses:
    """Only unique violations are reported as duplicates."""

    def _create_failing_with(self, api, client_id, message):
        with mock.patch(
            'opsportal.estimating.services.create_estimate',
            side_effect=IntegrityError(message),
        ):
            return _post(api, '/api/estimates/', {**ESTIMATE_PAYLOAD, 'clientId': str(client_id)})

    def test_unique_violation_is_409(self, api, client_id):
        response = self._create_failing_with(api, client_id, 'UNIQUE constraint failed: x.y')

        assert response.status_code == 409
        assert response.json()['error']['code'] == 'DUPLICATE_ENTRY'

    def test_check_violation_is_500(self, api, client_id):
        response = self._create_failing_with(api, client_id, 'CHECK constraint failed: x')

        assert response.status_code == 500
        assert response.json()['error']['code'] == 'INTERNAL_ERROR'

    def test_fractional_amounts_create(self, api, client_id):
        payload = {
            'clientId': str(client_id),
            'title': 'Fractional',
            'lineItems': [{'description': 'x', 'quantity': 0.1, 'unitPrice': 0.7}],
        }

        response = _post(api, '/api/estimates/', payload)

        assert response.status_code == 201
        assert response.json()['data']['subtotal'] == '0.0700'
