"""Shared fixtures for opsportal tests."""
import uuid
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from opsportal.estimating.services import create_estimate, transition_status


@pytest.fixture
def user(db):
    """A staff user acting on estimates."""
    User = get_user_model()
    return User.objects.create_user(
        username='estimator',
        email='estimator@example.com',
        password='testpass123',
    )


@pytest.fixture
def client_id():
    return uuid.uuid4()


@pytest.fixture
def line_items():
    """Labor 2 x 100 and Materials 1 x 50: subtotal 250."""
    return [
        {'description': 'Labor', 'quantity': Decimal('2'), 'unit_price': Decimal('100')},
        {'description': 'Materials', 'quantity': Decimal('1'), 'unit_price': Decimal('50')},
    ]


@pytest.fixture
def estimate(user, client_id, line_items):
    """A draft estimate with tax 8%: 250 + 20 = 270."""
    return create_estimate(
        client_id=client_id,
        title='Kitchen remodel',
        description='Cabinets and counters',
        line_items=line_items,
        tax_rate=Decimal('0.08'),
        created_by=user,
    )


@pytest.fixture
def approved_estimate(estimate, user):
    """The estimate fixture moved to approved."""
    return transition_status(estimate.pk, 'approved', actor=user)
