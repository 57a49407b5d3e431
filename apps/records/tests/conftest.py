import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from apps.records.models import CoconutInput, LabourWage, Client, PaymentStatus
from apps.records.services import RecordStore


@pytest.fixture
def api_client():
    """Return an API client (the Record Store has no authentication)."""
    return APIClient()


@pytest.fixture
def record_store(db):
    """Return an initialized Record Store handle."""
    return RecordStore().initialize()


# =============================================================================
# Rows
# =============================================================================

@pytest.fixture
def coconut_input(db):
    """Create a purchase input of 100 coconuts at 2.50."""
    return CoconutInput.objects.create(
        id='input-1',
        date='2024-03-01T08:30:00.000Z',
        count=100,
        price_per_unit=Decimal('2.50'),
        total_price=Decimal('250.00'),
        client_name='Alice',
        payment_status=PaymentStatus.PENDING,
    )


@pytest.fixture
def older_coconut_input(db):
    """Create an older purchase input stored as a bare date."""
    return CoconutInput.objects.create(
        id='input-0',
        date='2023-12-31',
        count=40,
        price_per_unit=Decimal('3.00'),
        total_price=Decimal('120.00'),
        client_name='Bob',
        payment_status=PaymentStatus.PAID,
    )


@pytest.fixture
def labour_wage(db):
    """Create a wage of 2.5 days at 80.00."""
    return LabourWage.objects.create(
        id='wage-1',
        date='2024-03-02T17:00:00.000Z',
        worker_name='Ravi',
        days=Decimal('2.50'),
        rate_per_day=Decimal('80.00'),
        total_wage=Decimal('200.00'),
    )


@pytest.fixture
def client_alice(db):
    return Client.objects.create(id='client-alice', name='Alice')


@pytest.fixture
def client_bob(db):
    return Client.objects.create(id='client-bob', name='Bob')


# =============================================================================
# Payloads
# =============================================================================

@pytest.fixture
def coconut_payload():
    """Valid POST /api/coconut body."""
    return {
        'id': 'input-new',
        'date': '2024-04-10T09:15:30.250Z',
        'count': 100,
        'pricePerUnit': 2.5,
        'totalPrice': 250.0,
        'clientName': 'Alice',
        'paymentStatus': 'paid',
    }


@pytest.fixture
def labour_payload():
    """Valid POST /api/labour body."""
    return {
        'id': 'wage-new',
        'date': '2024-04-10T18:00:00.000Z',
        'workerName': 'Meena',
        'days': 3,
        'ratePerDay': 75.5,
        'totalWage': 226.5,
    }
