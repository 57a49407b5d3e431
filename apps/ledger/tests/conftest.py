import pytest
from collections import defaultdict
from decimal import Decimal
from django.core.cache import caches
from apps.ledger.cache import LocalFallbackCache
from apps.ledger.entities import PurchaseInput
from apps.ledger.exceptions import TransportError
from apps.ledger.session import LedgerSession
from apps.ledger.sync import SyncService


class FakeRecordStore:
    """
    In-process stand-in for RecordStoreClient.

    Set ``online = False`` to make every call raise TransportError.
    ``before_call(action, kind)`` runs ahead of each call, before the
    online check, so tests can observe state at the moment of the request.
    """

    def __init__(self):
        self.online = True
        self.rows = defaultdict(list)
        self.calls = []
        self.before_call = None

    def _call(self, action, kind):
        self.calls.append((action, kind.name))
        if self.before_call is not None:
            self.before_call(action, kind)
        if not self.online:
            raise TransportError("Record Store unreachable")

    def list(self, kind):
        self._call('list', kind)
        return list(self.rows[kind.name])

    def create(self, kind, record):
        self._call('create', kind)
        self.rows[kind.name].insert(0, record)

    def update(self, kind, record):
        self._call('update', kind)
        self.rows[kind.name] = [
            record if existing.id == record.id else existing
            for existing in self.rows[kind.name]
        ]

    def delete(self, kind, record_id):
        self._call('delete', kind)
        self.rows[kind.name] = [
            existing for existing in self.rows[kind.name] if existing.id != record_id
        ]


@pytest.fixture(autouse=True)
def clear_ledger_cache():
    """The in-memory test cache outlives a single test."""
    caches['ledger'].clear()
    yield
    caches['ledger'].clear()


@pytest.fixture
def fallback_cache():
    """A fresh LocalFallbackCache (own subscriber list) over the test cache."""
    return LocalFallbackCache('ledger')


@pytest.fixture
def remote():
    return FakeRecordStore()


@pytest.fixture
def sync_service(remote, fallback_cache):
    service = SyncService(remote, fallback_cache)
    yield service
    service.close()


@pytest.fixture
def session(remote, fallback_cache):
    """A ledger session over the fake Record Store; passphrase 'open sesame'."""
    ledger = LedgerSession(gateway=remote, cache=fallback_cache, default_passphrase='open sesame')
    yield ledger
    ledger.close()


@pytest.fixture
def make_purchase():
    """Build PurchaseInput records with sensible defaults."""

    def _make(id='p-1', date='2024-03-01T08:30:00.000Z', count=10, price='2.00', client='Alice'):
        price = Decimal(price)
        return PurchaseInput(
            id=id,
            date=date,
            count=count,
            price_per_unit=price,
            total_price=count * price,
            client_name=client,
        )

    return _make
