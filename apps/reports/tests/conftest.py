import pytest
from decimal import Decimal
from django.core.cache import caches
from apps.ledger.cache import LocalFallbackCache
from apps.ledger.entities import LabourWage, OutputProduct, PurchaseInput
from apps.ledger.gateway import RecordStoreClient
from apps.ledger.session import LedgerSession


@pytest.fixture(autouse=True)
def clear_ledger_cache():
    caches['ledger'].clear()
    yield
    caches['ledger'].clear()


@pytest.fixture
def fallback_cache():
    return LocalFallbackCache('ledger')


@pytest.fixture
def offline_session(fallback_cache):
    """Local-only session (no Record Store configured); passphrase 'open sesame'."""
    session = LedgerSession(
        gateway=RecordStoreClient(base_url=None),
        cache=fallback_cache,
        default_passphrase='open sesame',
    )
    yield session
    session.close()


# =============================================================================
# Record factories
# =============================================================================

@pytest.fixture
def purchase():
    counter = iter(range(1, 1000))

    def _make(date, count=10, price='2.00'):
        price = Decimal(price)
        return PurchaseInput(
            id=f'p-{next(counter)}',
            date=date,
            count=count,
            price_per_unit=price,
            total_price=count * price,
            client_name='Alice',
        )

    return _make


@pytest.fixture
def wage():
    counter = iter(range(1, 1000))

    def _make(date, days='1', rate='100'):
        days, rate = Decimal(days), Decimal(rate)
        return LabourWage(
            id=f'w-{next(counter)}',
            date=date,
            worker_name='Ravi',
            days=days,
            rate_per_day=rate,
            total_wage=days * rate,
        )

    return _make


@pytest.fixture
def output():
    counter = iter(range(1, 1000))

    def _make(date, product_type, quantity, price):
        quantity, price = Decimal(quantity), Decimal(price)
        if product_type == 'husk':
            measures = {'loads': quantity, 'price_per_load': price}
        else:
            measures = {'weight': quantity, 'price_per_kg': price}
        return OutputProduct(
            id=f'o-{next(counter)}',
            date=date,
            product_type=product_type,
            total_price=quantity * price,
            **measures,
        )

    return _make
