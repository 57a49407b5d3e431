import pytest
from decimal import Decimal
from apps.ledger import services
from apps.ledger.capital import CAPITAL_KEY
from apps.ledger.entities import OUTPUTS, PURCHASE_INPUTS
from apps.ledger.exceptions import CapitalLockedError
from apps.reports.dashboard import ReportDashboard
from apps.reports.exceptions import InvalidAdjustmentError
from apps.reports.filters import ReportFilter


@pytest.fixture
def dashboard(offline_session, fallback_cache):
    fallback_cache.store_decimal(CAPITAL_KEY, Decimal('1000'))
    board = ReportDashboard(offline_session)
    yield board
    board.close()


class TestCapital:

    def test_capital_follows_purchases(self, dashboard, offline_session):
        services.record_purchase(offline_session, count=100, price_per_unit='2.50', client_name='Alice')

        assert dashboard.capital == Decimal('750.00')

    def test_capital_hidden_while_locked(self, dashboard):
        with pytest.raises(CapitalLockedError):
            dashboard.visible_capital()
        assert dashboard.summary()['capital'] is None

    def test_capital_shown_once_unlocked(self, dashboard, offline_session):
        assert offline_session.capital.unlock('open sesame')

        assert dashboard.visible_capital() == Decimal('1000')
        assert dashboard.summary()['capital'] == Decimal('1000')

    def test_closed_dashboard_stops_following(self, dashboard, offline_session):
        dashboard.close()

        services.record_purchase(offline_session, count=1, price_per_unit='10', client_name='Alice')

        assert dashboard.capital == Decimal('1000')


class TestReduceCoconutCount:

    @pytest.fixture
    def stocked(self, dashboard, offline_session, purchase):
        offline_session.sync.create(PURCHASE_INPUTS, purchase('2024-05-01T08:00:00.000Z', count=100))
        offline_session.sync.create(PURCHASE_INPUTS, purchase('2023-05-01T08:00:00.000Z', count=40))
        return dashboard

    def test_reductions_accumulate(self, stocked):
        assert stocked.reduce_coconut_count(30) == 110
        assert stocked.reduce_coconut_count('10') == 100
        assert stocked.reduced_count == 40

    def test_reduction_cannot_exceed_filtered_count(self, stocked):
        stocked.apply_filters(ReportFilter(year='2023'))

        with pytest.raises(InvalidAdjustmentError):
            stocked.reduce_coconut_count(41)
        assert stocked.reduced_count == 0
        assert stocked.reduce_coconut_count(40) == 0

    @pytest.mark.parametrize('amount', [0, -5, '2.5', 'some', None])
    def test_invalid_amount(self, stocked, amount):
        with pytest.raises(InvalidAdjustmentError):
            stocked.reduce_coconut_count(amount)
        assert stocked.coconuts_bought() == 140

    def test_reset(self, stocked):
        stocked.reduce_coconut_count(100)
        stocked.reset_reduction()

        assert stocked.coconuts_bought() == 140

    def test_reduction_does_not_touch_records(self, stocked, offline_session):
        stocked.reduce_coconut_count(140)

        assert sum(record.count for record in offline_session.purchase_inputs) == 140


class TestSummary:

    def test_summary_combines_every_aggregate(self, dashboard, offline_session, purchase, output):
        offline_session.sync.create(PURCHASE_INPUTS, purchase('2024-05-01T08:00:00.000Z', count=10, price='2'))
        offline_session.replace_local(OUTPUTS, [output('2024-05-02T08:00:00.000Z', 'husk', '3', '40')])

        data = dashboard.summary()

        assert data['total_revenue'] == Decimal('120')
        assert data['total_costs'] == Decimal('20')
        assert data['net_profit'] == Decimal('100')
        assert data['husk_square_feet'] == Decimal('1890')
        assert data['coconuts_bought'] == 10
        assert [row['name'] for row in data['cost_breakdown']] == ['Revenue', 'Input Costs', 'Labour Costs']

    def test_summary_honours_filters(self, offline_session, purchase):
        offline_session.sync.create(PURCHASE_INPUTS, purchase('2022-12-31T12:00:00.000Z', count=5))
        offline_session.sync.create(PURCHASE_INPUTS, purchase('2023-01-01T00:00:00.000Z', count=7))
        board = ReportDashboard(offline_session, ReportFilter(year='2023'))

        assert board.summary()['coconuts_bought'] == 7
        board.close()
