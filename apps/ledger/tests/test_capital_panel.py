import pytest
from decimal import Decimal
from apps.ledger.capital import CAPITAL_KEY, PASSPHRASE_KEY, CapitalPanel
from apps.ledger.exceptions import CapitalLockedError, ValidationError


@pytest.fixture
def panel(fallback_cache):
    capital = CapitalPanel(fallback_cache, 'open sesame')
    yield capital
    capital.close()


class TestFirstRun:

    def test_default_passphrase_is_stored(self, panel, fallback_cache):
        assert fallback_cache.get(PASSPHRASE_KEY) == 'open sesame'

    def test_stored_passphrase_wins_over_default(self, fallback_cache):
        fallback_cache.set(PASSPHRASE_KEY, 'chosen')

        panel = CapitalPanel(fallback_cache, 'open sesame')

        assert panel.unlock('open sesame') is False
        assert panel.unlock('chosen') is True
        panel.close()

    def test_balance_starts_at_zero(self, panel):
        assert panel.balance == Decimal('0')


class TestLock:

    def test_wrong_passphrase_keeps_panel_locked(self, panel):
        assert panel.unlock('guess') is False
        assert panel.is_unlocked is False
        with pytest.raises(CapitalLockedError):
            panel.value

    def test_correct_passphrase_shows_value(self, panel, fallback_cache):
        fallback_cache.store_decimal(CAPITAL_KEY, Decimal('500'))

        assert panel.unlock('open sesame') is True
        assert panel.value == Decimal('500')

    def test_lock_hides_value_again(self, panel):
        panel.unlock('open sesame')
        panel.lock()

        with pytest.raises(CapitalLockedError):
            panel.value


class TestSettings:

    def test_settings_require_unlock(self, panel):
        with pytest.raises(CapitalLockedError):
            panel.update_settings(capital='100')
        assert panel.balance == Decimal('0')

    def test_set_capital(self, panel):
        panel.unlock('open sesame')
        seen = []
        panel.subscribe(seen.append)

        panel.update_settings(capital='2500.50')

        assert panel.value == Decimal('2500.50')
        assert seen == [Decimal('2500.50')]

    @pytest.mark.parametrize('capital', ['-1', 'plenty'])
    def test_invalid_capital(self, panel, capital):
        panel.unlock('open sesame')

        with pytest.raises(ValidationError):
            panel.update_settings(capital=capital)
        assert panel.value == Decimal('0')

    def test_passphrase_change(self, panel):
        panel.unlock('open sesame')

        panel.update_settings(passphrase='new words', confirm_passphrase='new words')
        panel.lock()

        assert panel.unlock('open sesame') is False
        assert panel.unlock('new words') is True

    def test_passphrase_mismatch_saves_nothing(self, panel, fallback_cache):
        panel.unlock('open sesame')

        with pytest.raises(ValidationError):
            panel.update_settings(capital='50', passphrase='a', confirm_passphrase='b')

        assert panel.value == Decimal('0')
        assert fallback_cache.get(PASSPHRASE_KEY) == 'open sesame'


class TestBroadcast:

    def test_deduction_reaches_other_panels(self, panel, fallback_cache):
        other = CapitalPanel(fallback_cache, 'open sesame')
        seen = []
        other.subscribe(seen.append)
        fallback_cache.store_decimal(CAPITAL_KEY, Decimal('100'))

        panel.deduct(Decimal('30'))

        assert other.balance == Decimal('70')
        assert seen == [Decimal('100'), Decimal('70')]
        other.close()

    def test_unsubscribed_listener(self, panel):
        seen = []
        unsubscribe = panel.subscribe(seen.append)
        unsubscribe()

        panel.deduct(Decimal('1'))

        assert seen == []
        assert panel.balance == Decimal('-1')
