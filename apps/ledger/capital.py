"""
Capital panel.

The starting capital is a single running balance kept in the Local
Fallback Cache, never on the server. Purchases deduct from it as they are
recorded. Viewing or editing it requires a shared plaintext passphrase;
this is a convenience gate for a single trusted operator, not a security
boundary.
"""
import logging
from decimal import Decimal

from .entities import to_decimal
from .exceptions import CapitalLockedError, ParseError, ValidationError

logger = logging.getLogger(__name__)

CAPITAL_KEY = "initialCapital"
PASSPHRASE_KEY = "capitalPassword"


class CapitalPanel:
    """
    Passphrase-gated view over the capital balance.

    Listeners registered with ``subscribe`` receive every new balance,
    whether it came from this session (a purchase deduction, a settings
    edit) or from another session writing the same cache.
    """

    def __init__(self, cache, default_passphrase):
        self.cache = cache
        if cache.get(PASSPHRASE_KEY) is None:
            # First run fixes the passphrase
            cache.set(PASSPHRASE_KEY, default_passphrase)
        self._balance = cache.load_decimal(CAPITAL_KEY)
        self._unlocked = False
        self._listeners = []
        self._unsubscribe = cache.subscribe(CAPITAL_KEY, self._on_capital_change)

    @property
    def balance(self) -> Decimal:
        """Current balance, regardless of the lock (used for bookkeeping)."""
        return self._balance

    @property
    def is_unlocked(self) -> bool:
        return self._unlocked

    @property
    def value(self) -> Decimal:
        """
        Balance as shown to the user.

        Raises:
            CapitalLockedError: If the panel is locked.
        """
        if not self._unlocked:
            raise CapitalLockedError("Capital is locked")
        return self._balance

    def subscribe(self, callback):
        """Register ``callback(balance)``; returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def close(self):
        self._unsubscribe()

    # =========================================================================
    # Lock
    # =========================================================================

    def unlock(self, passphrase) -> bool:
        """Unlock if ``passphrase`` equals the stored one; otherwise nothing changes."""
        if passphrase == self.cache.get(PASSPHRASE_KEY):
            self._unlocked = True
            return True
        return False

    def lock(self):
        self._unlocked = False

    # =========================================================================
    # Mutations
    # =========================================================================

    def deduct(self, amount) -> Decimal:
        """Subtract ``amount`` from the balance and broadcast the result."""
        new_balance = self._balance - amount
        self.cache.store_decimal(CAPITAL_KEY, new_balance)
        return new_balance

    def update_settings(self, *, capital=None, passphrase=None, confirm_passphrase=None):
        """
        Edit the capital balance and/or the passphrase.

        Args:
            capital: New balance, must be >= 0.
            passphrase: New passphrase; must equal ``confirm_passphrase``.

        Raises:
            CapitalLockedError: If the panel is locked.
            ValidationError: On a negative or non-numeric capital, or a
                passphrase confirmation mismatch. Nothing is saved.
        """
        if not self._unlocked:
            raise CapitalLockedError("Unlock capital before changing settings")

        if passphrase and passphrase != confirm_passphrase:
            raise ValidationError("Passphrases do not match", field="passphrase")

        new_capital = None
        if capital is not None and capital != '':
            try:
                new_capital = to_decimal(capital)
            except ParseError:
                raise ValidationError("Capital must be a number", field="capital") from None
            if new_capital < 0:
                raise ValidationError("Capital cannot be negative", field="capital")

        if new_capital is not None:
            self.cache.store_decimal(CAPITAL_KEY, new_capital)
        if passphrase:
            self.cache.set(PASSPHRASE_KEY, passphrase)
            logger.info("Capital passphrase changed")

    def _on_capital_change(self, key, value):
        try:
            self._balance = to_decimal(value)
        except ParseError as exc:
            logger.warning("Ignoring invalid capital change notification: %s", exc)
            return
        for callback in list(self._listeners):
            callback(self._balance)
