"""
Report dashboard.

Binds a LedgerSession to a filter context and keeps the two pieces of
report state that are not derived from records: the capital balance most
recently broadcast by the capital panel, and the session-local "reduced
count" correction applied to the coconuts-bought figure.
"""
import logging

from apps.ledger.entities import to_decimal
from apps.ledger.exceptions import CapitalLockedError, ParseError
from .analytics import ReportQueries
from .exceptions import InvalidAdjustmentError
from .filters import ReportFilter

logger = logging.getLogger(__name__)


class ReportDashboard:
    """
    Usage:
        dashboard = ReportDashboard(session, ReportFilter(year='2024'))
        dashboard.reduce_coconut_count(50)
        data = dashboard.summary()
        dashboard.close()
    """

    def __init__(self, session, filters=None):
        self.session = session
        self.filters = filters or ReportFilter()
        self.reduced_count = 0
        self.capital = session.capital.balance
        self._unsubscribe = session.capital.subscribe(self._on_capital_change)

    def close(self):
        self._unsubscribe()

    def apply_filters(self, filters):
        self.filters = filters

    def reduce_coconut_count(self, amount):
        """
        Lower the displayed coconuts-bought figure by ``amount``.

        Raises:
            InvalidAdjustmentError: If ``amount`` is not a positive whole
                number, or the total reduction would exceed the filtered count.
        """
        try:
            number = to_decimal(amount.strip() if isinstance(amount, str) else amount)
        except ParseError:
            raise InvalidAdjustmentError("Reduction must be a whole number") from None
        if number != number.to_integral_value() or number <= 0:
            raise InvalidAdjustmentError("Reduction must be a positive whole number")

        total = ReportQueries.total_coconut_count(self.session.purchase_inputs, self.filters)
        if self.reduced_count + int(number) > total:
            raise InvalidAdjustmentError(
                f"Cannot reduce by {int(number)}: only {total - self.reduced_count} coconuts remain"
            )
        self.reduced_count += int(number)
        logger.info("Coconut count reduced by %s (total reduction %s)", int(number), self.reduced_count)
        return self.coconuts_bought()

    def reset_reduction(self):
        self.reduced_count = 0

    def coconuts_bought(self):
        return ReportQueries.coconuts_bought(
            self.session.purchase_inputs, self.filters, self.reduced_count
        )

    def visible_capital(self):
        """
        Capital as shown on the dashboard.

        Raises:
            CapitalLockedError: If the capital panel is locked.
        """
        if not self.session.capital.is_unlocked:
            raise CapitalLockedError("Capital is locked")
        return self.capital

    def summary(self):
        """
        Every aggregate for the current filter context.

        Capital is included only while the capital panel is unlocked.
        """
        session = self.session
        data = ReportQueries.financial_summary(
            session.outputs, session.purchase_inputs, session.labour_wages, self.filters
        )
        data.update(ReportQueries.product_breakdown(session.outputs, self.filters))
        data['cost_breakdown'] = ReportQueries.cost_breakdown(
            session.outputs, session.purchase_inputs, session.labour_wages, self.filters
        )
        data['coconuts_bought'] = self.coconuts_bought()
        data['capital'] = self.capital if session.capital.is_unlocked else None
        return data

    def _on_capital_change(self, balance):
        self.capital = balance
