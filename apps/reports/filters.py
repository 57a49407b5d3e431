"""Filter context applied to every report."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from django.utils import timezone

ALL = 'all'


@dataclass(frozen=True)
class ReportFilter:
    """
    Which records a report covers.

    A record matches when its calendar date (in the configured TIME_ZONE)
    falls in ``year`` (unless 'all') and within the inclusive
    ``date_from``..``date_to`` range. ``product_type`` narrows outputs only.
    Records with an unreadable date match only the empty filter.
    """
    year: str = ALL
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    product_type: Optional[str] = None

    @property
    def is_empty(self):
        return self.year == ALL and self.date_from is None and self.date_to is None

    def matches_date(self, record):
        if self.is_empty:
            return True
        moment = record.timestamp
        if moment is None:
            return False
        day = timezone.localtime(moment).date()
        if self.year != ALL and day.year != int(self.year):
            return False
        if self.date_from is not None and day < self.date_from:
            return False
        if self.date_to is not None and day > self.date_to:
            return False
        return True

    def matches_output(self, output):
        if self.product_type is not None and output.product_type != self.product_type:
            return False
        return self.matches_date(output)
