"""
Domain exceptions for reports app.

Exception Hierarchy:
    ReportsServiceError (base)
    ├── InvalidFilterError
    └── InvalidAdjustmentError
"""


class ReportsServiceError(Exception):
    """
    Base exception for all reports errors.

        try:
            filters = parse_report_filter(params)
        except ReportsServiceError as e:
            show_error(str(e))
    """

    pass


class InvalidFilterError(ReportsServiceError):
    """
    Raised when a filter context is malformed.

    Example:
        raise InvalidFilterError("dateFrom must be on or before dateTo")
    """

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}


class InvalidAdjustmentError(ReportsServiceError):
    """
    Raised when a "reduce coconut count" amount is rejected.

    The amount must be a positive whole number and the accumulated
    reduction may not exceed the filtered coconut count.
    """

    pass
