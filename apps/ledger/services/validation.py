"""Field checks shared by the ledger services. All raise ValidationError."""

from decimal import Decimal

from apps.ledger.entities import to_decimal
from apps.ledger.exceptions import ParseError, ValidationError

# Record Store amounts hold at most 10 integer digits
MAX_AMOUNT = Decimal("1e10")


def positive_whole_number(value, *, field, label):
    """Return ``value`` as an int > 0."""
    try:
        number = to_decimal(value.strip() if isinstance(value, str) else value)
    except ParseError:
        raise ValidationError(f"{label} must be a whole number", field=field) from None
    if number != number.to_integral_value() or number <= 0:
        raise ValidationError(f"{label} must be a positive whole number", field=field)
    return int(number)


def amount(value, *, field, label, allow_zero=True, places=2):
    """
    Return ``value`` as a Decimal.

    Args:
        allow_zero: Accept 0 (prices and rates) or require > 0 (quantities).
        places: Maximum decimal places, or None for no limit.
    """
    try:
        number = to_decimal(value.strip() if isinstance(value, str) else value)
    except ParseError:
        raise ValidationError(f"{label} must be a number", field=field) from None
    if number < 0 or (number == 0 and not allow_zero):
        qualifier = "zero or more" if allow_zero else "greater than zero"
        raise ValidationError(f"{label} must be {qualifier}", field=field)
    if number >= MAX_AMOUNT:
        raise ValidationError(f"{label} is too large", field=field)
    if places is not None:
        if number != number.quantize(Decimal(1).scaleb(-places)):
            raise ValidationError(f"{label} allows at most {places} decimal places", field=field)
    return number


def required_text(value, *, field, label):
    """Return ``value`` stripped; blank is rejected."""
    text = value.strip() if isinstance(value, str) else ''
    if not text:
        raise ValidationError(f"{label} is required", field=field)
    return text


def choice(value, enum, *, field, label):
    try:
        return enum(value).value
    except ValueError:
        options = ', '.join(member.value for member in enum)
        raise ValidationError(f"{label} must be one of: {options}", field=field) from None
