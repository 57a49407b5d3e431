"""Purchase input service - coconuts bought from clients."""

from dataclasses import replace

from apps.records.timestamps import now_timestamp
from apps.ledger.entities import PURCHASE_INPUTS, PaymentStatus, PurchaseInput, new_record_id
from apps.ledger.exceptions import NotFoundError
from .validation import amount, choice, positive_whole_number, required_text


def _validated_fields(count, price_per_unit, client_name, payment_status):
    count = positive_whole_number(count, field='count', label='Count')
    price_per_unit = amount(price_per_unit, field='price_per_unit', label='Price per unit')
    client_name = required_text(client_name, field='client_name', label='Client')
    payment_status = choice(
        payment_status or PaymentStatus.PENDING.value,
        PaymentStatus,
        field='payment_status',
        label='Payment status',
    )
    return {
        'count': count,
        'price_per_unit': price_per_unit,
        'total_price': count * price_per_unit,
        'client_name': client_name,
        'payment_status': payment_status,
    }


def record_purchase(
    session,
    *,
    count,
    price_per_unit,
    client_name,
    payment_status=PaymentStatus.PENDING.value
):
    """
    Record coconuts bought from a client.

    This operation:
    1. Validates the form fields (nothing changes on failure)
    2. Computes total_price = count × price_per_unit
    3. Deducts total_price from capital and broadcasts the new balance
    4. Applies the record to the session, then persists best-effort

    Args:
        session: LedgerSession to record into
        count: Number of coconuts (> 0)
        price_per_unit: Price per coconut (>= 0, at most 2 decimals)
        client_name: Name of the client bought from
        payment_status: pending, paid or partial

    Returns:
        tuple: (PurchaseInput, SyncOutcome)

    Raises:
        ValidationError: If a field is missing or out of range
    """
    fields = _validated_fields(count, price_per_unit, client_name, payment_status)
    record = PurchaseInput(id=new_record_id(), date=now_timestamp(), **fields)

    session.capital.deduct(record.total_price)
    outcome = session.sync.create(PURCHASE_INPUTS, record)
    return record, outcome


def revise_purchase(
    session,
    record_id,
    *,
    count,
    price_per_unit,
    client_name,
    payment_status=PaymentStatus.PENDING.value
):
    """
    Replace the editable fields of a purchase input (id and date are kept).

    Capital is not adjusted for edits.

    Raises:
        ValidationError: If a field is missing or out of range
        NotFoundError: If the session has no purchase input with this id
    """
    fields = _validated_fields(count, price_per_unit, client_name, payment_status)
    existing = next((record for record in session.purchase_inputs if record.id == record_id), None)
    if existing is None:
        raise NotFoundError(f"Purchase input {record_id} not found")

    record = replace(existing, **fields)
    outcome = session.sync.update(PURCHASE_INPUTS, record)
    return record, outcome


def remove_purchase(session, record_id):
    """Delete a purchase input; unknown ids leave the set unchanged."""
    return session.sync.delete(PURCHASE_INPUTS, record_id)
