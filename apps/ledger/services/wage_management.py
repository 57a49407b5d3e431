"""Labour wage service - wages paid to workers."""

from dataclasses import replace

from apps.records.timestamps import now_timestamp
from apps.ledger.entities import LABOUR_WAGES, LabourWage, new_record_id
from apps.ledger.exceptions import NotFoundError
from .validation import amount, required_text


def _validated_fields(worker_name, days, rate_per_day):
    worker_name = required_text(worker_name, field='worker_name', label='Worker name')
    days = amount(days, field='days', label='Days', allow_zero=False)
    rate_per_day = amount(rate_per_day, field='rate_per_day', label='Rate per day')
    return {
        'worker_name': worker_name,
        'days': days,
        'rate_per_day': rate_per_day,
        'total_wage': days * rate_per_day,
    }


def record_wage(session, *, worker_name, days, rate_per_day):
    """
    Record a wage payment.

    Returns:
        tuple: (LabourWage, SyncOutcome)

    Raises:
        ValidationError: If a field is missing or out of range
    """
    fields = _validated_fields(worker_name, days, rate_per_day)
    record = LabourWage(id=new_record_id(), date=now_timestamp(), **fields)
    outcome = session.sync.create(LABOUR_WAGES, record)
    return record, outcome


def revise_wage(session, record_id, *, worker_name, days, rate_per_day):
    """
    Replace the editable fields of a labour wage (id and date are kept).

    Raises:
        ValidationError: If a field is missing or out of range
        NotFoundError: If the session has no labour wage with this id
    """
    fields = _validated_fields(worker_name, days, rate_per_day)
    existing = next((record for record in session.labour_wages if record.id == record_id), None)
    if existing is None:
        raise NotFoundError(f"Labour wage {record_id} not found")

    record = replace(existing, **fields)
    outcome = session.sync.update(LABOUR_WAGES, record)
    return record, outcome


def remove_wage(session, record_id):
    return session.sync.delete(LABOUR_WAGES, record_id)
