"""
Record Store Services Module
=============================

This module provides the Record Store handle: durable persistence of
purchase inputs, labour wages and clients on top of the Django ORM.

Classes:
    RecordStore: Handle with an explicit initialize() step and per-row
        create/update/delete/list operations for the three record kinds.

Functions:
    get_record_store: Return the process-wide handle, initializing it on
        first use.

Example:
    Recording a purchase input::

        from decimal import Decimal
        from apps.records.services import get_record_store

        store = get_record_store()
        store.create_purchase_input(
            id='7d1c...',
            date='2024-03-01T08:30:00.000Z',
            count=100,
            price_per_unit=Decimal('2.50'),
            total_price=Decimal('250.00'),
            client_name='Alice',
        )

Note:
    Every operation is atomic per row; no multi-row transaction is needed.
    Identifiers are generated by the caller, never by the store.
"""

import logging

from django.db import connection

from .exceptions import MissingFieldsError, RecordNotFoundError, StateError
from .models import Client, CoconutInput, LabourWage, PaymentStatus

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Handle over the three Record Store tables.

    The handle starts uninitialized. ``initialize()`` checks that the
    backing tables exist; any operation issued before that raises
    ``StateError`` instead of failing somewhere inside the ORM.

    Methods:
        list_purchase_inputs / create_purchase_input /
        update_purchase_input / delete_purchase_input
        list_labour_wages / create_labour_wage /
        update_labour_wage / delete_labour_wage
        list_clients / create_client / delete_client
    """

    MODELS = (CoconutInput, LabourWage, Client)

    def __init__(self):
        self._initialized = False

    @property
    def is_initialized(self):
        return self._initialized

    def initialize(self):
        """
        Verify the backing tables and mark the handle ready.

        Raises:
            StateError: If any Record Store table is missing (migrations
                have not been applied).
        """
        existing = set(connection.introspection.table_names())
        missing = [
            model._meta.db_table
            for model in self.MODELS
            if model._meta.db_table not in existing
        ]
        if missing:
            raise StateError(
                f"Record Store tables missing: {', '.join(missing)}. Run migrations first."
            )
        self._initialized = True
        logger.info("Record Store initialized")
        return self

    def _require_initialized(self):
        if not self._initialized:
            raise StateError("Record Store not initialized")

    @staticmethod
    def _require_fields(**fields):
        missing = [name for name, value in fields.items() if value is None or value == '']
        if missing:
            raise MissingFieldsError(f"Missing fields: {', '.join(missing)}")

    # =========================================================================
    # Purchase inputs
    # =========================================================================

    def list_purchase_inputs(self):
        """Return all purchase inputs, newest date first."""
        self._require_initialized()
        return list(CoconutInput.objects.order_by('-date', '-id'))

    def create_purchase_input(
        self,
        *,
        id,
        date,
        count,
        price_per_unit,
        total_price,
        client_name,
        payment_status=None
    ):
        """
        Insert a purchase input.

        Raises:
            StateError: Handle not initialized.
            MissingFieldsError: A required field is absent.
        """
        self._require_initialized()
        self._require_fields(
            id=id,
            date=date,
            count=count,
            price_per_unit=price_per_unit,
            total_price=total_price,
            client_name=client_name,
        )
        return CoconutInput.objects.create(
            id=id,
            date=date,
            count=count,
            price_per_unit=price_per_unit,
            total_price=total_price,
            client_name=client_name,
            payment_status=payment_status or PaymentStatus.PENDING,
        )

    def update_purchase_input(
        self,
        record_id,
        *,
        count,
        price_per_unit,
        total_price,
        client_name,
        payment_status=None
    ):
        """
        Replace the editable fields of a purchase input.

        Raises:
            StateError: Handle not initialized.
            MissingFieldsError: A required field is absent.
            RecordNotFoundError: No purchase input has this id.
        """
        self._require_initialized()
        self._require_fields(
            count=count,
            price_per_unit=price_per_unit,
            total_price=total_price,
            client_name=client_name,
        )
        updated = CoconutInput.objects.filter(pk=record_id).update(
            count=count,
            price_per_unit=price_per_unit,
            total_price=total_price,
            client_name=client_name,
            payment_status=payment_status or PaymentStatus.PENDING,
        )
        if not updated:
            raise RecordNotFoundError(f"Purchase input {record_id} not found.")

    def delete_purchase_input(self, record_id):
        """Delete a purchase input. Unknown ids are ignored."""
        self._require_initialized()
        CoconutInput.objects.filter(pk=record_id).delete()

    # =========================================================================
    # Labour wages
    # =========================================================================

    def list_labour_wages(self):
        """Return all labour wages, newest date first."""
        self._require_initialized()
        return list(LabourWage.objects.order_by('-date', '-id'))

    def create_labour_wage(
        self,
        *,
        id,
        date,
        worker_name,
        days,
        rate_per_day,
        total_wage
    ):
        self._require_initialized()
        self._require_fields(
            id=id,
            date=date,
            worker_name=worker_name,
            days=days,
            rate_per_day=rate_per_day,
            total_wage=total_wage,
        )
        return LabourWage.objects.create(
            id=id,
            date=date,
            worker_name=worker_name,
            days=days,
            rate_per_day=rate_per_day,
            total_wage=total_wage,
        )

    def update_labour_wage(
        self,
        record_id,
        *,
        worker_name,
        days,
        rate_per_day,
        total_wage
    ):
        self._require_initialized()
        self._require_fields(
            worker_name=worker_name,
            days=days,
            rate_per_day=rate_per_day,
            total_wage=total_wage,
        )
        updated = LabourWage.objects.filter(pk=record_id).update(
            worker_name=worker_name,
            days=days,
            rate_per_day=rate_per_day,
            total_wage=total_wage,
        )
        if not updated:
            raise RecordNotFoundError(f"Labour wage {record_id} not found.")

    def delete_labour_wage(self, record_id):
        self._require_initialized()
        LabourWage.objects.filter(pk=record_id).delete()

    # =========================================================================
    # Clients (no update operation)
    # =========================================================================

    def list_clients(self):
        """Return all clients ordered by name."""
        self._require_initialized()
        return list(Client.objects.order_by('name'))

    def create_client(self, *, id, name):
        self._require_initialized()
        self._require_fields(id=id, name=name)
        return Client.objects.create(id=id, name=name)

    def delete_client(self, record_id):
        self._require_initialized()
        Client.objects.filter(pk=record_id).delete()


_record_store = None


def get_record_store():
    """Return the process-wide RecordStore, initializing it on first use."""
    global _record_store
    if _record_store is None or not _record_store.is_initialized:
        _record_store = RecordStore().initialize()
    return _record_store
