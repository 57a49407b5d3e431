"""
Domain exceptions for the records app.

This module defines the errors raised by the Record Store handle and the
DRF exception handler that turns storage failures into the plain
``{"error": "DB error"}`` body the ledger client expects.
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class RecordStoreError(Exception):
    """Base exception for Record Store errors."""
    pass


class StateError(RecordStoreError):
    """Raised when the Record Store handle is used before initialization."""
    pass


class MissingFieldsError(RecordStoreError):
    """Raised when a required record field is absent or null."""
    pass


class RecordNotFoundError(APIException):
    """Record id unknown to the Record Store."""
    status_code = 404
    default_detail = 'Record not found.'
    default_code = 'record_not_found'


def record_store_exception_handler(exc, context):
    """
    Extend DRF's handler with storage failures.

    Validation and not-found errors keep DRF's default rendering. Database
    errors and uninitialized-store errors are logged and answered with 500.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, MissingFieldsError):
        return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, (DatabaseError, RecordStoreError)):
        view = context.get('view')
        logger.error(
            "Record Store failure in %s",
            view.__class__.__name__ if view else 'unknown view',
            exc_info=exc,
        )
        return Response({'error': 'DB error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return None
