"""
Sync/Reconciliation Layer
=========================

Mediates every read and write of server-backed records (purchase inputs,
labour wages) between the presentation layer, the Record Store and the
Local Fallback Cache.

Read path:
    ``load(kind)`` makes one attempt against the Record Store. On success
    the in-memory set is replaced and mirrored into the cache. On any
    failure the cache's last-known value is used instead (empty if the
    cache was never populated).

Write path (two phases):
    1. Apply the new state to the in-memory set and notify observers.
       This always succeeds and is never rolled back.
    2. Attempt the Record Store call once. Either way the new state is
       written to the cache; only a successful call advances
       ``last_durable_sync``. The outcome is ``SAVED`` or
       ``SAVED_LOCALLY``, never an error.

Example:
    sync = SyncService(RecordStoreClient.from_settings(), get_fallback_cache())
    sync.load(PURCHASE_INPUTS)
    outcome = sync.create(PURCHASE_INPUTS, record)
    if outcome is SyncOutcome.SAVED_LOCALLY:
        notify("Saved locally (server unavailable)")
"""
import logging
from enum import Enum
from functools import partial

from django.utils import timezone

from .entities import PURCHASE_INPUTS, LABOUR_WAGES
from .exceptions import NotFoundError, ParseError, TransportError

logger = logging.getLogger(__name__)


class SyncOutcome(str, Enum):
    """Result of a write as reported to the user."""
    SAVED = "saved"
    SAVED_LOCALLY = "saved_locally"

    @property
    def durable(self):
        return self is SyncOutcome.SAVED


class LoadSource(str, Enum):
    """Where a load took its records from."""
    SERVER = "server"
    CACHE = "cache"


class SyncService:
    """
    Two-phase write / single-attempt read coordinator.

    Args:
        gateway: RecordStoreClient (or any object with list/create/update/delete).
        cache: LocalFallbackCache shared with other sessions.
        kinds: Server-backed record kinds handled by this service.
    """

    def __init__(self, gateway, cache, kinds=(PURCHASE_INPUTS, LABOUR_WAGES)):
        self.gateway = gateway
        self.cache = cache
        self.kinds = {kind.name: kind for kind in kinds}
        self._records = {name: [] for name in self.kinds}
        self._observers = []
        self.last_durable_sync = {name: None for name in self.kinds}
        self._unsubscribers = [
            cache.subscribe(kind.cache_key, partial(self._on_cache_change, kind))
            for kind in kinds
        ]

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, callback):
        """Register ``callback(kind, records)`` for in-memory changes; returns an unsubscribe function."""
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def close(self):
        """Stop listening to the cache."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def records(self, kind):
        """Current in-memory records of ``kind`` (a copy)."""
        return list(self._records[self._kind(kind).name])

    # =========================================================================
    # Read path
    # =========================================================================

    def load(self, kind):
        """
        Refresh ``kind`` from the Record Store, falling back to the cache.

        Returns:
            LoadSource: SERVER when the Record Store answered, CACHE otherwise.
        """
        kind = self._kind(kind)
        try:
            records = self.gateway.list(kind)
        except TransportError as exc:
            logger.info("Could not load %s from Record Store, using local cache: %s", kind.name, exc)
            self._apply(kind, self.cache.load_collection(kind.cache_key, kind.entity.from_wire))
            return LoadSource.CACHE

        self._apply(kind, records)
        self.cache.store_collection(kind.cache_key, records)
        self.last_durable_sync[kind.name] = timezone.now()
        return LoadSource.SERVER

    # =========================================================================
    # Write path
    # =========================================================================

    def create(self, kind, record):
        """Prepend ``record`` to the in-memory set, then persist best-effort."""
        kind = self._kind(kind)
        updated = [record] + self._records[kind.name]
        self._apply(kind, updated)
        return self._persist(kind, updated, 'create', partial(self.gateway.create, kind, record))

    def update(self, kind, record):
        """
        Replace the record sharing ``record.id``, then persist best-effort.

        Raises:
            NotFoundError: If no in-memory record has that id (nothing changes).
        """
        kind = self._kind(kind)
        current = self._records[kind.name]
        if not any(existing.id == record.id for existing in current):
            raise NotFoundError(f"No {kind.name} record with id {record.id}")
        updated = [record if existing.id == record.id else existing for existing in current]
        self._apply(kind, updated)
        return self._persist(kind, updated, 'update', partial(self.gateway.update, kind, record))

    def delete(self, kind, record_id):
        """Drop ``record_id`` from the in-memory set (no-op if absent), then persist best-effort."""
        kind = self._kind(kind)
        updated = [existing for existing in self._records[kind.name] if existing.id != record_id]
        self._apply(kind, updated)
        return self._persist(kind, updated, 'delete', partial(self.gateway.delete, kind, record_id))

    # =========================================================================
    # Internals
    # =========================================================================

    def _kind(self, kind):
        name = getattr(kind, 'name', kind)
        try:
            return self.kinds[name]
        except KeyError:
            raise ValueError(f"{name} is not a server-backed record kind") from None

    def _apply(self, kind, records):
        """Phase 1: swap the in-memory set and tell observers."""
        self._records[kind.name] = list(records)
        for callback in list(self._observers):
            callback(kind, self.records(kind))

    def _persist(self, kind, records, action, remote_call):
        """Phase 2: one Record Store attempt, then mirror into the cache."""
        try:
            remote_call()
        except TransportError as exc:
            logger.warning("Record Store %s of %s failed, kept locally: %s", action, kind.name, exc)
            outcome = SyncOutcome.SAVED_LOCALLY
        else:
            self.last_durable_sync[kind.name] = timezone.now()
            outcome = SyncOutcome.SAVED
        self.cache.store_collection(kind.cache_key, records)
        return outcome

    def _on_cache_change(self, kind, key, value):
        """Another writer replaced ``kind`` in the cache: adopt it wholesale."""
        try:
            records = self.cache.decode_collection(value, kind.entity.from_wire)
        except ParseError as exc:
            logger.warning("Ignoring invalid %s change notification: %s", key, exc)
            return
        if records != self._records[kind.name]:
            self._apply(kind, records)
