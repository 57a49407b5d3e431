"""
Ledger session.

A ``LedgerSession`` is one open view of the business ledger: it owns the
in-memory record sets, the sync service for server-backed kinds, the
client-only collections (outputs, clients) and the capital panel. Several
sessions may share one Local Fallback Cache; each adopts the others'
writes through cache change notifications.
"""
import logging
from functools import partial

from django.conf import settings

from .cache import get_fallback_cache
from .capital import CapitalPanel
from .entities import CLIENTS, LABOUR_WAGES, OUTPUTS, PURCHASE_INPUTS
from .exceptions import ParseError
from .gateway import RecordStoreClient
from .sync import SyncService

logger = logging.getLogger(__name__)


class LedgerSession:
    """
    Container for everything a presentation layer reads and writes.

    Usage:
        session = LedgerSession.from_settings()
        session.load()
        for record in session.purchase_inputs:
            ...
    """

    LOCAL_KINDS = (OUTPUTS, CLIENTS)

    def __init__(self, *, gateway, cache, default_passphrase):
        self.gateway = gateway
        self.cache = cache
        self.sync = SyncService(gateway, cache)
        self.capital = CapitalPanel(cache, default_passphrase)
        self._local = {
            kind.name: cache.load_collection(kind.cache_key, kind.entity.from_wire)
            for kind in self.LOCAL_KINDS
        }
        self._unsubscribers = [
            cache.subscribe(kind.cache_key, partial(self._on_local_change, kind))
            for kind in self.LOCAL_KINDS
        ]

    @classmethod
    def from_settings(cls):
        """Session wired to the configured Record Store URL and the shared cache."""
        return cls(
            gateway=RecordStoreClient.from_settings(),
            cache=get_fallback_cache(),
            default_passphrase=settings.CAPITAL_DEFAULT_PASSPHRASE,
        )

    def load(self):
        """
        Refresh every record set.

        Server-backed kinds try the Record Store first; client-only kinds
        are re-read from the cache.

        Returns:
            dict: kind name -> LoadSource for the server-backed kinds.
        """
        sources = {
            kind.name: self.sync.load(kind)
            for kind in (PURCHASE_INPUTS, LABOUR_WAGES)
        }
        for kind in self.LOCAL_KINDS:
            self._local[kind.name] = self.cache.load_collection(kind.cache_key, kind.entity.from_wire)
        return sources

    def close(self):
        self.sync.close()
        self.capital.close()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # =========================================================================
    # Record sets
    # =========================================================================

    @property
    def purchase_inputs(self):
        return self.sync.records(PURCHASE_INPUTS)

    @property
    def labour_wages(self):
        return self.sync.records(LABOUR_WAGES)

    @property
    def outputs(self):
        return list(self._local[OUTPUTS.name])

    @property
    def clients(self):
        return list(self._local[CLIENTS.name])

    def replace_local(self, kind, records):
        """Swap a client-only collection and persist it to the cache."""
        self._local[kind.name] = list(records)
        self.cache.store_collection(kind.cache_key, records)

    def _on_local_change(self, kind, key, value):
        try:
            self._local[kind.name] = self.cache.decode_collection(value, kind.entity.from_wire)
        except ParseError as exc:
            logger.warning("Ignoring invalid %s change notification: %s", key, exc)
