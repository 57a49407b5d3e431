"""
Local Fallback Cache.

A key -> serialized-collection store persisted through Django's cache
framework (file-based by default, so it survives restarts). Writers notify
every subscriber of the written key synchronously, which is how sessions
sharing the cache see each other's changes: the receiver replaces its
in-memory state wholesale, last writer wins.
"""
import json
import logging
from collections import defaultdict
from decimal import Decimal

from django.conf import settings
from django.core.cache import caches
from django.core.serializers.json import DjangoJSONEncoder

from .entities import to_decimal
from .exceptions import ParseError

logger = logging.getLogger(__name__)


class LocalFallbackCache:
    """
    Client-resident mirror of the ledger's record sets.

    Values are JSON strings. ``subscribe(key, callback)`` registers a
    ``callback(key, value)`` fired after every successful ``set`` of that key.

    Usage:
        cache = LocalFallbackCache()
        unsubscribe = cache.subscribe('outputs', on_outputs_changed)
        cache.store_collection('outputs', outputs)
    """

    def __init__(self, alias=None):
        self.alias = alias or settings.LEDGER_CACHE_ALIAS
        self._backend = caches[self.alias]
        self._subscribers = defaultdict(list)

    # =========================================================================
    # Raw key/value access
    # =========================================================================

    def get(self, key, default=None):
        return self._backend.get(key, default)

    def set(self, key, value):
        """Persist ``value`` under ``key`` and notify the key's subscribers."""
        self._backend.set(key, value, timeout=None)
        for callback in list(self._subscribers[key]):
            callback(key, value)

    def subscribe(self, key, callback):
        """Register ``callback(key, value)`` for writes to ``key``; returns an unsubscribe function."""
        self._subscribers[key].append(callback)

        def unsubscribe():
            if callback in self._subscribers[key]:
                self._subscribers[key].remove(callback)

        return unsubscribe

    def clear(self):
        self._backend.clear()

    # =========================================================================
    # Collections
    # =========================================================================

    @staticmethod
    def decode_collection(raw, parse):
        """
        Decode a serialized collection.

        Raises:
            ParseError: If the value is not a JSON array of parseable items.
        """
        try:
            items = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise ParseError(f"Cached value is not valid JSON: {exc}") from exc
        if not isinstance(items, list):
            raise ParseError("Cached value is not a list")
        return [parse(item) for item in items]

    @staticmethod
    def encode_collection(records):
        return json.dumps([record.to_wire() for record in records], cls=DjangoJSONEncoder)

    def load_collection(self, key, parse):
        """Return the cached collection for ``key``; empty if never stored or unreadable."""
        raw = self.get(key)
        if raw is None:
            return []
        try:
            return self.decode_collection(raw, parse)
        except ParseError as exc:
            logger.warning("Ignoring invalid cached %s: %s", key, exc)
            return []

    def store_collection(self, key, records):
        self.set(key, self.encode_collection(records))

    # =========================================================================
    # Scalars
    # =========================================================================

    def load_decimal(self, key, default=Decimal('0')):
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return to_decimal(raw)
        except ParseError as exc:
            logger.warning("Ignoring invalid cached %s: %s", key, exc)
            return default

    def store_decimal(self, key, value):
        self.set(key, str(value))


_fallback_caches = {}


def get_fallback_cache(alias=None):
    """Return the cache shared by every session of this process for ``alias``."""
    alias = alias or settings.LEDGER_CACHE_ALIAS
    if alias not in _fallback_caches:
        _fallback_caches[alias] = LocalFallbackCache(alias)
    return _fallback_caches[alias]
