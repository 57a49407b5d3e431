"""
HTTP gateway to the Record Store.

Every call is a single attempt: no retry, no backoff. Any failure (no base
URL configured, network error, non-2xx status, malformed body) surfaces as
``TransportError`` for the sync layer to absorb.
"""
import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from decimal import Decimal

from django.conf import settings

from .exceptions import ParseError, TransportError


def _wire_default(value):
    # Amounts travel as JSON numbers
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class RecordStoreClient:
    """
    JSON-over-HTTP client for the Record Store REST surface.

    Args:
        base_url: Service root, e.g. ``http://localhost:8000``. ``None``
            means the Record Store is unreachable (local-only mode).
        timeout: Optional socket timeout in seconds; ``None`` waits forever.
    """

    def __init__(self, base_url=None, timeout=None):
        self.base_url = base_url.rstrip('/') if base_url else None
        self.timeout = timeout

    @classmethod
    def from_settings(cls):
        return cls(
            base_url=settings.RECORD_STORE_URL,
            timeout=settings.RECORD_STORE_TIMEOUT,
        )

    @property
    def is_configured(self):
        return self.base_url is not None

    # =========================================================================
    # Record operations
    # =========================================================================

    def list(self, kind):
        """GET /api/{endpoint}; returns parsed entities."""
        payload = self._request('GET', self._path(kind))
        if not isinstance(payload, list):
            raise TransportError(f"Malformed {kind.name} payload: expected a list")
        try:
            return [kind.entity.from_wire(item) for item in payload]
        except ParseError as exc:
            raise TransportError(f"Malformed {kind.name} payload: {exc}") from exc

    def create(self, kind, record):
        self._request('POST', self._path(kind), record.to_wire())

    def update(self, kind, record):
        self._request('PUT', self._path(kind, record.id), record.to_wire())

    def delete(self, kind, record_id):
        self._request('DELETE', self._path(kind, record_id))

    def health(self):
        """Return True when GET /api/health answers ``{"ok": true}``."""
        try:
            payload = self._request('GET', '/api/health')
        except TransportError:
            return False
        return isinstance(payload, dict) and payload.get('ok') is True

    # =========================================================================
    # Internals
    # =========================================================================

    @staticmethod
    def _path(kind, record_id=None):
        path = f"/api/{kind.endpoint}"
        if record_id is not None:
            path += "/" + urllib.parse.quote(str(record_id), safe="")
        return path

    def _request(self, method, path, payload=None):
        if not self.is_configured:
            raise TransportError("Record Store URL not configured")

        data = None
        headers = {'Accept': 'application/json'}
        if payload is not None:
            data = json.dumps(payload, default=_wire_default).encode('utf-8')
            headers['Content-Type'] = 'application/json'

        request = urllib.request.Request(self.base_url + path, data=data, method=method, headers=headers)
        kwargs = {} if self.timeout is None else {'timeout': self.timeout}
        try:
            with urllib.request.urlopen(request, **kwargs) as response:
                body = response.read()
        except urllib.error.HTTPError as exc:
            raise TransportError(f"{method} {path} returned HTTP {exc.code}") from exc
        except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if not body:
            return None
        try:
            return json.loads(body.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as exc:
            raise TransportError(f"{method} {path} returned a malformed body") from exc
