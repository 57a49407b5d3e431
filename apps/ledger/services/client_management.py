"""Client service - the list of coconut suppliers.

Clients are kept in the Local Fallback Cache first and mirrored to the
Record Store on a best-effort basis; mirroring failures are logged and
otherwise ignored.
"""

import logging

from apps.ledger.entities import CLIENTS, Client, new_record_id
from apps.ledger.exceptions import DuplicateClientError, TransportError
from apps.ledger.sync import SyncOutcome
from .validation import required_text

logger = logging.getLogger(__name__)


def add_client(session, name):
    """
    Register a new client.

    Returns:
        tuple: (Client, SyncOutcome) - SAVED when the Record Store accepted
        the mirror, SAVED_LOCALLY otherwise.

    Raises:
        ValidationError: If the name is blank
        DuplicateClientError: If a client with this name already exists
    """
    name = required_text(name, field='name', label='Client name')
    if any(client.name == name for client in session.clients):
        raise DuplicateClientError("Client already exists", field='name')

    client = Client(id=new_record_id(), name=name)
    session.replace_local(CLIENTS, session.clients + [client])

    try:
        session.gateway.create(CLIENTS, client)
    except TransportError as exc:
        logger.warning("Could not save client %s to Record Store, saved locally: %s", name, exc)
        return client, SyncOutcome.SAVED_LOCALLY
    return client, SyncOutcome.SAVED


def remove_client(session, client_id):
    """Remove a client locally, then best-effort from the Record Store."""
    session.replace_local(CLIENTS, [client for client in session.clients if client.id != client_id])
    try:
        session.gateway.delete(CLIENTS, client_id)
    except TransportError as exc:
        logger.warning("Could not delete client %s from Record Store: %s", client_id, exc)
        return SyncOutcome.SAVED_LOCALLY
    return SyncOutcome.SAVED


def search_clients(session, query=''):
    """Client names containing ``query`` (case-insensitive), in stored order."""
    needle = (query or '').strip().lower()
    return [client.name for client in session.clients if needle in client.name.lower()]
