"""
Records App - Record Store

Durable persistence of the three server-backed record kinds of the coconut
trading ledger: purchase inputs (coconuts bought from clients), labour wages
and clients.

Key Features:
- Caller-generated string identifiers (the ledger client owns id creation)
- Dates stored as raw strings, normalized to ISO-8601 UTC on read
- snake_case columns mapped to the camelCase wire shape by serializers
- Idempotent deletes, 404 on update of an unknown id

Architecture:
- Models: CoconutInput, LabourWage, Client
- Services: RecordStore (handle with an explicit initialize() step)
- Views: ViewSets routed to /api/coconut, /api/labour, /api/clients
- Exceptions: StateError, RecordNotFoundError, DRF exception handler
"""
