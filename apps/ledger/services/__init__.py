"""
Ledger services - Business logic layer.

This package contains the operations a presentation layer invokes:
- Purchase input recording, revision and removal (with capital deduction)
- Labour wage recording, revision and removal
- Output product recording and removal (client-only)
- Client registry with best-effort server mirroring
"""

from .purchase_management import (
    record_purchase,
    revise_purchase,
    remove_purchase,
)

from .wage_management import (
    record_wage,
    revise_wage,
    remove_wage,
)

from .output_management import (
    record_output,
    remove_output,
)

from .client_management import (
    add_client,
    remove_client,
    search_clients,
)

__all__ = [
    'record_purchase',
    'revise_purchase',
    'remove_purchase',
    'record_wage',
    'revise_wage',
    'remove_wage',
    'record_output',
    'remove_output',
    'add_client',
    'remove_client',
    'search_clients',
]
