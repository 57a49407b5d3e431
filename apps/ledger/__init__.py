"""
Ledger App - Client-side Record Keeping

This app is the client half of the coconut trading ledger. It keeps the
in-memory record sets a presentation layer works with, reconciles them
with the Record Store over HTTP and falls back to a local cache whenever
the Record Store cannot be reached.

Key Features:
- Local Fallback Cache on Django's cache framework, with explicit
  subscribe(key, callback) change notifications
- Two-phase writes: optimistic in-memory apply, then best-effort persist
- Single-attempt loads that fall back to the last cached value
- Output products, clients and the capital balance kept client-side only
- Passphrase-gated capital panel with automatic purchase deductions

Architecture:
- Entities: PurchaseInput, LabourWage, OutputProduct, Client
- Cache: LocalFallbackCache
- Gateway: RecordStoreClient (urllib, JSON over HTTP)
- Sync: SyncService, SyncOutcome, LoadSource
- Capital: CapitalPanel
- Session: LedgerSession (owns every in-memory set)
- Services: record_purchase, record_wage, record_output, add_client, ...
"""
