"""
Reports app - financial summaries over the ledger's record sets.

Read-only: every aggregate is recomputed from the in-memory records of a
LedgerSession and nothing here is persisted.
"""
