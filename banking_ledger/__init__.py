"""In-memory banking ledger simulator."""
