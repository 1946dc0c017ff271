"""Vehicle auction settlement over a key-value ledger."""
