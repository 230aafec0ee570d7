"""Oracle-priced funding ledger with owner-only withdrawal."""
