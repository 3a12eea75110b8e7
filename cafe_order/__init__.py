"""Console ordering front-end and order ledger for a single restaurant."""
