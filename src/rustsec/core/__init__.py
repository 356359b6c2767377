"""Core domain, database and use cases (no I/O)."""
