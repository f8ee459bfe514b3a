"""Infrastructure adapters (database, external stores)."""
