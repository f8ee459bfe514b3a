"""ORM table definitions."""
