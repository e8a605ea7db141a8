"""Market data reporting backend."""
