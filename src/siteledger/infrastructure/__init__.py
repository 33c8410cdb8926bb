"""Infrastructure adapters: SQLite storage and notification delivery."""
