"""SQLite-backed persistence: key/value slots and fit results."""
