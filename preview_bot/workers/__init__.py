"""Event-driven workers."""
