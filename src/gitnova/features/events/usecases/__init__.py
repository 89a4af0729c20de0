"""Event hub use cases."""
