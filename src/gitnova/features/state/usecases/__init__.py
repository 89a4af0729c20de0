"""Use cases for caching repository state."""
