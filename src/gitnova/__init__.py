"""gitnova: cached repository state and change notifications for git tooling."""

__version__ = "0.1.0"
