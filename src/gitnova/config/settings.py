"""Where: src/gitnova/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Validation is limited to simple boundary checks for speed.
"""

from __future__ import annotations

from gitnova.config.config import (
    DEFAULT_CACHE_TTL_SECONDS as _DEFAULT_TTL_FALLBACK,
    GIT_TIMEOUT_SECONDS_DEFAULT,
    REFRESH_DEBOUNCE_SECONDS_DEFAULT,
    STATUS_VIEW_TTL_SECONDS_DEFAULT,
    config as app_config,
)


def _positive(value: float, fallback: float) -> float:
    return value if value > 0 else fallback


# Cache lifetimes -------------------------------------------------------------

# Entries written by the domain refreshers (status, branches, remotes).
DEFAULT_CACHE_TTL_SECONDS: float = _positive(
    app_config.default_cache_ttl_seconds, _DEFAULT_TTL_FALLBACK
)

# The changes view re-reads status far more often than other consumers.
STATUS_VIEW_TTL_SECONDS: float = _positive(
    app_config.status_view_ttl_seconds, STATUS_VIEW_TTL_SECONDS_DEFAULT
)

# Debounce window for filesystem-watcher bursts.
REFRESH_DEBOUNCE_SECONDS: float = _positive(
    app_config.refresh_debounce_seconds, REFRESH_DEBOUNCE_SECONDS_DEFAULT
)

AUTO_REFRESH: bool = app_config.auto_refresh


# Backend -----------------------------------------------------------------------

GIT_EXECUTABLE: str = app_config.git_executable.strip()
GIT_TIMEOUT_SECONDS: float = _positive(app_config.git_timeout_seconds, GIT_TIMEOUT_SECONDS_DEFAULT)


__all__ = [
    "AUTO_REFRESH",
    "DEFAULT_CACHE_TTL_SECONDS",
    "GIT_EXECUTABLE",
    "GIT_TIMEOUT_SECONDS",
    "REFRESH_DEBOUNCE_SECONDS",
    "STATUS_VIEW_TTL_SECONDS",
]
