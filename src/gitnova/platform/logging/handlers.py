"""Where: platform/logging/handlers.py
What: Rich console handler that renders cache and refresh events compactly.
Why: Keep structured cache diagnostics readable without bespoke print calls.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar

from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class CacheEventRichHandler(RichHandler):
    """Rich handler that styles records carrying a ``cache_event`` extra."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "cache.hit": ("●", "green"),
        "cache.miss": ("○", "yellow"),
        "cache.expired": ("⌛", "yellow"),
        "cache.write": ("✎", "cyan"),
        "cache.invalidate": ("✗", "magenta"),
        "refresh.scheduled": ("⏲", "blue"),
        "refresh.start": ("↻", "blue"),
        "refresh.complete": ("✔", "green"),
        "refresh.error": ("✘", "red"),
        "event.handler_error": ("⚠", "red"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("show_time", False)
        kwargs.setdefault("show_path", False)
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Render a repository path keeping only its trailing segments."""

        pure_path: PurePath = PureWindowsPath(path) if "\\" in path else PurePosixPath(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        parts = [part for part in pure_path.parts if part and part != anchor]

        if len(parts) > self._PATH_SEGMENT_LIMIT:
            display = "…" + separator + separator.join(parts[-self._PATH_SEGMENT_LIMIT:])
        elif anchor:
            display = anchor.rstrip("\\/") + separator + separator.join(parts)
        else:
            display = separator.join(parts) or "."

        text = Text()
        for char in display:
            if char in {separator, "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_cache_event(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render a structured cache record, or ``None`` for plain records."""

        event = getattr(record, "cache_event", None)
        repository = getattr(record, "repository", None)
        if not isinstance(event, str):
            if not repository:
                return None
            text = Text(message)
            _ = text.append(" @ ")
            _ = text.append_text(self._format_path(str(repository)))
            return text

        icon, color = self._EVENT_STYLES.get(event, ("•", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        key = getattr(record, "cache_key", None)
        if isinstance(key, str) and key:
            _ = text.append(f"[{key}] ", style=Style(color=color, bold=True))

        _ = text.append(message, style=Style(color=color))

        details: list[str] = []
        duration_ms = getattr(record, "duration_ms", None)
        if isinstance(duration_ms, (int, float)):
            details.append(f"{duration_ms:.1f} ms")
        delay = getattr(record, "delay_seconds", None)
        if isinstance(delay, (int, float)):
            details.append(f"in {delay * 1000:.0f} ms")
        if details:
            _ = text.append(" (" + ", ".join(details) + ")", style=Style(color=color, dim=True))

        if repository:
            _ = text.append(" @ ")
            _ = text.append_text(self._format_path(str(repository)))
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        rendered = self._render_cache_event(record, message)
        if rendered is not None:
            return rendered
        return super().render_message(record, message)


__all__ = ["CacheEventRichHandler"]
