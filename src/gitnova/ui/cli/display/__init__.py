"""Display management for CLI interface."""

from gitnova.ui.cli.display.refs import RefsDisplay
from gitnova.ui.cli.display.status import StatusDisplay

__all__ = ["RefsDisplay", "StatusDisplay"]
