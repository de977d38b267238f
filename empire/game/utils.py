"""Small helpers shared by the cogs and embeds."""

from __future__ import annotations

from typing import Any, Optional


def choice_value(choice: Any, default: Optional[str] = None) -> Optional[str]:
    """Safely read the value of a ``discord.app_commands.Choice``."""

    if choice is None:
        return default
    value = getattr(choice, "value", None)
    if value in (None, ""):
        return default
    return str(value)


def format_duration(seconds: int) -> str:
    """``125`` -> ``"2m 5s"``; hours are shown only when needed."""

    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m {secs}s" if secs else f"{minutes}m"
    return f"{secs}s"


__all__ = ["choice_value", "format_duration"]
