"""Exceptions raised by the game service before any state is touched."""

from __future__ import annotations


class GameError(RuntimeError):
    """Base class for per-request failures shown to the caller verbatim."""


class InputError(GameError):
    """Unknown crime id, unknown role or another malformed argument."""


class RejectedAction(GameError):
    """The action is understood but not allowed in the current state."""


class NotFound(GameError):
    """The referenced player does not exist."""


__all__ = ["GameError", "InputError", "RejectedAction", "NotFound"]
