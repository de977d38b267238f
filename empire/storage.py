"""Thin facade the cogs use to reach the shared game service."""
from __future__ import annotations

from .game import DataStore, GameService
from .models import JobRecord, Player

__all__ = [
    "get_config",
    "get_player",
    "register_player",
    "attempt_crime",
    "pay_bail",
    "bust",
    "list_jobs",
    "require_admin",
    "list_players",
    "set_banned",
    "adjust_cash",
    "set_role",
]

_STORE = DataStore()
_SERVICE = GameService(_STORE)


def get_config() -> dict:
    return _SERVICE.config


def get_player(uid: int) -> Player:
    return _SERVICE.get_player(uid)


def register_player(uid: int, name: str = "") -> Player:
    return _SERVICE.register_player(uid, name)


def attempt_crime(uid: int, crime_id: str) -> dict:
    return _SERVICE.attempt_crime(uid, crime_id)


def pay_bail(uid: int) -> dict:
    return _SERVICE.pay_bail(uid)


def bust(rescuer_uid: int, target_uid: int) -> dict:
    return _SERVICE.bust(rescuer_uid, target_uid)


def list_jobs(uid: int, limit: int = 20) -> list[JobRecord]:
    return _SERVICE.list_jobs(uid, limit)


def require_admin(uid: int) -> None:
    _SERVICE.require_admin(uid)


def list_players() -> list[Player]:
    return _SERVICE.list_players()


def set_banned(uid: int, banned: bool) -> Player:
    return _SERVICE.set_banned(uid, banned)


def adjust_cash(uid: int, amount: int) -> Player:
    return _SERVICE.adjust_cash(uid, amount)


def set_role(uid: int, role: str) -> Player:
    return _SERVICE.set_role(uid, role)
