"""Centralised balance configuration for gameplay formulas."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass, replace
from typing import Any, Mapping


@dataclass(frozen=True)
class EconomyBalance:
    """Cash handed out at registration."""

    starting_cash: int = 1000


@dataclass(frozen=True)
class ProgressionBalance:
    """Prestige requirement and the success bonus it grants."""

    prestige_base_xp: int = 250000
    prestige_growth: int = 2
    prestige_success_step: float = 0.05


@dataclass(frozen=True)
class PrisonBalance:
    """Bail pricing and bust odds."""

    bail_cost_per_minute: int = 100
    bust_base_chance: float = 0.2
    bust_rank_step: float = 0.05
    bust_fail_jail_seconds: int = 300


@dataclass(frozen=True)
class BalanceProfile:
    """Bundle of all tunable balance parameters."""

    economy: EconomyBalance = field(default_factory=EconomyBalance)
    progression: ProgressionBalance = field(default_factory=ProgressionBalance)
    prison: PrisonBalance = field(default_factory=PrisonBalance)


def _coerce_scalar(template: Any, raw: Any) -> Any:
    """Attempt to coerce ``raw`` into the type of ``template``."""

    if isinstance(template, float):
        try:
            return float(raw)
        except (TypeError, ValueError):
            return template
    if isinstance(template, int) and not isinstance(template, bool):
        try:
            return int(raw)
        except (TypeError, ValueError):
            return template
    return raw


def _merge_dataclass(instance: Any, overrides: Mapping[str, Any]) -> Any:
    if not is_dataclass(instance) or not isinstance(overrides, Mapping):
        return instance

    updates: dict[str, Any] = {}
    for field_info in fields(instance):
        name = field_info.name
        if name not in overrides:
            continue
        current_value = getattr(instance, name)
        override_value = overrides[name]
        if is_dataclass(current_value):
            updates[name] = _merge_dataclass(current_value, override_value)
        else:
            updates[name] = _coerce_scalar(current_value, override_value)
    if not updates:
        return instance
    return replace(instance, **updates)


def load_balance_profile(raw: Mapping[str, Any] | None) -> BalanceProfile:
    """Return a :class:`BalanceProfile` with optional overrides applied."""

    profile = BalanceProfile()
    if not isinstance(raw, Mapping):
        return profile
    return _merge_dataclass(profile, raw)
