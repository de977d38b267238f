"""Static rank ladder and crime definitions."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..models import BOTTOM_RANK
from .errors import InputError


@dataclass(frozen=True)
class RankEntry:
    name: str
    threshold: int


@dataclass(frozen=True)
class CrimeDefinition:
    """One attemptable crime.

    Cash is either rolled from ``cash_min``..``cash_max`` (inclusive) or, when
    no range is given, the fixed ``cash`` delta is applied. A negative fixed
    delta is a cost the player has to be able to pay up front.
    """

    crime_id: str
    name: str
    unlock_rank: str
    experience: int
    success_rate: float
    jail_seconds: int
    heat: int = 0
    respect: int = 0
    cash: int = 0
    cash_min: Optional[int] = None
    cash_max: Optional[int] = None

    @property
    def has_cash_range(self) -> bool:
        return self.cash_min is not None and self.cash_max is not None

    @property
    def upfront_cost(self) -> int:
        if self.has_cash_range or self.cash >= 0:
            return 0
        return -self.cash

    def cash_label(self) -> str:
        if self.has_cash_range:
            return f"${self.cash_min}-{self.cash_max}"
        if self.cash < 0:
            return f"costs ${-self.cash}"
        return f"${self.cash}"


RANKS: Tuple[RankEntry, ...] = (
    RankEntry(BOTTOM_RANK, 0),
    RankEntry("Errand Boy", 100),
    RankEntry("Associate", 300),
    RankEntry("Muscle", 800),
    RankEntry("Enforcer", 2000),
    RankEntry("Caporegime", 5000),
    RankEntry("Underboss", 15000),
    RankEntry("Consigliere", 40000),
    RankEntry("Boss", 100000),
    RankEntry("Godfather", 250000),
)

RANK_NAMES: Tuple[str, ...] = tuple(entry.name for entry in RANKS)
TOP_RANK = RANKS[-1].name

_THRESHOLDS = [entry.threshold for entry in RANKS]


def _crime_table(*crimes: CrimeDefinition) -> Mapping[str, CrimeDefinition]:
    return MappingProxyType({crime.crime_id: crime for crime in crimes})


CRIMES: Mapping[str, CrimeDefinition] = _crime_table(
    CrimeDefinition(
        "pickpocket", "Pickpocket", "Street Rat",
        experience=10, success_rate=0.85, jail_seconds=60,
        heat=1, respect=1, cash_min=20, cash_max=80,
    ),
    CrimeDefinition(
        "shoplift", "Shoplift", "Street Rat",
        experience=15, success_rate=0.8, jail_seconds=90,
        heat=1, respect=1, cash_min=50, cash_max=150,
    ),
    CrimeDefinition(
        "bribe", "Bribe a cop", "Errand Boy",
        experience=20, success_rate=0.9, jail_seconds=120,
        heat=-5, respect=0, cash=-300,
    ),
    CrimeDefinition(
        "smuggling", "Smuggling run", "Errand Boy",
        experience=40, success_rate=0.6, jail_seconds=180,
        heat=4, respect=2, cash_min=300, cash_max=700,
    ),
    CrimeDefinition(
        "hit", "Order a hit", "Associate",
        experience=60, success_rate=0.7, jail_seconds=300,
        heat=3, respect=5, cash=-200,
    ),
    CrimeDefinition(
        "steal_car", "Steal a car", "Muscle",
        experience=120, success_rate=0.5, jail_seconds=600,
        heat=5, respect=3, cash_min=600, cash_max=1000,
    ),
    CrimeDefinition(
        "blackmail", "Blackmail", "Enforcer",
        experience=250, success_rate=0.45, jail_seconds=800,
        heat=6, respect=6, cash_min=900, cash_max=1500,
    ),
    CrimeDefinition(
        "kidnap", "Kidnapping", "Caporegime",
        experience=500, success_rate=0.35, jail_seconds=1200,
        heat=8, respect=7, cash_min=1500, cash_max=2500,
    ),
    CrimeDefinition(
        "rob_bank", "Rob a bank", "Underboss",
        experience=1500, success_rate=0.2, jail_seconds=1800,
        heat=15, respect=10, cash_min=4000, cash_max=6000,
    ),
)


def rank_entry_for(experience: int) -> RankEntry:
    position = bisect_right(_THRESHOLDS, max(0, int(experience))) - 1
    return RANKS[max(0, position)]


def get_rank(experience: int) -> str:
    """Name of the highest rank whose threshold is <= ``experience``."""
    return rank_entry_for(experience).name


def rank_index(name: str) -> int:
    try:
        return RANK_NAMES.index(name)
    except ValueError:
        raise InputError(f"Unknown rank: {name}") from None


def next_rank(experience: int) -> Optional[RankEntry]:
    position = RANKS.index(rank_entry_for(experience)) + 1
    if position >= len(RANKS):
        return None
    return RANKS[position]


def get_crime(crime_id: str) -> CrimeDefinition:
    key = (crime_id or "").strip().lower()
    crime = CRIMES.get(key)
    if crime is None:
        raise InputError("Invalid crime type")
    return crime


def crimes_for_rank(rank: str) -> list[CrimeDefinition]:
    level = rank_index(rank)
    return [crime for crime in CRIMES.values() if rank_index(crime.unlock_rank) <= level]


__all__ = [
    "RankEntry",
    "CrimeDefinition",
    "RANKS",
    "RANK_NAMES",
    "TOP_RANK",
    "BOTTOM_RANK",
    "CRIMES",
    "rank_entry_for",
    "get_rank",
    "rank_index",
    "next_rank",
    "get_crime",
    "crimes_for_rank",
]
