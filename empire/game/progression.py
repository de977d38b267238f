"""Crime resolution, rank recomputation and prestige rollover."""

from __future__ import annotations

from ..models import JobRecord, Player
from .balance import ProgressionBalance
from .catalog import BOTTOM_RANK, TOP_RANK, CrimeDefinition, get_rank, rank_index
from .errors import RejectedAction
from .prison import is_incarcerated, jail, remaining_seconds
from .utils import format_duration


def success_chance(crime: CrimeDefinition, prestige: int, balance: ProgressionBalance) -> float:
    """Base rate scaled by prestige. Values above 1.0 mean certain success."""
    return crime.success_rate * (1.0 + balance.prestige_success_step * max(0, int(prestige)))


def prestige_threshold(prestige: int, balance: ProgressionBalance) -> int:
    return balance.prestige_base_xp * balance.prestige_growth ** max(0, int(prestige))


def sync_rank(player: Player) -> bool:
    """Derive ``player.rank`` from experience. Returns True when it changed."""
    rank = get_rank(player.experience)
    if rank == player.rank:
        return False
    player.rank = rank
    return True


def check_crime_gates(player: Player, crime: CrimeDefinition, now: int) -> None:
    if is_incarcerated(player, now):
        left = format_duration(remaining_seconds(player, now))
        raise RejectedAction(f"You are in prison for another {left}.")
    if rank_index(player.rank) < rank_index(crime.unlock_rank):
        raise RejectedAction(
            f"{crime.name} unlocks at rank {crime.unlock_rank}. You are {player.rank}."
        )
    cost = crime.upfront_cost
    if cost and player.cash < cost:
        raise RejectedAction(f"{crime.name} costs ${cost}, but you only have ${player.cash}.")


def roll_cash(crime: CrimeDefinition, rng) -> int:
    if crime.has_cash_range:
        return rng.randint(crime.cash_min, crime.cash_max)
    return crime.cash


def apply_success(player: Player, crime: CrimeDefinition, rng) -> dict:
    rank_before = player.rank
    cash = roll_cash(crime, rng)

    player.cash += cash
    player.respect += crime.respect
    player.experience += crime.experience
    player.heat = max(0, player.heat + crime.heat)
    # rank always follows the experience just written
    sync_rank(player)

    return {
        "cash": cash,
        "rank_before": rank_before,
        "rank_changed": player.rank != rank_before,
    }


def prestige_ready(player: Player, balance: ProgressionBalance) -> bool:
    return player.rank == TOP_RANK and player.experience >= prestige_threshold(player.prestige, balance)


def apply_prestige(player: Player, balance: ProgressionBalance) -> bool:
    if not prestige_ready(player, balance):
        return False
    player.experience = 0
    player.rank = BOTTOM_RANK
    player.prestige += 1
    return True


def resolve_crime(
    player: Player,
    crime: CrimeDefinition,
    rng,
    now: int,
    balance: ProgressionBalance,
) -> dict:
    """Run one crime attempt against ``player`` in place.

    Gates are checked first and raise :class:`RejectedAction` without touching
    the player. Otherwise exactly one success draw is made, the player is
    updated and a ledger entry describing the outcome is returned under
    ``"job"``.
    """

    check_crime_gates(player, crime, now)

    chance = success_chance(crime, player.prestige, balance)
    success = rng.random() < chance

    cash = 0
    rank_changed = False
    prestiged = False

    if success:
        outcome = apply_success(player, crime, rng)
        cash = outcome["cash"]
        rank_changed = outcome["rank_changed"]
        parts = [
            f"Success: {crime.name} completed! Cash {cash:+d}, +{crime.experience} XP."
        ]
        if rank_changed:
            parts.append(f"You are now {player.rank}.")
        prestiged = apply_prestige(player, balance)
        if prestiged:
            parts.append(
                f"Prestige {player.prestige} achieved! You start over as {player.rank}."
            )
        message = " ".join(parts)
        job = JobRecord(
            type=crime.crime_id,
            player_id=player.user_id,
            result=message,
            experience_at_time=player.experience,
            rank_at_time=player.rank,
            prestige_at_time=player.prestige,
            created_ts=now,
        )
    else:
        start, end = jail(player, crime.jail_seconds, now)
        message = (
            f"Failed: You got caught and are in prison for "
            f"{format_duration(crime.jail_seconds)}."
        )
        job = JobRecord(
            type=crime.crime_id,
            player_id=player.user_id,
            result=message,
            prison_start=start,
            prison_end=end,
            created_ts=now,
        )

    return {
        "ok": success,
        "message": message,
        "crime": crime.crime_id,
        "success_chance": chance,
        "cash": cash,
        "rank_changed": rank_changed,
        "prestiged": prestiged,
        "job": job,
    }


__all__ = [
    "success_chance",
    "prestige_threshold",
    "sync_rank",
    "check_crime_gates",
    "roll_cash",
    "apply_success",
    "prestige_ready",
    "apply_prestige",
    "resolve_crime",
]
