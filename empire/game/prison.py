"""Incarceration state, bail pricing and bust attempts.

Release is never scheduled: a player is free as soon as ``in_prison_until``
lies in the past, which is checked lazily on the next action.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from ..models import JOB_BAIL, JOB_BUST, JOB_BUST_FAIL, JobRecord, Player
from .balance import PrisonBalance
from .catalog import rank_index
from .errors import RejectedAction
from .utils import format_duration


class PrisonState(Enum):
    FREE = "free"
    INCARCERATED = "incarcerated"


def prison_state(player: Player, now: int) -> PrisonState:
    until = player.in_prison_until
    if until is not None and until > now:
        return PrisonState.INCARCERATED
    return PrisonState.FREE


def is_incarcerated(player: Player, now: int) -> bool:
    return prison_state(player, now) is PrisonState.INCARCERATED


def remaining_seconds(player: Player, now: int) -> int:
    if not is_incarcerated(player, now):
        return 0
    return int(player.in_prison_until) - now


def jail(player: Player, seconds: int, now: int) -> tuple[int, int]:
    """Lock the player up for ``seconds`` starting at ``now``."""
    end = now + int(seconds)
    player.in_prison_until = end
    return now, end


def release(player: Player) -> None:
    player.in_prison_until = None


def bail_cost(player: Player, now: int, balance: PrisonBalance) -> int:
    minutes = math.ceil(remaining_seconds(player, now) / 60)
    return minutes * balance.bail_cost_per_minute


def bust_chance(rescuer: Player, balance: PrisonBalance) -> float:
    # no upper clamp: anything at or above 1.0 always succeeds
    return balance.bust_base_chance + balance.bust_rank_step * rank_index(rescuer.rank)


def resolve_bail(player: Player, now: int, balance: PrisonBalance) -> dict:
    if not is_incarcerated(player, now):
        raise RejectedAction("You are not in prison.")

    cost = bail_cost(player, now, balance)
    if player.cash < cost:
        raise RejectedAction(f"Bail costs ${cost}, but you only have ${player.cash}.")

    player.cash -= cost
    release(player)
    message = f"Bail paid: ${cost}. You are free."
    job = JobRecord(type=JOB_BAIL, player_id=player.user_id, result=message, created_ts=now)
    return {"ok": True, "message": message, "cost": cost, "job": job}


def resolve_bust(
    rescuer: Player,
    target: Player,
    rng,
    now: int,
    balance: PrisonBalance,
    target_name: Optional[str] = None,
) -> dict:
    if not is_incarcerated(target, now):
        raise RejectedAction("That player is not in prison.")

    label = target_name or target.name or str(target.user_id)
    chance = bust_chance(rescuer, balance)
    success = rng.random() < chance

    if success:
        release(target)
        message = f"Bust successful: {label} is out of prison."
        job = JobRecord(type=JOB_BUST, player_id=rescuer.user_id, result=message, created_ts=now)
    else:
        start, end = jail(rescuer, balance.bust_fail_jail_seconds, now)
        message = (
            f"Bust failed: the guards caught you. You are in prison for "
            f"{format_duration(balance.bust_fail_jail_seconds)}."
        )
        job = JobRecord(
            type=JOB_BUST_FAIL,
            player_id=rescuer.user_id,
            result=message,
            prison_start=start,
            prison_end=end,
            created_ts=now,
        )

    return {"ok": success, "message": message, "success_chance": chance, "job": job}


__all__ = [
    "PrisonState",
    "prison_state",
    "is_incarcerated",
    "remaining_seconds",
    "jail",
    "release",
    "bail_cost",
    "bust_chance",
    "resolve_bail",
    "resolve_bust",
]
