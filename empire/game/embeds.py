"""Discord embed builders."""

from __future__ import annotations

from typing import Iterable, List

import discord

from ..models import JobRecord, Player, make_bar
from .catalog import CrimeDefinition, crimes_for_rank, next_rank, rank_entry_for
from .constants import (
    EMOJI_COIN,
    EMOJI_CRIME,
    EMOJI_HEAT,
    EMOJI_LEDGER,
    EMOJI_PRESTIGE,
    EMOJI_PRISON,
    EMOJI_PROFILE,
    EMOJI_RANK,
    EMOJI_RESPECT,
)
from .prison import is_incarcerated, remaining_seconds
from .utils import format_duration

PAGE_SIZE = 10


def player_overview_lines(player: Player) -> list[str]:
    return [
        f"{EMOJI_COIN} Cash: **${player.cash}**",
        f"{EMOJI_RESPECT} Respect: **{player.respect}**",
        f"{EMOJI_HEAT} Heat: **{player.heat}**",
    ]


def rank_progress_lines(player: Player) -> list[str]:
    current = rank_entry_for(player.experience)
    upcoming = next_rank(player.experience)
    lines = [f"{EMOJI_RANK} Rank: **{player.rank}** ({player.experience} XP)"]
    if upcoming is None:
        lines.append("Top of the ladder")
    else:
        span = upcoming.threshold - current.threshold
        done = player.experience - current.threshold
        lines.append(f"{make_bar(done, span)} next: {upcoming.name} at {upcoming.threshold} XP")
    if player.prestige:
        lines.append(f"{EMOJI_PRESTIGE} Prestige: **{player.prestige}**")
    return lines


def prison_line(player: Player, now: int) -> str:
    if is_incarcerated(player, now):
        return f"{EMOJI_PRISON} In prison for another {format_duration(remaining_seconds(player, now))}"
    return "Free"


def crime_line(crime: CrimeDefinition) -> str:
    return (
        f"{EMOJI_CRIME} **{crime.name}** (`{crime.crime_id}`): {crime.cash_label()}, "
        f"+{crime.experience} XP, {crime.success_rate:.0%} odds, "
        f"jail {format_duration(crime.jail_seconds)}"
    )


def build_profile_embed(user_name: str, player: Player, now: int) -> discord.Embed:
    embed = discord.Embed(title=f"{EMOJI_PROFILE} {user_name}")
    embed.add_field(name="Overview", value="\n".join(player_overview_lines(player)), inline=False)
    embed.add_field(name="Progress", value="\n".join(rank_progress_lines(player)), inline=False)
    embed.add_field(name="Status", value=prison_line(player, now), inline=False)
    return embed


def build_crimes_embed(player: Player) -> discord.Embed:
    crimes = crimes_for_rank(player.rank)
    embed = discord.Embed(title=f"{EMOJI_CRIME} Crimes for {player.rank}")
    embed.description = "\n".join(crime_line(crime) for crime in crimes) or "Nothing unlocked yet"
    return embed


def _chunks(lines: List[str], size: int) -> Iterable[List[str]]:
    for start in range(0, len(lines), size):
        yield lines[start:start + size]


def build_jobs_embeds(jobs: List[JobRecord]) -> list[discord.Embed]:
    lines = [f"<t:{job.created_ts}:R> `{job.type}`: {job.result}" for job in jobs]
    if not lines:
        return [discord.Embed(title=f"{EMOJI_LEDGER} Job history", description="No jobs yet")]
    pages = list(_chunks(lines, PAGE_SIZE))
    return [
        discord.Embed(
            title=f"{EMOJI_LEDGER} Job history ({index}/{len(pages)})",
            description="\n".join(page),
        )
        for index, page in enumerate(pages, start=1)
    ]


def build_players_embeds(players: List[Player]) -> list[discord.Embed]:
    lines = [
        f"`{player.user_id}` **{player.name}** [{player.role}{', banned' if player.banned else ''}] "
        f"{player.rank} P{player.prestige}, ${player.cash}"
        for player in players
    ]
    if not lines:
        return [discord.Embed(title="Players", description="No players yet")]
    pages = list(_chunks(lines, PAGE_SIZE))
    return [
        discord.Embed(title=f"Players ({index}/{len(pages)})", description="\n".join(page))
        for index, page in enumerate(pages, start=1)
    ]


__all__ = [
    "player_overview_lines",
    "rank_progress_lines",
    "prison_line",
    "crime_line",
    "build_profile_embed",
    "build_crimes_embed",
    "build_jobs_embeds",
    "build_players_embeds",
]
