"""Player-facing game commands."""

from __future__ import annotations

from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from ..game.catalog import CRIMES
from ..game.constants import EMOJI_OK, EMOJI_X
from ..game.embeds import (
    build_crimes_embed,
    build_jobs_embeds,
    build_profile_embed,
)
from ..game.errors import GameError
from ..game.utils import choice_value
from ..game.views import Paginator
from ..models import now_ts
from ..storage import (
    attempt_crime,
    bust as bust_player,
    get_player,
    list_jobs,
    pay_bail,
    register_player,
)

CRIME_CHOICES = [
    app_commands.Choice(name=crime.name, value=crime.crime_id) for crime in CRIMES.values()
]


def outcome_text(result: dict) -> str:
    marker = EMOJI_OK if result.get("ok") else EMOJI_X
    return f"{marker} {result.get('message', '')}"


class Core(commands.Cog):
    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    async def _send_response(
        self,
        interaction: discord.Interaction,
        *,
        content: Optional[str] = None,
        embed: Optional[discord.Embed] = None,
        view: Optional[discord.ui.View] = None,
        ephemeral: bool = True,
    ) -> None:
        sender = interaction.response.send_message
        if interaction.response.is_done():
            sender = interaction.followup.send
        payload = {"ephemeral": ephemeral}
        if content is not None:
            payload["content"] = content
        if embed is not None:
            payload["embed"] = embed
        if view is not None:
            payload["view"] = view
        await sender(**payload)

    # ------------------------------------------------------------------
    @app_commands.command(name="register", description="Create your criminal profile")
    async def register(self, interaction: discord.Interaction) -> None:
        try:
            player = register_player(interaction.user.id, interaction.user.display_name)
        except GameError as exc:
            await self._send_response(interaction, content=str(exc))
            return
        await self._send_response(
            interaction,
            content=f"Registered successfully. Starting cash: ${player.cash}.",
            embed=build_profile_embed(interaction.user.display_name, player, now_ts()),
        )

    @app_commands.command(name="profile", description="Show your stats")
    async def profile(self, interaction: discord.Interaction) -> None:
        try:
            player = get_player(interaction.user.id)
        except GameError as exc:
            await self._send_response(interaction, content=str(exc))
            return
        embed = build_profile_embed(interaction.user.display_name, player, now_ts())
        await self._send_response(interaction, embed=embed)

    @app_commands.command(name="crimes", description="List the crimes your rank allows")
    async def crimes(self, interaction: discord.Interaction) -> None:
        try:
            player = get_player(interaction.user.id)
        except GameError as exc:
            await self._send_response(interaction, content=str(exc))
            return
        await self._send_response(interaction, embed=build_crimes_embed(player))

    # ------------------------------------------------------------------
    @app_commands.command(name="crime", description="Commit a crime")
    @app_commands.choices(crime=CRIME_CHOICES)
    async def crime(
        self,
        interaction: discord.Interaction,
        crime: app_commands.Choice[str],
    ) -> None:
        try:
            result = attempt_crime(interaction.user.id, choice_value(crime, "") or "")
        except GameError as exc:
            await self._send_response(interaction, content=str(exc))
            return
        await self._send_response(interaction, content=outcome_text(result))

    @app_commands.command(name="bail", description="Pay your way out of prison")
    async def bail(self, interaction: discord.Interaction) -> None:
        try:
            result = pay_bail(interaction.user.id)
        except GameError as exc:
            await self._send_response(interaction, content=str(exc))
            return
        await self._send_response(interaction, content=outcome_text(result))

    @app_commands.command(name="bust", description="Try to break another player out of prison")
    async def bust(self, interaction: discord.Interaction, target: discord.User) -> None:
        try:
            result = bust_player(interaction.user.id, target.id)
        except GameError as exc:
            await self._send_response(interaction, content=str(exc))
            return
        await self._send_response(interaction, content=outcome_text(result), ephemeral=False)

    @app_commands.command(name="jobs", description="Your latest jobs")
    async def jobs(self, interaction: discord.Interaction) -> None:
        try:
            get_player(interaction.user.id)
        except GameError as exc:
            await self._send_response(interaction, content=str(exc))
            return
        embeds = build_jobs_embeds(list_jobs(interaction.user.id))
        view = Paginator(embeds=embeds, owner_id=interaction.user.id) if len(embeds) > 1 else None
        await self._send_response(interaction, embed=embeds[0], view=view)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(Core(bot))


__all__ = ["Core", "CRIME_CHOICES", "outcome_text", "setup"]
