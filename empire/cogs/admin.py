"""Administrative commands."""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from ..game.errors import GameError
from ..game.utils import choice_value
from ..game.embeds import build_players_embeds
from ..game.views import Paginator
from ..models import ROLES
from ..storage import (
    adjust_cash,
    get_config,
    list_players,
    require_admin,
    set_banned,
    set_role,
)

ROLE_CHOICES = [app_commands.Choice(name=role, value=role) for role in ROLES]


class Admin(commands.Cog):
    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    async def _reply(self, interaction: discord.Interaction, content: str, **extra) -> None:
        await interaction.response.send_message(content, ephemeral=True, **extra)

    async def _deny(self, interaction: discord.Interaction) -> bool:
        try:
            require_admin(interaction.user.id)
        except GameError as exc:
            await self._reply(interaction, str(exc))
            return True
        return False

    @app_commands.command(name="sync", description="Re-register slash commands")
    async def sync(self, interaction: discord.Interaction) -> None:
        if await self._deny(interaction):
            return
        config = get_config()
        guild_id = ((config.get("discord") or {}).get("guild_id"))
        try:
            if guild_id:
                guild = discord.Object(id=int(guild_id))
                synced = await self.bot.tree.sync(guild=guild)
            else:
                synced = await self.bot.tree.sync()
            await self._reply(interaction, f"Synced {len(synced)} commands")
        except discord.HTTPException as exc:  # pragma: no cover - debug branch
            await self._reply(interaction, f"Sync failed: {exc}")

    @app_commands.command(name="players", description="List every player")
    async def players(self, interaction: discord.Interaction) -> None:
        if await self._deny(interaction):
            return
        embeds = build_players_embeds(list_players())
        extra = {"embed": embeds[0]}
        if len(embeds) > 1:
            extra["view"] = Paginator(embeds=embeds, owner_id=interaction.user.id)
        await interaction.response.send_message(ephemeral=True, **extra)

    @app_commands.command(name="ban", description="Ban or unban a player")
    async def ban(self, interaction: discord.Interaction, target: discord.User, banned: bool = True) -> None:
        if await self._deny(interaction):
            return
        try:
            set_banned(target.id, banned)
        except GameError as exc:
            await self._reply(interaction, str(exc))
            return
        await self._reply(interaction, f"User {'banned' if banned else 'unbanned'}")

    @app_commands.command(name="cash", description="Give or take cash")
    async def cash(self, interaction: discord.Interaction, target: discord.User, amount: int) -> None:
        if await self._deny(interaction):
            return
        try:
            player = adjust_cash(target.id, amount)
        except GameError as exc:
            await self._reply(interaction, str(exc))
            return
        await self._reply(interaction, f"Cash updated: ${player.cash}")

    @app_commands.command(name="role", description="Change a player's role")
    @app_commands.choices(role=ROLE_CHOICES)
    async def role(
        self,
        interaction: discord.Interaction,
        target: discord.User,
        role: app_commands.Choice[str],
    ) -> None:
        if await self._deny(interaction):
            return
        try:
            player = set_role(target.id, choice_value(role, "") or "")
        except GameError as exc:
            await self._reply(interaction, str(exc))
            return
        await self._reply(interaction, f"Role updated: {player.role}")


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(Admin(bot))


__all__ = ["Admin", "setup"]
