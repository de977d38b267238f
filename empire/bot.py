"""Discord bot entry point."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

import discord
from discord.ext import commands

from .storage import get_config

log = logging.getLogger("empire")

EXTENSIONS = ("empire.cogs.core", "empire.cogs.admin")


class EmpireBot(commands.Bot):
    def __init__(self) -> None:
        intents = discord.Intents.default()
        intents.message_content = False
        super().__init__(command_prefix="!", intents=intents)

    async def setup_hook(self) -> None:
        for extension in EXTENSIONS:
            await self.load_extension(extension)
        config = get_config()
        guild_id = ((config.get("discord") or {}).get("guild_id"))
        if guild_id:
            guild = discord.Object(id=int(guild_id))
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
            log.info("Slash commands synced to guild %s", guild_id)
        else:
            await self.tree.sync()
            log.info("Slash commands synced globally")

    async def on_ready(self) -> None:
        app_info = await self.application_info()
        log.info("Logged in as %s", self.user)
        log.info("Invite: %s", discord.utils.oauth_url(app_info.id, scopes=("bot", "applications.commands")))


def load_token(config: dict[str, Any]) -> str:
    token = ((config.get("discord") or {}).get("token"))
    if not token:
        raise RuntimeError("discord.token is missing from config.json")
    return token


async def run_bot(bot: EmpireBot, token: str) -> None:
    try:
        await bot.start(token)
    finally:
        if not bot.is_closed():
            await bot.close()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s: %(message)s")
    config = get_config()
    token = load_token(config)
    bot = EmpireBot()
    try:
        asyncio.run(run_bot(bot, token))
    except discord.LoginFailure as exc:
        log.error("Login failed: %s. Check discord.token in config.json.", exc)
        sys.exit(1)
    except discord.HTTPException as exc:
        log.error("Discord API error while starting the bot: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
