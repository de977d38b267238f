"""Discord UI components."""

from __future__ import annotations

from typing import List, Optional

import discord

__all__ = ["Paginator"]


class Paginator(discord.ui.View):
    """Minimal pager over a list of embeds."""

    def __init__(
        self,
        *,
        embeds: List[discord.Embed],
        owner_id: Optional[int] = None,
        timeout: Optional[float] = 120.0,
    ) -> None:
        super().__init__(timeout=timeout)
        if not embeds:
            raise ValueError("Paginator requires at least one embed")
        self.embeds = embeds
        self.owner_id = owner_id
        self.index = 0
        self.prev_button = discord.ui.Button(label="←", style=discord.ButtonStyle.secondary)
        self.next_button = discord.ui.Button(label="→", style=discord.ButtonStyle.secondary)
        self.prev_button.callback = self._on_prev
        self.next_button.callback = self._on_next
        self.prev_button.disabled = True
        self.next_button.disabled = len(embeds) <= 1
        self.add_item(self.prev_button)
        self.add_item(self.next_button)

    def current(self) -> discord.Embed:
        return self.embeds[self.index]

    def turn_page(self, delta: int) -> discord.Embed:
        self.index = max(0, min(len(self.embeds) - 1, self.index + delta))
        self.prev_button.disabled = self.index == 0
        self.next_button.disabled = self.index >= len(self.embeds) - 1
        return self.current()

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if self.owner_id is None:
            return True
        return interaction.user.id == self.owner_id

    async def _on_prev(self, interaction: discord.Interaction) -> None:
        await interaction.response.edit_message(embed=self.turn_page(-1), view=self)

    async def _on_next(self, interaction: discord.Interaction) -> None:
        await interaction.response.edit_message(embed=self.turn_page(1), view=self)
