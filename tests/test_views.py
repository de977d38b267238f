import asyncio
import unittest

import discord

from empire.game.embeds import build_jobs_embeds, build_players_embeds, build_profile_embed
from empire.game.views import Paginator
from empire.models import JobRecord, Player


class PaginatorTests(unittest.TestCase):
    def setUp(self):
        jobs = [
            JobRecord(type="pickpocket", player_id=1, result=f"Job {i}", created_ts=1000 + i)
            for i in range(25)
        ]
        self.embeds = build_jobs_embeds(jobs)

        async def _create_view():
            return Paginator(embeds=self.embeds, owner_id=1)

        self.view = asyncio.run(_create_view())

    def test_jobs_are_split_into_pages(self):
        self.assertEqual(len(self.embeds), 3)
        self.assertIn("1/3", self.embeds[0].title)

    def test_turn_page_updates_buttons(self):
        self.assertTrue(self.view.prev_button.disabled)
        self.assertFalse(self.view.next_button.disabled)

        self.view.turn_page(5)
        self.assertIs(self.view.current(), self.embeds[-1])
        self.assertFalse(self.view.prev_button.disabled)
        self.assertTrue(self.view.next_button.disabled)

    def test_requires_embeds(self):
        async def _create_empty():
            return Paginator(embeds=[])

        with self.assertRaises(ValueError):
            asyncio.run(_create_empty())


class EmbedTests(unittest.TestCase):
    def test_profile_shows_prison_status(self):
        player = Player(user_id=1, name="Vito", in_prison_until=2000)
        embed = build_profile_embed("Vito", player, now=1880)
        self.assertIsInstance(embed, discord.Embed)
        status = [field.value for field in embed.fields if field.name == "Status"][0]
        self.assertIn("2m", status)

    def test_profile_of_top_rank(self):
        player = Player(user_id=1, experience=300000, rank="Godfather", prestige=2)
        embed = build_profile_embed("Don", player, now=0)
        progress = [field.value for field in embed.fields if field.name == "Progress"][0]
        self.assertIn("Top of the ladder", progress)
        self.assertIn("Prestige", progress)

    def test_empty_lists(self):
        self.assertEqual(len(build_jobs_embeds([])), 1)
        self.assertEqual(build_players_embeds([])[0].description, "No players yet")


if __name__ == "__main__":
    unittest.main()
