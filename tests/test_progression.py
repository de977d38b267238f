import random
import unittest

from empire.game.balance import ProgressionBalance
from empire.game.catalog import CRIMES, get_rank
from empire.game.errors import RejectedAction
from empire.game.progression import (
    apply_prestige,
    prestige_threshold,
    resolve_crime,
    success_chance,
    sync_rank,
)
from empire.models import Player

NOW = 1_700_000_000


class ScriptedRandom:
    """Returns queued values for ``random()``; ``randint`` picks ``pick``."""

    def __init__(self, draws, pick="max"):
        self.draws = list(draws)
        self.pick = pick
        self.random_calls = 0

    def random(self):
        self.random_calls += 1
        return self.draws.pop(0)

    def randint(self, low, high):
        return high if self.pick == "max" else low


def _player(**overrides) -> Player:
    player = Player(user_id=7, name="Vito", **overrides)
    sync_rank(player)
    return player


class GateTests(unittest.TestCase):
    def setUp(self):
        self.balance = ProgressionBalance()

    def test_rank_too_low_is_rejected_without_mutation(self):
        player = _player(cash=1000, experience=50, heat=3)
        before = player.model_dump()
        rng = ScriptedRandom([0.0])

        with self.assertRaises(RejectedAction):
            resolve_crime(player, CRIMES["rob_bank"], rng, NOW, self.balance)

        self.assertEqual(player.model_dump(), before)
        self.assertEqual(rng.random_calls, 0)

    def test_incarcerated_player_is_rejected_for_every_crime(self):
        for crime in CRIMES.values():
            with self.subTest(crime=crime.crime_id):
                player = _player(experience=10**6, in_prison_until=NOW + 30)
                before = player.model_dump()
                with self.assertRaises(RejectedAction):
                    resolve_crime(player, crime, ScriptedRandom([0.0]), NOW, self.balance)
                self.assertEqual(player.model_dump(), before)

    def test_expired_sentence_does_not_block(self):
        player = _player(in_prison_until=NOW - 1)
        result = resolve_crime(player, CRIMES["pickpocket"], ScriptedRandom([0.0]), NOW, self.balance)
        self.assertTrue(result["ok"])

    def test_cost_crime_requires_cash(self):
        player = _player(cash=299, experience=150)
        with self.assertRaises(RejectedAction) as ctx:
            resolve_crime(player, CRIMES["bribe"], ScriptedRandom([0.0]), NOW, self.balance)
        self.assertIn("300", str(ctx.exception))
        self.assertEqual(player.cash, 299)


class OutcomeTests(unittest.TestCase):
    def setUp(self):
        self.balance = ProgressionBalance()

    def test_success_applies_rewards(self):
        crime = CRIMES["smuggling"]
        player = _player(cash=100, experience=120, heat=2, respect=4)

        result = resolve_crime(player, crime, ScriptedRandom([0.1], pick="max"), NOW, self.balance)

        self.assertTrue(result["ok"])
        self.assertEqual(result["cash"], crime.cash_max)
        self.assertEqual(player.cash, 100 + crime.cash_max)
        self.assertEqual(player.experience, 120 + crime.experience)
        self.assertEqual(player.heat, 2 + crime.heat)
        self.assertEqual(player.respect, 4 + crime.respect)
        self.assertIsNone(player.in_prison_until)
        self.assertEqual(result["job"].experience_at_time, player.experience)
        self.assertEqual(result["job"].rank_at_time, player.rank)
        self.assertEqual(result["job"].prestige_at_time, 0)
        self.assertIsNone(result["job"].prison_end)

    def test_heat_never_drops_below_zero(self):
        player = _player(cash=1000, experience=150, heat=2)
        resolve_crime(player, CRIMES["bribe"], ScriptedRandom([0.0]), NOW, self.balance)
        self.assertEqual(player.heat, 0)
        self.assertEqual(player.cash, 700)

    def test_rolled_cash_stays_in_range(self):
        crime = CRIMES["pickpocket"]
        rng = random.Random(42)
        for _ in range(300):
            player = _player(cash=0)
            result = resolve_crime(player, crime, rng, NOW, self.balance)
            if result["ok"]:
                self.assertGreaterEqual(player.cash, crime.cash_min)
                self.assertLessEqual(player.cash, crime.cash_max)
            else:
                self.assertEqual(player.cash, 0)

    def test_failure_jails_for_exact_duration(self):
        crime = CRIMES["steal_car"]
        player = _player(cash=500, experience=900, heat=4)

        result = resolve_crime(player, crime, ScriptedRandom([0.99]), NOW, self.balance)

        self.assertFalse(result["ok"])
        self.assertEqual(player.in_prison_until, NOW + crime.jail_seconds)
        self.assertEqual(player.cash, 500)
        self.assertEqual(player.experience, 900)
        self.assertEqual(player.heat, 4)
        self.assertEqual(result["job"].prison_start, NOW)
        self.assertEqual(result["job"].prison_end, NOW + crime.jail_seconds)
        self.assertIsNone(result["job"].experience_at_time)
        self.assertIn("10m", result["message"])

    def test_rank_follows_new_experience(self):
        player = _player(experience=95)
        result = resolve_crime(player, CRIMES["pickpocket"], ScriptedRandom([0.0]), NOW, self.balance)
        self.assertEqual(player.rank, "Errand Boy")
        self.assertTrue(result["rank_changed"])
        self.assertIn("Errand Boy", result["message"])
        self.assertEqual(player.rank, get_rank(player.experience))


class PrestigeTests(unittest.TestCase):
    def setUp(self):
        self.balance = ProgressionBalance()

    def test_threshold_doubles(self):
        self.assertEqual(prestige_threshold(0, self.balance), 250000)
        self.assertEqual(prestige_threshold(1, self.balance), 500000)
        self.assertEqual(prestige_threshold(3, self.balance), 2000000)

    def test_success_chance_scales_with_prestige(self):
        crime = CRIMES["rob_bank"]
        self.assertAlmostEqual(success_chance(crime, 0, self.balance), 0.2)
        self.assertAlmostEqual(success_chance(crime, 2, self.balance), 0.22)

    def test_chance_above_one_always_succeeds(self):
        crime = CRIMES["pickpocket"]
        self.assertGreater(success_chance(crime, 4, self.balance), 1.0)
        player = _player(prestige=4)
        result = resolve_crime(player, crime, ScriptedRandom([0.999999]), NOW, self.balance)
        self.assertTrue(result["ok"])

    def test_rollover_after_reaching_godfather(self):
        player = _player(experience=249_000, prestige=0)
        self.assertEqual(player.rank, "Boss")

        result = resolve_crime(player, CRIMES["rob_bank"], ScriptedRandom([0.0]), NOW, self.balance)

        self.assertTrue(result["prestiged"])
        self.assertEqual(player.experience, 0)
        self.assertEqual(player.rank, "Street Rat")
        self.assertEqual(player.prestige, 1)
        self.assertIn("Prestige 1", result["message"])
        self.assertEqual(result["job"].prestige_at_time, 1)

    def test_no_rollover_below_doubled_threshold(self):
        player = _player(experience=400_000, prestige=1)
        result = resolve_crime(player, CRIMES["rob_bank"], ScriptedRandom([0.0]), NOW, self.balance)
        self.assertFalse(result["prestiged"])
        self.assertEqual(player.experience, 401_500)
        self.assertEqual(player.rank, "Godfather")
        self.assertEqual(player.prestige, 1)

    def test_failure_never_prestiges(self):
        player = _player(experience=300_000, prestige=0)
        result = resolve_crime(player, CRIMES["rob_bank"], ScriptedRandom([0.99]), NOW, self.balance)
        self.assertFalse(result["prestiged"])
        self.assertEqual(player.prestige, 0)
        self.assertEqual(player.experience, 300_000)

    def test_apply_prestige_requires_top_rank(self):
        player = _player(experience=200_000)
        self.assertFalse(apply_prestige(player, self.balance))
        self.assertEqual(player.prestige, 0)


if __name__ == "__main__":
    unittest.main()
