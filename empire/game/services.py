"""High level game logic built on top of the data store."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .repository import DataStore
from .balance import BalanceProfile, load_balance_profile
from .catalog import get_crime, get_rank
from .errors import InputError, NotFound, RejectedAction
from .prison import resolve_bail, resolve_bust
from .progression import resolve_crime, sync_rank
from ..models import (
    JobRecord,
    Player,
    ROLES,
    ROLE_ADMIN,
    ROLE_USER,
    now_ts,
)

log = logging.getLogger("empire.game")


class GameService:
    """Encapsulates the gameplay rules and persistence helpers.

    ``rng`` needs ``random()`` and ``randint()``; ``clock`` returns epoch
    seconds. Both default to the real thing and are swapped out in tests.
    """

    def __init__(
        self,
        store: DataStore | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self.store = store or DataStore()
        self.rng = rng or random.Random()
        self.clock = clock or now_ts
        self._config_cache: dict | None = None
        self._config_cache_key: tuple[str, int | None] | None = None
        self._config_path: Path | None = None
        self._config_default_base = self.store.base_dir
        self._balance_cache: BalanceProfile | None = None

    def _load_config(self) -> dict:
        candidates: list[Path] = []
        if self._config_path is not None:
            candidates.append(self._config_path)

        default_path = (self._config_default_base / "config.json").resolve()
        if default_path not in candidates:
            candidates.append(default_path)

        current_path = (self.store.base_dir / "config.json").resolve()
        if current_path not in candidates:
            candidates.append(current_path)

        path = candidates[0]
        mtime: int | None = None
        for candidate in candidates:
            try:
                current_mtime = candidate.stat().st_mtime_ns
            except FileNotFoundError:
                continue

            path = candidate
            mtime = current_mtime
            if self._config_path != candidate:
                self._config_path = candidate
            break

        cache_key = (str(path), mtime)

        if self._config_cache is not None and self._config_cache_key == cache_key:
            return self._config_cache

        if mtime is None:
            data = {}
        else:
            try:
                with path.open("r", encoding="utf-8") as handle:
                    data = json.load(handle)
            except (FileNotFoundError, json.JSONDecodeError):
                log.warning("Ignoring unreadable config file %s", path)
                data = {}

        if not isinstance(data, dict):
            data = {}

        paths_cfg = data.get("paths")
        self.store.configure_paths(paths_cfg if isinstance(paths_cfg, dict) else None)

        self._config_cache = data
        self._config_cache_key = cache_key
        self._balance_cache = None
        return self._config_cache

    def get_config(self) -> dict:
        return self._load_config()

    @property
    def config(self) -> dict:
        return self._load_config()

    def get_balance_profile(self) -> BalanceProfile:
        if self._balance_cache is None:
            config = self._load_config()
            balance_cfg = config.get("balance")
            mapping = balance_cfg if isinstance(balance_cfg, dict) else None
            self._balance_cache = load_balance_profile(mapping)
        return self._balance_cache

    def _configured_admin_ids(self) -> set[int]:
        admin_cfg = self._load_config().get("admin")
        raw_ids = (admin_cfg or {}).get("user_ids", []) if isinstance(admin_cfg, dict) else []
        ids: set[int] = set()
        for raw in raw_ids if isinstance(raw_ids, list) else []:
            try:
                ids.add(int(raw))
            except (TypeError, ValueError):
                continue
        return ids

    # ------------------------------------------------------------------
    # Player persistence
    # ------------------------------------------------------------------
    def save_player(self, player: Player) -> None:
        self._load_config()
        player.ensure_bounds()
        sync_rank(player)
        payload = player.model_dump(mode="json")
        self.store.write_json(self.store.user_path(player.user_id), payload)

    def load_player(self, uid: int) -> Optional[Player]:
        # applies configured paths before the store is touched
        self._load_config()
        raw = self.store.read_json(self.store.user_path(uid))
        if not raw:
            return None

        player = Player(**raw)
        player.ensure_bounds()
        # heals records written with a stale rank
        sync_rank(player)
        return player

    def get_player(self, uid: int) -> Player:
        player = self.load_player(uid)
        if player is None:
            raise NotFound("Use /register first.")
        return player

    def _target_player(self, uid: int) -> Player:
        player = self.load_player(uid)
        if player is None:
            raise NotFound("Target player not found.")
        return player

    def _active_player(self, uid: int) -> Player:
        player = self.get_player(uid)
        if player.banned:
            raise RejectedAction("You are banned.")
        return player

    def register_player(self, uid: int, name: str = "") -> Player:
        if self.load_player(uid) is not None:
            raise RejectedAction("You already have a profile.")

        first_player = next(iter(self.iter_user_ids()), None) is None
        economy = self.get_balance_profile().economy
        player = Player(
            user_id=uid,
            name=(name or "").strip() or str(uid),
            cash=max(0, economy.starting_cash),
            role=ROLE_ADMIN if first_player else ROLE_USER,
            created_ts=self.clock(),
        )
        self.save_player(player)
        log.info("Registered player %s (%s) as %s", uid, player.name, player.role)
        return player

    # ------------------------------------------------------------------
    # Job ledger
    # ------------------------------------------------------------------
    def record_job(self, job: JobRecord) -> None:
        self._load_config()
        self.store.append_job(job.player_id, job.model_dump(mode="json"))

    def list_jobs(self, uid: int, limit: int = 20) -> List[JobRecord]:
        self._load_config()
        entries = [JobRecord(**raw) for raw in self.store.read_jobs(uid)]
        # appended in order, so reversing keeps same-second entries newest first
        entries.reverse()
        entries.sort(key=lambda job: job.created_ts, reverse=True)
        return entries[: max(0, int(limit))]

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    @staticmethod
    def get_rank(experience: int) -> str:
        return get_rank(experience)

    def attempt_crime(self, uid: int, crime_id: str) -> dict:
        crime = get_crime(crime_id)
        player = self._active_player(uid)
        balance = self.get_balance_profile().progression

        try:
            result = resolve_crime(player, crime, self.rng, self.clock(), balance)
        except RejectedAction as exc:
            log.debug("Crime %s rejected for %s: %s", crime.crime_id, uid, exc)
            raise

        self.save_player(player)
        self.record_job(result["job"])
        if result["prestiged"]:
            log.info("Player %s reached prestige %s", uid, player.prestige)
        result["player"] = player
        return result

    def pay_bail(self, uid: int) -> dict:
        player = self._active_player(uid)
        balance = self.get_balance_profile().prison

        try:
            result = resolve_bail(player, self.clock(), balance)
        except RejectedAction as exc:
            log.debug("Bail rejected for %s: %s", uid, exc)
            raise

        self.save_player(player)
        self.record_job(result["job"])
        result["player"] = player
        return result

    def bust(self, rescuer_uid: int, target_uid: int) -> dict:
        rescuer = self._active_player(rescuer_uid)
        target = self._target_player(target_uid)
        balance = self.get_balance_profile().prison

        try:
            result = resolve_bust(rescuer, target, self.rng, self.clock(), balance)
        except RejectedAction as exc:
            log.debug("Bust of %s by %s rejected: %s", target_uid, rescuer_uid, exc)
            raise

        # only one side changes per outcome
        if result["ok"]:
            self.save_player(target)
        else:
            self.save_player(rescuer)
        self.record_job(result["job"])
        result["player"] = rescuer
        result["target"] = target
        return result

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    def is_admin(self, uid: int) -> bool:
        if uid in self._configured_admin_ids():
            return True
        player = self.load_player(uid)
        return bool(player and player.is_staff and not player.banned)

    def require_admin(self, uid: int) -> None:
        if not self.is_admin(uid):
            raise RejectedAction("Forbidden")

    def list_players(self) -> List[Player]:
        players: List[Player] = []
        for uid in sorted(self.iter_user_ids()):
            player = self.load_player(uid)
            if player is not None:
                players.append(player)
        return players

    def set_banned(self, uid: int, banned: bool) -> Player:
        player = self._target_player(uid)
        player.banned = bool(banned)
        self.save_player(player)
        log.info("Player %s %s", uid, "banned" if banned else "unbanned")
        return player

    def adjust_cash(self, uid: int, amount: int) -> Player:
        player = self._target_player(uid)
        player.cash += int(amount)
        self.save_player(player)
        log.info("Cash of player %s adjusted by %+d", uid, int(amount))
        return player

    def set_role(self, uid: int, role: str) -> Player:
        role_norm = (role or "").strip().lower()
        if role_norm not in ROLES:
            raise InputError(f"Unknown role: {role}")
        player = self._target_player(uid)
        player.role = role_norm
        self.save_player(player)
        log.info("Player %s is now %s", uid, role_norm)
        return player

    def iter_user_ids(self) -> Iterable[int]:
        self._load_config()
        return self.store.iter_user_ids()
