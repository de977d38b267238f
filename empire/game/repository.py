"""Filesystem-backed persistence for player records and the job ledger."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional


class DataStore:
    """Utility wrapper around the project's data directories."""

    def __init__(self, base_dir: Path | str | None = None):
        default_base = Path(__file__).resolve().parents[2]
        if base_dir is None:
            resolved_base = default_base
        else:
            resolved_base = Path(base_dir).expanduser()
            if not resolved_base.is_absolute():
                resolved_base = default_base / resolved_base
        resolved_base = resolved_base.resolve()
        self.base_dir = resolved_base
        self._base_anchor = resolved_base
        self.data_dir = self.base_dir / "data"
        self.users_dir = self.data_dir / "users"
        self.jobs_dir = self.data_dir / "jobs"
        self._ensure_dirs()

    def _coerce_path(self, value: Path | str, relative_to: Path) -> Path:
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = relative_to / path
        return path.resolve()

    def _ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.users_dir.mkdir(parents=True, exist_ok=True)
        self.jobs_dir.mkdir(parents=True, exist_ok=True)

    def configure_paths(self, paths: dict | None) -> None:
        """Apply path overrides from configuration."""

        if not isinstance(paths, dict):
            self._ensure_dirs()
            return

        base_override = paths.get("base_dir")
        if base_override is not None:
            base_dir = self._coerce_path(base_override, self._base_anchor)
        else:
            base_dir = self._base_anchor
        self.base_dir = base_dir

        data_dir_value = paths.get("data_dir")
        users_dir_value = paths.get("users_dir") or paths.get("users")
        jobs_dir_value = paths.get("jobs_dir") or paths.get("jobs")

        data_dir = base_dir / "data"
        if data_dir_value is not None:
            data_dir = self._coerce_path(data_dir_value, base_dir)

        users_dir = data_dir / "users"
        jobs_dir = data_dir / "jobs"
        if users_dir_value is not None:
            users_dir = self._coerce_path(users_dir_value, base_dir)
        if jobs_dir_value is not None:
            jobs_dir = self._coerce_path(jobs_dir_value, base_dir)

        self.data_dir = data_dir
        self.users_dir = users_dir
        self.jobs_dir = jobs_dir
        self._ensure_dirs()

    # ------------------------------------------------------------------
    # Generic JSON helpers
    # ------------------------------------------------------------------
    def read_json(self, path: Path) -> Optional[dict | list]:
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def write_json(self, path: Path, data: dict | list) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=2)
        tmp.replace(path)

    # ------------------------------------------------------------------
    # Domain specific helpers
    # ------------------------------------------------------------------
    def user_path(self, uid: int) -> Path:
        return self.users_dir / f"{uid}.json"

    def jobs_path(self, uid: int) -> Path:
        return self.jobs_dir / f"{uid}.json"

    def append_job(self, uid: int, entry: dict) -> None:
        path = self.jobs_path(uid)
        entries = self.read_json(path)
        if not isinstance(entries, list):
            entries = []
        entries.append(entry)
        self.write_json(path, entries)

    def read_jobs(self, uid: int) -> list[dict]:
        entries = self.read_json(self.jobs_path(uid))
        if not isinstance(entries, list):
            return []
        return [entry for entry in entries if isinstance(entry, dict)]

    def iter_user_ids(self) -> Iterable[int]:
        for entry in self.users_dir.glob("*.json"):
            try:
                yield int(entry.stem)
            except ValueError:
                continue
