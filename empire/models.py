from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from uuid import uuid4
import time

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

BOTTOM_RANK = "Street Rat"

ROLE_USER  = "user"
ROLE_MOD   = "mod"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_MOD, ROLE_ADMIN)
STAFF_ROLES = (ROLE_MOD, ROLE_ADMIN)

# Ledger entry types besides crime ids
JOB_BAIL      = "bail"
JOB_BUST      = "bust"
JOB_BUST_FAIL = "bust_fail"

# -----------------------------------------------------------------------------
# Time
# -----------------------------------------------------------------------------

def now_ts() -> int:
    return int(time.time())

def make_bar(current: int, need: int, length: int = 12) -> str:
    """Monospace progress bar."""
    if need <= 0:
        return "■" * length
    filled = max(0, min(length, (current * length) // need))
    return "■" * filled + "□" * (length - filled)

# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------

class Player(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int
    name: str = ""
    # seeded from the economy balance on registration
    cash: int = 0
    respect: int = 0
    heat: int = 0
    experience: int = 0
    rank: str = BOTTOM_RANK
    prestige: int = 0
    # epoch seconds; None or a past value means the player is free
    in_prison_until: Optional[int] = None

    role: str = ROLE_USER
    banned: bool = False
    created_ts: int = Field(default_factory=now_ts)

    def ensure_bounds(self):
        self.heat = max(0, int(self.heat))
        self.experience = max(0, int(self.experience))
        self.prestige = max(0, int(self.prestige))
        if self.role not in ROLES:
            self.role = ROLE_USER

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


class JobRecord(BaseModel):
    """Single append-only ledger entry."""

    job_id: str = Field(default_factory=lambda: uuid4().hex[:12])
    type: str
    player_id: int
    result: str = ""

    experience_at_time: Optional[int] = None
    rank_at_time: Optional[str] = None
    prestige_at_time: Optional[int] = None

    prison_start: Optional[int] = None
    prison_end: Optional[int] = None

    created_ts: int = Field(default_factory=now_ts)
