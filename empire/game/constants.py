"""Display constants."""

EMOJI_PROFILE = "👤"
EMOJI_COIN = "💵"
EMOJI_RESPECT = "🤝"
EMOJI_HEAT = "🔥"
EMOJI_RANK = "🎖️"
EMOJI_PRESTIGE = "🌟"
EMOJI_PRISON = "⛓️"
EMOJI_CRIME = "🔫"
EMOJI_LEDGER = "📜"
EMOJI_OK = "✅"
EMOJI_X = "❌"

__all__ = [name for name in globals().keys() if name.startswith("EMOJI_")]
