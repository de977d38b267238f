import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from empire.bot import EXTENSIONS, EmpireBot, load_token


def _fake_bot():
    tree = SimpleNamespace(copy_global_to=MagicMock(), sync=AsyncMock(return_value=[]))
    return SimpleNamespace(load_extension=AsyncMock(), tree=tree)


def test_load_token_requires_value():
    with pytest.raises(RuntimeError):
        load_token({"discord": {"token": ""}})
    assert load_token({"discord": {"token": "abc"}}) == "abc"


def test_setup_hook_syncs_to_guild(monkeypatch):
    bot = _fake_bot()
    monkeypatch.setattr("empire.bot.get_config", lambda: {"discord": {"guild_id": "123"}})

    asyncio.run(EmpireBot.setup_hook(bot))

    assert [call.args[0] for call in bot.load_extension.await_args_list] == list(EXTENSIONS)
    bot.tree.copy_global_to.assert_called_once()
    assert bot.tree.sync.await_args.kwargs["guild"].id == 123


def test_setup_hook_syncs_globally_without_guild(monkeypatch):
    bot = _fake_bot()
    monkeypatch.setattr("empire.bot.get_config", lambda: {})

    asyncio.run(EmpireBot.setup_hook(bot))

    bot.tree.copy_global_to.assert_not_called()
    bot.tree.sync.assert_awaited_once_with()
