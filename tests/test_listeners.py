from unittest.mock import MagicMock

from discord.ext import commands

from conftest import make_context, make_interaction
from listeners import (
    ERROR_MESSAGE,
    on_app_command_error,
    on_command_error,
    register_error_listeners,
)


async def test_prefix_command_error_replies_in_channel(ctx, caplog):
    await on_command_error(ctx, commands.CommandError("kaboom"))

    ctx.send.assert_awaited_once_with(ERROR_MESSAGE)
    assert "kaboom" in caplog.text


async def test_unknown_command_is_ignored(ctx):
    await on_command_error(ctx, commands.CommandNotFound("nope"))
    ctx.send.assert_not_awaited()


async def test_hybrid_error_replies_ephemerally(user):
    interaction = make_interaction(user)
    ctx = make_context(user, interaction=interaction)

    await on_command_error(ctx, commands.CommandError("kaboom"))

    interaction.response.send_message.assert_awaited_once_with(content=ERROR_MESSAGE, ephemeral=True)
    ctx.send.assert_not_awaited()


async def test_app_command_error_edits_acknowledged_reply(user):
    interaction = make_interaction(user, deferred=True)

    await on_app_command_error(interaction, RuntimeError("kaboom"))

    interaction.edit_original_response.assert_awaited_once_with(content=ERROR_MESSAGE)
    interaction.response.send_message.assert_not_awaited()


def test_register_error_listeners():
    bot = MagicMock(spec=commands.Bot)
    bot.tree = MagicMock()

    register_error_listeners(bot)

    bot.add_listener.assert_called_once_with(on_command_error, "on_command_error")
    assert bot.tree.on_error is on_app_command_error
