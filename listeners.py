import logging

import discord
from discord import app_commands
from discord.ext import commands

log = logging.getLogger(__name__)

ERROR_MESSAGE = "An error occurred when trying to run this command."


async def reply_with_error(interaction: discord.Interaction):
    if interaction.response.is_done():
        return await interaction.edit_original_response(content=ERROR_MESSAGE)
    return await interaction.response.send_message(content=ERROR_MESSAGE, ephemeral=True)


async def on_command_error(ctx, error):
    # unknown commands are just noise
    if isinstance(error, commands.CommandNotFound):
        return

    log.error("Command %r failed", ctx.command and ctx.command.qualified_name, exc_info=error)

    if ctx.interaction is not None:
        await reply_with_error(ctx.interaction)
    else:
        await ctx.send(ERROR_MESSAGE)


async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError):
    log.error("App command %r failed", interaction.command and interaction.command.qualified_name, exc_info=error)
    await reply_with_error(interaction)


def register_error_listeners(bot: commands.Bot):
    bot.add_listener(on_command_error, "on_command_error")
    bot.tree.on_error = on_app_command_error
