"""Pytest configuration and discord fakes."""
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
from discord.ext import commands


def make_user(user_id=1):
    user = MagicMock(spec=discord.Member)
    user.id = user_id
    user.display_name = f"user{user_id}"
    return user


def make_channel():
    channel = MagicMock(spec=discord.TextChannel)
    channel.send = AsyncMock(side_effect=lambda **kwargs: make_message(channel))
    return channel


def make_message(channel=None):
    message = MagicMock(spec=discord.Message)
    message.channel = channel
    message.edit = AsyncMock()
    return message


def make_interaction(user=None, deferred=False):
    """Interaction whose response flips to done once it's been used, like the real one."""
    interaction = MagicMock(spec=discord.Interaction)
    interaction.user = user or make_user()
    interaction.channel = make_channel()
    interaction.guild = None

    response = MagicMock()
    response.is_done.return_value = deferred

    async def respond(*args, **kwargs):
        response.is_done.return_value = True

    response.send_message = AsyncMock(side_effect=respond)
    response.defer = AsyncMock(side_effect=respond)
    interaction.response = response

    interaction.original_response = AsyncMock(return_value=make_message(interaction.channel))
    interaction.edit_original_response = AsyncMock(return_value=make_message(interaction.channel))
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    return interaction


def make_context(user=None, interaction=None):
    ctx = MagicMock(spec=commands.Context)
    ctx.author = user or make_user()
    ctx.channel = make_channel()
    ctx.guild = None
    ctx.interaction = interaction
    ctx.command = None
    ctx.send = AsyncMock()
    return ctx


def http_error(text="boom"):
    return discord.HTTPException(MagicMock(status=500, reason="Internal Server Error"), text)


@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def interaction(user):
    return make_interaction(user)


@pytest.fixture
def ctx(user):
    return make_context(user)
