import asyncio
import enum
import inspect
import logging
from dataclasses import dataclass
from typing import NamedTuple

import discord
from discord.ext import commands
from discord.ui import Button, Select, View

from paged_message.actions import ActionKind, ActionRegistry
from paged_message.errors import DispatchError, PageResolutionError
from paged_message.layout import MAX_SELECT_OPTIONS, partition_controls, sample_page_indices
from paged_message.pages import DynamicPage, as_page, merge_payload, resolve_page
from paged_message.state import ActionContext, NavigationState

log = logging.getLogger(__name__)


class ResponseOrigin(enum.Enum):
    INTERACTIVE = "interactive"
    PLAIN_MESSAGE = "plain_message"


@dataclass
class ResponseHandle:
    """The message this paginator is currently showing, and how it got there."""
    origin: ResponseOrigin
    message: discord.Message
    interaction: discord.Interaction | None = None


class SelectMenuContext(NamedTuple):
    author: discord.abc.User | None
    channel: object
    guild: discord.Guild | None


async def default_select_menu_option(page_number, context):
    return {"label": f"Page {page_number}"}


def interaction_of(target):
    if isinstance(target, discord.Interaction):
        return target
    if isinstance(target, commands.Context):
        return target.interaction
    return None


def author_of(target):
    if isinstance(target, discord.Interaction):
        return target.user
    return target.author


class PaginatorView(View):
    def __init__(self, paginator, owner=None, timeout=300.0):
        super().__init__(timeout=timeout)
        self.paginator = paginator
        self.owner = owner

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if self.owner is not None and interaction.user.id != self.owner.id:
            await interaction.response.send_message("❌ This paginator isn’t for you.", ephemeral=True)
            return False
        return True

    async def on_timeout(self):
        try:
            await self.paginator.remove_controls()
        except DispatchError as exc:
            # most likely the message was deleted in the meantime
            log.warning("Could not remove paginator controls after timeout: %s", exc)

    async def on_error(self, interaction: discord.Interaction, error: Exception, item):
        log.error("Paginator action %r failed", getattr(item, "custom_id", item), exc_info=error)
        if interaction.response.is_done():
            await interaction.followup.send("An error occurred while changing the page.", ephemeral=True)
        else:
            await interaction.response.send_message("An error occurred while changing the page.", ephemeral=True)


class PaginatedMessage:
    """Shows one page at a time in a single message with navigation controls.

    Pages are static payloads (``str``, :class:`discord.Embed` or a dict of
    send kwargs) or builders called as ``builder(index, pages, paginator)``
    when they become current. ``template`` is merged over every page.
    """

    def __init__(self, pages=None, template=None, actions=None, select_menu_option=None, timeout=300.0):
        self.pages = []
        self.template = template
        self.actions = ActionRegistry(actions)
        self.select_menu_option = select_menu_option or default_select_menu_option
        self.timeout = timeout
        self.response = None
        self.view = None
        self._state = NavigationState()
        self._lock = asyncio.Lock()

        if pages:
            self.add_pages(pages)

    @property
    def index(self):
        return self._state.index

    def add_page(self, page):
        self.pages.append(as_page(page))
        return self

    def add_pages(self, pages):
        for page in pages:
            self.add_page(page)
        return self

    def add_page_builder(self, builder):
        return self.add_page(DynamicPage(builder))

    def set_actions(self, actions):
        self.actions.set_actions(actions)
        return self

    def add_actions(self, actions):
        self.actions.add_actions(actions)
        return self

    def add_action(self, action):
        self.actions.add_action(action)
        return self

    async def run(self, target, user=None):
        await self.render(target, user if user is not None else author_of(target))
        return self

    async def render(self, target, user=None):
        # edits against the same message must not overtake each other
        async with self._lock:
            await self._render(target, user)

    async def _render(self, target, user):
        if not self.pages:
            raise PageResolutionError("there are no pages to display")

        index = self.index
        page = await resolve_page(self.pages[index], index, list(self.pages), self)
        payload = merge_payload(page, self.template)

        # a single page has nothing to navigate to
        if len(self.pages) > 1:
            controls = await self._build_controls(target, user)
            payload["view"] = self._attach(partition_controls(controls), user)

        await self._dispatch(target, payload)

    async def _build_controls(self, target, user):
        controls = []
        for action in self.actions:
            if action.kind is ActionKind.BUTTON:
                item = Button(
                    custom_id=action.custom_id,
                    style=action.style,
                    emoji=action.emoji,
                    label=action.label,
                )
            elif action.kind is ActionKind.SELECT:
                item = Select(
                    custom_id=action.custom_id,
                    placeholder=action.placeholder,
                    options=await self._select_options(target, user),
                )
            else:
                raise TypeError(f"unhandled action kind: {action.kind!r}")

            self._bind(item, action)
            controls.append(item)
        return controls

    async def _select_options(self, target, user):
        page_count = len(self.pages)
        if page_count > MAX_SELECT_OPTIONS:
            return [
                discord.SelectOption(label=f"Page {i + 1}", value=str(i))
                for i in sample_page_indices(page_count)
            ]

        context = SelectMenuContext(user, target.channel, target.guild)
        return list(await asyncio.gather(*(
            self._select_option(i, context) for i in range(page_count)
        )))

    async def _select_option(self, index, context):
        fields = self.select_menu_option(index + 1, context)
        if inspect.isawaitable(fields):
            fields = await fields
        return discord.SelectOption(**{**fields, "value": str(index)})

    def _bind(self, item, action):
        async def callback(interaction: discord.Interaction):
            values = tuple(item.values) if isinstance(item, Select) else ()
            await self.handle_action(interaction, action, values)

        item.callback = callback

    def _attach(self, layout, user):
        # a stopped or timed out view no longer dispatches clicks
        if self.view is None or self.view.is_finished():
            owner = self.view.owner if self.view is not None else user
            self.view = PaginatorView(self, owner=owner, timeout=self.timeout)

        self.view.clear_items()
        for item in layout.items:
            self.view.add_item(item)
        return self.view

    async def handle_action(self, interaction: discord.Interaction, action, values=()):
        await interaction.response.defer()

        # Interaction tokens expire after 15 minutes. A deferred click edits the
        # message it came from, so later edits go through the freshest token.
        if self.response is not None and self.response.origin is ResponseOrigin.INTERACTIVE:
            self.response.interaction = interaction

        transition = action.handler(ActionContext(self.index, len(self.pages), tuple(values)))
        log.debug("Paginator action %s -> %r", action.custom_id, transition)

        if self.apply(transition):
            await self.remove_controls()
        else:
            await self.render(interaction, interaction.user)

    def apply(self, transition):
        """Apply a handler's transition. Returns True when it stopped the session."""
        stopped = self._state.apply(transition, len(self.pages))
        if stopped and self.view is not None:
            self.view.stop()
        return stopped

    async def remove_controls(self):
        if self.response is None:
            return
        async with self._lock:
            await self._edit(self.response, {"view": None})

    async def _dispatch(self, target, payload):
        if self.response is not None:
            await self._edit(self.response, payload)
            return

        interaction = interaction_of(target)
        try:
            if interaction is not None:
                if interaction.response.is_done():
                    log.debug("First render: editing deferred interaction response")
                    message = await interaction.edit_original_response(**payload)
                else:
                    log.debug("First render: replying to interaction")
                    await interaction.response.send_message(**payload, ephemeral=False)
                    message = await interaction.original_response()
                handle = ResponseHandle(ResponseOrigin.INTERACTIVE, message, interaction)
            else:
                log.debug("First render: sending new message to channel %s", target.channel)
                message = await target.channel.send(**payload)
                handle = ResponseHandle(ResponseOrigin.PLAIN_MESSAGE, message)
        except discord.HTTPException as exc:
            raise DispatchError(f"sending the paginated message failed: {exc}") from exc

        self.response = handle

    async def _edit(self, handle, payload):
        try:
            # an interactive handle only exists once its interaction was answered
            if handle.origin is ResponseOrigin.INTERACTIVE:
                await handle.interaction.edit_original_response(**payload)
            else:
                await handle.message.edit(**payload)
        except discord.HTTPException as exc:
            raise DispatchError(f"editing the paginated message failed: {exc}") from exc
