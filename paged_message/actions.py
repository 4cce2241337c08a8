import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import discord

from paged_message.errors import ConfigurationError
from paged_message.layout import MAX_BUTTONS_PER_ROW, MAX_SELECT_CONTROLS
from paged_message.state import SetIndex, Stop

log = logging.getLogger(__name__)


class ActionKind(enum.Enum):
    BUTTON = "button"
    SELECT = "select"


@dataclass
class PaginatorAction:
    """One navigation command bound to one control on the message.

    ``handler`` receives an :class:`~paged_message.state.ActionContext` and
    returns a transition (``SetIndex``/``Stop``) or ``None`` to do nothing.
    """
    custom_id: str
    kind: ActionKind
    handler: Callable
    style: discord.ButtonStyle = discord.ButtonStyle.primary
    emoji: str | None = None
    label: str | None = None
    placeholder: str | None = None


# DEFAULT HANDLERS
def go_to_page(ctx):
    if not ctx.values:
        return None
    return SetIndex(int(ctx.values[0]))


def first_page(ctx):
    return SetIndex(0)


def previous_page(ctx):
    return SetIndex((ctx.index - 1) % ctx.page_count)


def next_page(ctx):
    return SetIndex((ctx.index + 1) % ctx.page_count)


def go_to_last_page(ctx):
    return SetIndex(ctx.page_count - 1)


def stop(ctx):
    return Stop()


def default_actions():
    return [
        PaginatorAction("goToPage", ActionKind.SELECT, go_to_page, placeholder="Select a page"),
        PaginatorAction("firstPage", ActionKind.BUTTON, first_page, emoji="⏪"),
        PaginatorAction("previousPage", ActionKind.BUTTON, previous_page, emoji="◀️"),
        PaginatorAction("nextPage", ActionKind.BUTTON, next_page, emoji="▶️"),
        PaginatorAction("goToLastPage", ActionKind.BUTTON, go_to_last_page, emoji="⏩"),
        PaginatorAction("stop", ActionKind.BUTTON, stop, style=discord.ButtonStyle.danger, emoji="⏹️"),
    ]


class ActionRegistry:
    """Ordered ``custom_id -> PaginatorAction`` mapping.

    Insertion order is render order. Every change is validated as a whole
    before it replaces the current mapping, so a rejected call leaves the
    registry exactly as it was.
    """

    def __init__(self, actions=None):
        self._actions = {}
        self.set_actions(default_actions() if actions is None else actions)

    def set_actions(self, actions):
        self._actions = self._merge({}, actions)
        return self

    def add_actions(self, actions):
        self._actions = self._merge(dict(self._actions), actions)
        return self

    def add_action(self, action):
        return self.add_actions([action])

    def get(self, custom_id):
        return self._actions.get(custom_id)

    def __iter__(self):
        return iter(list(self._actions.values()))

    def __len__(self):
        return len(self._actions)

    def __contains__(self, custom_id):
        return custom_id in self._actions

    def _merge(self, merged, actions):
        for action in actions:
            self._validate(action)
            # re-adding an id keeps its original slot
            merged[action.custom_id] = action

        buttons = sum(1 for a in merged.values() if a.kind is ActionKind.BUTTON)
        selects = sum(1 for a in merged.values() if a.kind is ActionKind.SELECT)
        if buttons > MAX_BUTTONS_PER_ROW:
            raise ConfigurationError(
                f"{buttons} button actions registered, only {MAX_BUTTONS_PER_ROW} fit on a message"
            )
        if selects > MAX_SELECT_CONTROLS:
            raise ConfigurationError(
                f"{selects} select actions registered, only {MAX_SELECT_CONTROLS} page select fits on a message"
            )

        log.debug("Registered %d paginator actions: %s", len(merged), ", ".join(merged))
        return merged

    @staticmethod
    def _validate(action):
        if not isinstance(action, PaginatorAction):
            raise ConfigurationError(f"not a paginator action: {action!r}")
        if not isinstance(action.kind, ActionKind):
            raise ConfigurationError(f"unknown trigger kind {action.kind!r} for action {action.custom_id!r}")
        if not isinstance(action.custom_id, str) or not action.custom_id:
            raise ConfigurationError("paginator actions need a non-empty custom_id")
        if not callable(action.handler):
            raise ConfigurationError(f"handler for action {action.custom_id!r} is not callable")
