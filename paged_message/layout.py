"""Fits the paginator controls onto the two component rows it owns.

Row 0 holds the buttons, row 1 holds the page select. Anything that doesn't
fit is dropped here; the action registry refuses action lists that would
need it, so in practice only hand-built control lists get truncated.
"""
import logging
from typing import NamedTuple

import discord

log = logging.getLogger(__name__)

MAX_BUTTONS_PER_ROW = 5
MAX_SELECT_CONTROLS = 1
MAX_SELECT_OPTIONS = 25

PRIMARY_ROW = 0
SECONDARY_ROW = 1


class ControlLayout(NamedTuple):
    primary: list
    secondary: list

    @property
    def items(self):
        return [*self.primary, *self.secondary]


def is_select(control):
    return isinstance(control, discord.ui.Select)


def partition_controls(controls):
    """Split controls into at most 5 buttons and at most 1 select.

    Buttons are moved ahead of selects (stable, so registry order is kept
    inside each kind), then only the first six slots are considered.
    """
    ordered = sorted(controls, key=is_select)
    kept = ordered[:MAX_BUTTONS_PER_ROW + MAX_SELECT_CONTROLS]

    primary = [c for c in kept if not is_select(c)][:MAX_BUTTONS_PER_ROW]
    secondary = [c for c in kept if is_select(c)][:MAX_SELECT_CONTROLS]

    dropped = len(controls) - len(primary) - len(secondary)
    if dropped:
        log.debug("Dropped %d paginator control(s) that don't fit on the message", dropped)

    for control in primary:
        control.row = PRIMARY_ROW
    for control in secondary:
        control.row = SECONDARY_ROW

    return ControlLayout(primary, secondary)


def sample_page_indices(page_count, capacity=MAX_SELECT_OPTIONS):
    """Page indices offered by the page select.

    Up to ``capacity`` pages every page gets an option. Past that the pages
    are sampled every ``round(page_count / capacity)`` so the select still
    spans the whole range.
    """
    if page_count <= capacity:
        return list(range(page_count))

    stride = max(1, round(page_count / capacity))
    return list(range(0, page_count, stride))[:capacity]
