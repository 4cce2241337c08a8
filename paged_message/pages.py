import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import discord

from paged_message.errors import PageResolutionError

PAYLOAD_FIELDS = ("content", "embed", "embeds", "allowed_mentions")


@dataclass(frozen=True)
class StaticPage:
    payload: Any


@dataclass(frozen=True)
class DynamicPage:
    """A page built when it becomes the current page.

    ``builder(index, pages, paginator)`` may be a plain function or a coroutine
    function and has to produce a payload.
    """
    builder: Callable


def as_page(page):
    if isinstance(page, (StaticPage, DynamicPage)):
        return page
    if callable(page):
        return DynamicPage(page)
    return StaticPage(page)


def to_payload(value):
    """Turn a page value into keyword arguments for send/edit."""
    if isinstance(value, str):
        return {"content": value}

    if isinstance(value, discord.Embed):
        return {"embeds": [value]}

    if isinstance(value, Mapping):
        unknown = set(value) - set(PAYLOAD_FIELDS)
        if unknown:
            raise PageResolutionError(f"unsupported page field(s): {', '.join(sorted(unknown))}")

        payload = dict(value)
        if "embed" in payload:
            embed = payload.pop("embed")
            payload["embeds"] = [*payload.get("embeds", []), embed]
        if not payload:
            raise PageResolutionError("page payload is empty")
        return payload

    raise PageResolutionError(f"invalid page payload: {value!r}")


async def resolve_page(page, index, pages, paginator):
    if isinstance(page, StaticPage):
        return to_payload(page.payload)

    try:
        value = page.builder(index, pages, paginator)
        if inspect.isawaitable(value):
            value = await value
    except Exception as exc:
        raise PageResolutionError(f"building page {index + 1} failed: {exc}") from exc

    if value is None:
        raise PageResolutionError(f"page {index + 1} builder returned nothing")
    return to_payload(value)


def merge_payload(page, template):
    """Template fields win over the page's own fields."""
    if not template:
        return dict(page)
    return {**page, **to_payload(template)}
