"""Front-matter data models."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Union

from plugin_registry.constants import RECOGNIZED_KEYS


@dataclass(frozen=True)
class ScalarValue:
    text: str

    def render(self) -> str:
        return self.text

    def as_plain(self) -> str:
        return self.text


@dataclass(frozen=True)
class ListValue:
    items: tuple[str, ...]

    def render(self) -> str:
        return ", ".join(self.items)

    def as_plain(self) -> list[str]:
        return list(self.items)


FrontMatterValue = Union[ScalarValue, ListValue]


class FrontMatter(Mapping[str, FrontMatterValue]):
    """Immutable key/value header of a document.

    Keeps the order keys were written in for display, but compares equal to
    any mapping with the same entries regardless of order.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, FrontMatterValue] | None = None) -> None:
        self._entries: dict[str, FrontMatterValue] = dict(entries or {})

    def __getitem__(self, key: str) -> FrontMatterValue:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FrontMatter({self._entries!r})"

    def text(self, key: str) -> str | None:
        value = self._entries.get(key)
        if isinstance(value, ScalarValue):
            return value.text
        return None

    def items_of(self, key: str) -> tuple[str, ...]:
        value = self._entries.get(key)
        if isinstance(value, ListValue):
            return value.items
        if isinstance(value, ScalarValue) and value.text:
            return (value.text,)
        return ()

    def unknown_keys(self) -> list[str]:
        return [key for key in self._entries if key not in RECOGNIZED_KEYS]

    def as_dict(self) -> dict[str, str | list[str]]:
        return {key: value.as_plain() for key, value in self._entries.items()}
