"""Parse and serialize the key/value front-matter block of plugin documents."""

from __future__ import annotations

import re
from collections.abc import Iterable

from plugin_registry.constants import FRONT_MATTER_DELIMITER, LIST_KEYS
from plugin_registry.errors import MalformedFrontMatterError
from plugin_registry.frontmatter.models import (
    FrontMatter,
    FrontMatterValue,
    ListValue,
    ScalarValue,
)

_KEY_VALUE_RE = re.compile(
    r"^(?P<key>[A-Za-z0-9_][A-Za-z0-9_.-]*)\s*:(?:\s+(?P<value>.*?))?\s*$"
)
_QUOTES = ("'", '"')
_BOM = "\ufeff"


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == FRONT_MATTER_DELIMITER


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return text


def _split_items(text: str) -> tuple[str, ...]:
    items = (_unquote(item.strip()) for item in text.split(","))
    return tuple(item for item in items if item)


def _parse_value(key: str, raw: str, list_keys: frozenset[str]) -> FrontMatterValue:
    if raw.startswith("[") and raw.endswith("]"):
        return ListValue(items=_split_items(raw[1:-1]))
    if key in list_keys:
        return ListValue(items=_split_items(raw))
    return ScalarValue(text=_unquote(raw))


def _split_block(text: str) -> tuple[list[str], str] | None:
    if text.startswith(_BOM):
        text = text[len(_BOM) :]
    lines = text.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return None
    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            block = [line.rstrip("\r\n") for line in lines[1:index]]
            return block, "".join(lines[index + 1 :])
    raise MalformedFrontMatterError("closing '---' delimiter not found")


def _parse_block(block: list[str], list_keys: frozenset[str]) -> FrontMatter:
    entries: dict[str, FrontMatterValue] = {}
    # line 1 is the opening delimiter
    for line_number, line in enumerate(block, start=2):
        if not line.strip():
            continue
        match = _KEY_VALUE_RE.match(line)
        if match is None:
            raise MalformedFrontMatterError(
                f"expected 'key: value', got {line.strip()!r}", line=line_number
            )
        key = match.group("key")
        if key in entries:
            raise MalformedFrontMatterError(
                f"duplicate key '{key}'", line=line_number
            )
        entries[key] = _parse_value(key, match.group("value") or "", list_keys)
    return FrontMatter(entries)


def _list_keys(extra: Iterable[str]) -> frozenset[str]:
    return frozenset(LIST_KEYS).union(extra)


def parse_front_matter(
    text: str, list_keys: Iterable[str] = ()
) -> tuple[FrontMatter, str]:
    """Split ``text`` into its front matter and body.

    Values of ``tools``, ``allowed-tools`` and any key in ``list_keys`` are
    comma separated lists. Raises ``MalformedFrontMatterError`` when the
    block is missing, unterminated, or contains a line that is not
    ``key: value``.
    """
    split = _split_block(text)
    if split is None:
        raise MalformedFrontMatterError("opening '---' delimiter not found", line=1)
    block, body = split
    return _parse_block(block, _list_keys(list_keys)), body


def parse_front_matter_lenient(
    text: str, list_keys: Iterable[str] = ()
) -> tuple[FrontMatter, str]:
    """Like ``parse_front_matter`` but never fails.

    Text without a usable block comes back whole with an empty mapping.
    """
    try:
        return parse_front_matter(text, list_keys)
    except MalformedFrontMatterError:
        return FrontMatter(), text


def _needs_quotes(text: str) -> bool:
    if text != text.strip():
        return True
    if text[:1] in _QUOTES and text[-1:] == text[:1] and len(text) >= 2:
        return True
    return text.startswith("[") and text.endswith("]")


def _render_item(item: str) -> str:
    if _needs_quotes(item) or item.startswith("[") or item.endswith("]"):
        return f'"{item}"'
    return item


def _render_value(key: str, value: FrontMatterValue, list_keys: frozenset[str]) -> str:
    if isinstance(value, ListValue):
        joined = ", ".join(_render_item(item) for item in value.items)
        if key in list_keys and joined:
            return joined
        return f"[{joined}]"
    if _needs_quotes(value.text):
        return f'"{value.text}"'
    return value.text


def serialize_front_matter(
    front_matter: FrontMatter, list_keys: Iterable[str] = ()
) -> str:
    keys = _list_keys(list_keys)
    parts: list[str] = [FRONT_MATTER_DELIMITER]
    for key, value in front_matter.items():
        rendered = _render_value(key, value, keys)
        parts.append(f"{key}: {rendered}" if rendered else f"{key}:")
    parts.append(FRONT_MATTER_DELIMITER)
    parts.append("")
    return "\n".join(parts)


def serialize_document(front_matter: FrontMatter, body: str) -> str:
    return serialize_front_matter(front_matter) + body
