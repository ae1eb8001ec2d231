"""Tolerant JSON extraction from model output."""

from __future__ import annotations

import json
from typing import Any


def parse_json_object(content: str | None) -> dict[str, Any] | None:
    """Return the JSON object in ``content``, or None if there is none.

    Handles bare JSON, ```json fenced blocks and objects surrounded by prose.
    """
    value = _parse(content, "{", "}")
    return value if isinstance(value, dict) else None


def parse_json_array(content: str | None) -> list[Any] | None:
    """Return the JSON array in ``content``, or None if there is none.

    An object wrapping a single list value (e.g. ``{"outlets": [...]}``) is
    unwrapped.
    """
    value = _parse(content, "[", "]")
    if isinstance(value, dict):
        lists = [item for item in value.values() if isinstance(item, list)]
        value = lists[0] if len(lists) == 1 else None
    return value if isinstance(value, list) else None


def _parse(content: str | None, open_char: str, close_char: str) -> Any:
    if not content or not content.strip():
        return None
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass
    fence = _extract_fenced_json(content)
    if fence:
        try:
            return json.loads(fence)
        except json.JSONDecodeError:
            content = fence
    snippet = _extract_json_snippet(content, open_char, close_char)
    if snippet is None:
        return None
    try:
        return json.loads(snippet)
    except json.JSONDecodeError:
        return None


def _extract_json_snippet(content: str, open_char: str, close_char: str) -> str | None:
    start = content.find(open_char)
    end = content.rfind(close_char)
    if start == -1 or end == -1 or end <= start:
        return None
    return content[start : end + 1]


def _extract_fenced_json(content: str) -> str | None:
    """Extract the body of the first ``` fenced block, if any."""
    lines = content.splitlines()
    start_idx = None
    for idx, line in enumerate(lines):
        if line.strip().startswith("```"):
            start_idx = idx + 1
            break
    if start_idx is None:
        return None
    for idx in range(start_idx, len(lines)):
        if lines[idx].strip().startswith("```"):
            snippet = "\n".join(lines[start_idx:idx]).strip()
            return snippet or None
    return None
