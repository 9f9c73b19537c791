"""In-process side tables for object metadata and tag sets.

The filesystem has no slot for either, so both live in memory for the lifetime
of the process and are shared by every client. Entries are keyed by object key
only and are not removed when an object is deleted.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import unquote


class SideTable:
    """Key-value table keyed by object key."""

    def __init__(self, name: str):
        self.name = name
        self._entries: Dict[str, Any] = {}

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._entries.get(key, default)

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


object_metadata = SideTable("metadata")
object_tagging = SideTable("tagging")


def parse_tagging(query: str) -> List[Dict[str, str]]:
    """
    Parse a URL-query encoded tag string into a tag set.

    One level only: ``a=1&b=2`` becomes ``[{"Key": "a", "Value": "1"}, ...]``.
    A repeated key keeps its first position and takes the last value.
    """
    tags: Dict[str, str] = {}
    for part in query.split("&"):
        item = part.split("=")
        value = item[1] if len(item) > 1 else ""
        tags[unquote(item[0])] = unquote(value)
    return [{"Key": key, "Value": value} for key, value in tags.items()]


def reset_side_tables() -> None:
    """Forget all metadata and tags (useful for testing)."""
    object_metadata.clear()
    object_tagging.clear()
