# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Entry - a node of the configuration tree.

Each Entry holds an optional text value and a table of named child entries.
Looking up a missing child creates it, so the tree can be navigated and
written in a single expression:

    >>> root = Entry()
    >>> root['window']['width'] = 800
    >>> root['window']['width'].value
    '800'
    >>> root.has_entry('window')
    True

Ownership is strictly top-down: an entry knows its children but never its
parent.

Path Syntax:
    Indexing with [] takes a single name and never splits it. The
    get_entry/get_item/set_item helpers accept dotted paths ('a.b.c').
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Iterator

from .codec import decode_value, encode_value
from .document import is_element, is_valid_name, is_valid_text

logger = logging.getLogger(__name__)


class EntryTable:
    """A table of named child entries with auto-vivifying lookup.

    Base class shared by Entry and Config, so both offer the same
    indexed access and iteration.

    Iterating yields (name, entry) pairs for direct children in insertion
    order.
    """

    __slots__ = ('_table',)

    def __init__(self) -> None:
        self._table: dict[str, Entry] = {}

    # ==================== Special Methods ====================

    def __len__(self) -> int:
        """Return the number of direct children."""
        return len(self._table)

    def __iter__(self) -> Iterator[tuple[str, Entry]]:
        """Iterate over (name, entry) pairs of direct children."""
        # Snapshot: lookups inside the loop body may add children
        return iter(list(self._table.items()))

    def __contains__(self, name: str) -> bool:
        return name in self._table

    def __getitem__(self, name: str) -> Entry:
        """Return the child called name, creating an empty one if missing."""
        entry = self._table.get(name)
        if entry is None:
            entry = Entry()
            self._table[name] = entry
        return entry

    def __setitem__(self, name: str, value: Any) -> None:
        """Set the value of the child called name (created if missing).

        Example:
            >>> root['editor']['tabwidth'] = 4
        """
        self[name].set(value)

    # ==================== Core API ====================

    def has_entry(self, name: str) -> bool:
        """True if a direct child called name exists. Never creates it."""
        return name in self._table

    def keys(self) -> list[str]:
        """Return child names in insertion order."""
        return list(self._table.keys())

    def values(self) -> list[Entry]:
        """Return child entries in insertion order."""
        return list(self._table.values())

    def items(self) -> list[tuple[str, Entry]]:
        """Return (name, entry) pairs in insertion order."""
        return list(self._table.items())

    # ==================== Path Access ====================

    def get_entry(self, path: str) -> Entry:
        """Return the entry at a dotted path, creating missing levels.

        Args:
            path: Dotted path (e.g., 'editor.colors.cursor').

        Returns:
            The Entry at the end of the path.

        Raises:
            KeyError: If path is empty.
        """
        if not path:
            raise KeyError("Empty path")
        parts = path.split('.')
        entry = self[parts[0]]
        for part in parts[1:]:
            entry = entry[part]
        return entry

    def get_item(
        self, path: str, default: Any = None, type_: type | None = None
    ) -> Any:
        """Read the value at a dotted path without creating anything.

        Args:
            path: Dotted path to the entry.
            default: Returned if the path or its value is missing.
            type_: Decode the value to this type (see Entry.get).

        Returns:
            The decoded value, or default.

        Example:
            >>> config.get_item('editor.tabwidth', 8)
            4
        """
        table: EntryTable = self
        entry = None
        for part in path.split('.'):
            entry = table._table.get(part)
            if entry is None:
                return default
            table = entry
        return entry.get(default, type_)

    def set_item(self, path: str, value: Any) -> Entry:
        """Set the value at a dotted path, creating missing levels.

        Args:
            path: Dotted path to the entry.
            value: Value to store (see Entry.set).

        Returns:
            The Entry that was written.
        """
        entry = self.get_entry(path)
        entry.set(value)
        return entry

    # ==================== Walk ====================

    def walk(self, _prefix: str = '') -> Iterator[tuple[str, Entry]]:
        """Yield (dotted_path, entry) for every descendant, depth-first.

        Example:
            >>> for path, entry in config.walk():
            ...     print(path, entry.value)
        """
        for name, entry in self.items():
            path = f"{_prefix}.{name}" if _prefix else name
            yield path, entry
            yield from entry.walk(path)

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to a nested plain dict.

        Leaves become their value. Entries with children become dicts,
        with the entry's own value (if any) under '_value'.
        """
        result: dict[str, Any] = {}
        for name, entry in self._table.items():
            if not entry._table:
                result[name] = entry.value
                continue
            child_dict = entry.as_dict()
            if entry.value is not None:
                result[name] = {'_value': entry.value, **child_dict}
            else:
                result[name] = child_dict
        return result

    def update(self, source: dict[str, Any], overwrite: bool = True) -> None:
        """Merge a nested dict into this table.

        Nested dicts become child entries; the '_value' key sets the
        entry's own value. This is the inverse of as_dict().

        Args:
            source: Nested dict of names to values or dicts.
            overwrite: If False, existing values are kept, which is handy
                for applying defaults after loading.

        Example:
            >>> config.update({'editor': {'tabwidth': 8}}, overwrite=False)
        """
        for name, item in source.items():
            entry = self[name]
            if isinstance(item, dict):
                own = item.get('_value')
                if own is not None and (overwrite or entry.value is None):
                    entry.set(own)
                entry.update(
                    {k: v for k, v in item.items() if k != '_value'},
                    overwrite=overwrite,
                )
            elif item is not None and (overwrite or entry.value is None):
                entry.set(item)

    # ==================== XML Mapping ====================

    def _load_children(self, element: ET.Element) -> None:
        """Load every child element of element into this table."""
        for child in element:
            if not is_element(child):
                continue
            self[child.tag].load(child)

    def _save_children(self, element: ET.Element) -> None:
        """Append one sub-element per child entry to element."""
        for name, entry in self._table.items():
            if not is_valid_name(name):
                logger.warning("Skipping config entry %r: not a valid element name", name)
                continue
            entry.save(ET.SubElement(element, name))


class Entry(EntryTable):
    """A configuration tree node: optional text value plus named children.

    Attributes:
        value: The text payload, or None for a purely structural node.

    Example:
        >>> entry = Entry()
        >>> entry['colors']['cursor'].set(Color(0, 65535, 0))
        >>> entry['colors']['cursor'].value
        '00ff00'
    """

    __slots__ = ('value',)

    def __init__(self, value: str | None = None) -> None:
        super().__init__()
        self.value = value

    def __repr__(self) -> str:
        return f"Entry(value={self.value!r}, children={self.keys()})"

    def __eq__(self, other: object) -> bool:
        """Entries are equal if values and children match (order ignored)."""
        if not isinstance(other, Entry):
            return NotImplemented
        return self.value == other.value and self._table == other._table

    __hash__ = None  # type: ignore[assignment]

    # ==================== Typed Access ====================

    def get(self, default: Any = None, type_: type | None = None) -> Any:
        """Return the value decoded to a Python type.

        Args:
            default: Returned when there is no value or it cannot be decoded.
            type_: Target type. Defaults to type(default), or str if
                default is None.

        Returns:
            The decoded value, or default.

        Example:
            >>> entry['tabwidth'].get(8)
            4
        """
        if self.value is None:
            return default
        if type_ is None:
            type_ = str if default is None else type(default)
        try:
            return decode_value(self.value, type_)
        except ValueError:
            logger.debug(
                "Cannot decode %r as %s, using default", self.value, type_.__name__
            )
            return default

    def set(self, value: Any) -> None:
        """Store value as text. None clears the value.

        Raises:
            TypeError: If value has no text form (see codec.encode_value).
        """
        self.value = None if value is None else encode_value(value)

    # ==================== XML Mapping ====================

    def load(self, element: ET.Element) -> None:
        """Fill this entry from an XML element.

        The element's leading text becomes the value unless it is blank.
        Each child element is loaded into the child entry of the same name.
        Comments and processing instructions are ignored.
        """
        text = element.text
        if text and not text.isspace():
            self.value = text
        self._load_children(element)

    def save(self, element: ET.Element) -> None:
        """Write this entry into an XML element.

        The value replaces the element's text (None clears it). Each child
        is appended as a sub-element named after it.

        A value holding characters XML cannot carry (control characters,
        lone surrogates) is left out with a warning; the element and its
        children are still written.
        """
        text = self.value
        if text is not None and not is_valid_text(text):
            logger.warning(
                "Dropping config value %r of <%s>: not representable in XML",
                text, element.tag,
            )
            text = None
        element.text = text
        self._save_children(element)
