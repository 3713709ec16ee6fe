# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""XML document I/O for config files.

Reading turns every failure into a TreeConfigError subclass so that callers
can decide how much to care:

- DocumentNotFound: the file does not exist
- DocumentParseFailure: unreadable or malformed file
- EmptyOrRootlessDocument: well-formed, but not a config document

Writing produces indented UTF-8 XML with a declaration.
"""

from __future__ import annotations

import os
import re
import xml.etree.ElementTree as ET
from functools import lru_cache

from .exceptions import (
    DocumentNotFound,
    DocumentParseFailure,
    EmptyOrRootlessDocument,
)

# Anything outside the XML 1.0 Char production
_INVALID_TEXT = re.compile(r'[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]')


def is_element(node: ET.Element) -> bool:
    """True if node is a real element (not a comment or processing instruction)."""
    return isinstance(node.tag, str)


@lru_cache(maxsize=1024)
def is_valid_name(name: str) -> bool:
    """True if name can be used as an XML element name in a config document.

    The name is checked by the same parser that reads documents back, so
    anything accepted here survives a save and reload. Namespace prefixes
    are rejected.
    """
    if not name or ':' in name:
        return False
    try:
        element = ET.fromstring(f'<{name}/>')
    except (ET.ParseError, ValueError):
        return False
    return element.tag == name and not element.attrib


def is_valid_text(text: str) -> bool:
    """True if text only holds characters allowed in an XML document."""
    return _INVALID_TEXT.search(text) is None


def read_document(path: str | os.PathLike[str], root_tag: str) -> ET.Element:
    """Parse a config document and return its root element.

    Args:
        path: File to parse.
        root_tag: Expected name of the root container.

    Returns:
        The root element.

    Raises:
        DocumentNotFound: If the file does not exist.
        DocumentParseFailure: If the file cannot be read or is not valid XML.
        EmptyOrRootlessDocument: If the root element is not named root_tag.
    """
    path = os.fspath(path)
    try:
        tree = ET.parse(path)
    except FileNotFoundError as e:
        raise DocumentNotFound(path, e.strerror or str(e)) from e
    except OSError as e:
        raise DocumentParseFailure(path, e.strerror or str(e)) from e
    except ET.ParseError as e:
        raise DocumentParseFailure(path, str(e)) from e

    root = tree.getroot()
    # Foreign documents (any other root tag) are not config documents
    if root is None or root.tag != root_tag:
        found = None if root is None else root.tag
        raise EmptyOrRootlessDocument(
            f"{path}: expected root <{root_tag}>, found {found!r}"
        )
    return root


def write_document(
    root: ET.Element,
    path: str | os.PathLike[str],
    encoding: str = 'UTF-8',
) -> None:
    """Write root to path as an indented XML document.

    Carriage returns in text are written as '&#13;' so they survive the
    parser's end-of-line normalization.

    Args:
        root: Root element to write.
        path: Destination file. Its directory must already exist.
        encoding: Output encoding, declared in the XML header.

    Raises:
        OSError: If the file cannot be written.
    """
    ET.indent(root, space='  ')
    # Indentation only uses '\n', so every '\r' comes from element text
    body = ET.tostring(root, encoding='unicode').replace('\r', '&#13;')
    with open(
        os.fspath(path), 'w', encoding=encoding,
        errors='xmlcharrefreplace', newline='',
    ) as f:
        f.write(f"<?xml version='1.0' encoding='{encoding}'?>\n")
        f.write(body)
