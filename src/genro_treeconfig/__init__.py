# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TreeConfig - Hierarchical configuration stored as XML.

A lightweight, zero-dependency library providing a tree of named config
entries that loads from and saves to a single XML file, tolerating missing
or corrupt files on load and write failures on save.
"""

__version__ = "0.1.0"

from .codec import Color, color_from_hex, color_to_hex, decode_value, encode_value
from .config import Config, ConfigState
from .entry import Entry, EntryTable
from .exceptions import (
    DocumentNotFound,
    DocumentParseFailure,
    EmptyOrRootlessDocument,
    PathCreationFailed,
    TreeConfigError,
)
from .paths import PathEnsurer, default_config_path, ensure_path

__all__ = [
    # Core classes
    "Config",
    "ConfigState",
    "Entry",
    "EntryTable",
    # Paths
    "PathEnsurer",
    "ensure_path",
    "default_config_path",
    # Codec
    "Color",
    "color_to_hex",
    "color_from_hex",
    "encode_value",
    "decode_value",
    # Exceptions
    "TreeConfigError",
    "PathCreationFailed",
    "DocumentParseFailure",
    "DocumentNotFound",
    "EmptyOrRootlessDocument",
]
