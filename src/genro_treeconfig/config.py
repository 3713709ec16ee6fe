# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Config - the root of a configuration tree bound to an XML file.

A Config is loaded when it is constructed and written back when it is
closed. Neither step ever stops the application:

- a missing, unreadable or corrupt file yields an empty configuration
- a failed write is logged as a warning and otherwise ignored

Lifecycle:
    LOADED after construction (always), then FLUSHED or FLUSH_FAILED after
    close(). Both final states are terminal; close() only writes once.
    Nothing is written implicitly: a Config that is neither closed nor used
    as a context manager is discarded with its changes when collected.

Example:
    >>> with Config(default_config_path('myapp')) as config:
    ...     config['editor']['tabwidth'] = 4
    ...     width = config.get_item('window.width', 800)

Document layout:

    <?xml version='1.0' encoding='UTF-8'?>
    <treeconfig>
      <editor>
        <tabwidth>4</tabwidth>
      </editor>
    </treeconfig>
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from enum import Enum
from types import TracebackType

from .document import read_document, write_document
from .entry import EntryTable
from .exceptions import (
    DocumentNotFound,
    DocumentParseFailure,
    EmptyOrRootlessDocument,
    TreeConfigError,
)
from .paths import ensure_path

logger = logging.getLogger(__name__)

ROOT_TAG = 'treeconfig'
ENCODING = 'UTF-8'


class ConfigState(Enum):
    """Lifecycle state of a Config."""

    UNLOADED = 'unloaded'
    LOADED = 'loaded'
    FLUSHED = 'flushed'
    FLUSH_FAILED = 'flush_failed'


class Config(EntryTable):
    """Top-level table of configuration entries, persisted to one file.

    Attributes:
        path: File the configuration is loaded from and saved to.
        root_tag: Name of the document's root element.
        state: Current ConfigState.
    """

    __slots__ = ('path', 'root_tag', 'state')

    def __init__(self, path: str | os.PathLike[str], root_tag: str = ROOT_TAG) -> None:
        """Create a Config and load it from path.

        Document problems never raise: the config simply starts empty.

        Args:
            path: Config file path. It does not need to exist yet.
            root_tag: Expected (and written) root element name.
        """
        super().__init__()
        self.path = os.fspath(path)
        self.root_tag = root_tag
        self.state = ConfigState.UNLOADED
        self._load()
        self.state = ConfigState.LOADED

    def __repr__(self) -> str:
        return f"Config({self.path!r}, entries={self.keys()})"

    def __enter__(self) -> Config:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _load(self) -> None:
        try:
            root = read_document(self.path, self.root_tag)
        except DocumentNotFound:
            logger.debug("No config file at %s, starting empty", self.path)
            return
        except (DocumentParseFailure, EmptyOrRootlessDocument) as e:
            logger.info("Ignoring config file: %s", e)
            return

        self._load_children(root)

    def save(self) -> None:
        """Write the configuration to its file.

        Creates the destination directory first if needed.

        Raises:
            PathCreationFailed: If the directory cannot be created.
            OSError: If the file cannot be written.
        """
        root = ET.Element(self.root_tag)
        self._save_children(root)

        ensure_path(os.path.dirname(self.path))
        write_document(root, self.path, encoding=ENCODING)

    def close(self) -> None:
        """Persist the configuration once, logging instead of raising.

        This is the only teardown hook; callers must call it (or use the
        config as a context manager). Subsequent calls do nothing.
        """
        if self.state is not ConfigState.LOADED:
            return
        try:
            self.save()
        except (TreeConfigError, OSError, ValueError, TypeError) as e:
            logger.warning("Could not write config file: %s", e)
            self.state = ConfigState.FLUSH_FAILED
        else:
            self.state = ConfigState.FLUSHED
