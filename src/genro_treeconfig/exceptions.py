# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeConfig exceptions."""

from __future__ import annotations


class TreeConfigError(Exception):
    """Base exception for TreeConfig errors."""

    pass


class PathCreationFailed(TreeConfigError):
    """Raised when a directory on the way to the config file cannot be created.

    Attributes:
        path: The directory that could not be created.
        reason: The underlying system error text.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not create directory {path}: {reason}")
        self.path = path
        self.reason = reason


class DocumentParseFailure(TreeConfigError):
    """Raised when a config document cannot be read or parsed.

    Attributes:
        path: The document path.
        reason: Description of what went wrong.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not parse config file {path}: {reason}")
        self.path = path
        self.reason = reason


class DocumentNotFound(DocumentParseFailure):
    """Raised when the config document does not exist yet."""

    pass


class EmptyOrRootlessDocument(TreeConfigError):
    """Raised when a document parses but has no usable root container."""

    pass
