# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Filesystem helpers for config storage.

Provides recursive directory creation for the config file location and the
default per-user config path.

Example:
    >>> from genro_treeconfig.paths import ensure_path
    >>> ensure_path('/tmp/app/settings/nested')  # creates every missing level
"""

from __future__ import annotations

import os

from .exceptions import PathCreationFailed


class PathEnsurer:
    """Create a directory and every missing ancestor.

    Existing directories are never touched, so calling ensure() repeatedly
    on the same path is a no-op after the first call.

    Attributes:
        mode: Permission bits for newly created directories.

    Example:
        >>> ensurer = PathEnsurer(mode=0o700)
        >>> ensurer.ensure('/home/user/.myapp/cache')
    """

    __slots__ = ('mode',)

    def __init__(self, mode: int = 0o755) -> None:
        self.mode = mode

    def ensure(self, path: str | os.PathLike[str]) -> None:
        """Make sure the directory at path exists.

        The parent is ensured first, then the directory itself is created.
        Recursion stops at an existing directory or at the filesystem root.

        Args:
            path: Directory path. An empty string means the current directory.

        Raises:
            PathCreationFailed: If a directory could not be created.
        """
        path = os.fspath(path)
        if not path or os.path.isdir(path):
            return

        parent = os.path.dirname(path)
        if parent != path:
            self.ensure(parent)

        self._create(path)

    def _create(self, path: str) -> None:
        """Create a single directory level."""
        try:
            os.mkdir(path, self.mode)
        except FileExistsError as e:
            # Someone else created it in the meantime
            if os.path.isdir(path):
                return
            raise PathCreationFailed(path, e.strerror or str(e)) from e
        except OSError as e:
            raise PathCreationFailed(path, e.strerror or str(e)) from e


_default_ensurer = PathEnsurer()


def ensure_path(path: str | os.PathLike[str]) -> None:
    """Ensure a directory exists using the default permissions (0o755).

    Args:
        path: Directory path to create.

    Raises:
        PathCreationFailed: If a directory could not be created.
    """
    _default_ensurer.ensure(path)


def default_config_path(
    app_name: str,
    filename: str = 'config.xml',
    home: str | os.PathLike[str] | None = None,
) -> str:
    """Return the per-user config file path for an application.

    Args:
        app_name: Application name, used as a hidden directory under home.
        filename: Config file name inside that directory.
        home: Home directory override. Defaults to the user's home.

    Returns:
        Path string like '~/.app_name/config.xml' (expanded).

    Example:
        >>> default_config_path('gobby', home='/home/alice')
        '/home/alice/.gobby/config.xml'
    """
    base = os.fspath(home) if home is not None else os.path.expanduser('~')
    return os.path.join(base, f'.{app_name}', filename)
