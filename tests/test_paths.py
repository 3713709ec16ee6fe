# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for PathEnsurer and path helpers."""

import os
import stat
import sys

import pytest

from genro_treeconfig import (
    PathCreationFailed,
    PathEnsurer,
    TreeConfigError,
    default_config_path,
    ensure_path,
)


@pytest.fixture
def mkdir_calls(monkeypatch):
    """Record every os.mkdir call while still creating the directory."""
    calls = []
    real_mkdir = os.mkdir

    def recording_mkdir(path, mode=0o777, *args, **kwargs):
        calls.append(path)
        return real_mkdir(path, mode, *args, **kwargs)

    monkeypatch.setattr(os, 'mkdir', recording_mkdir)
    return calls


class TestPathEnsurer:
    """Tests for recursive directory creation."""

    def test_creates_nested_path(self, tmp_path):
        """Test every missing ancestor is created."""
        target = tmp_path / 'a' / 'b' / 'c'
        ensure_path(target)
        assert target.is_dir()

    def test_second_call_is_noop(self, tmp_path, mkdir_calls):
        """Test ensure is idempotent."""
        target = tmp_path / 'a' / 'b' / 'c'
        ensure_path(target)
        assert mkdir_calls == [
            str(tmp_path / 'a'),
            str(tmp_path / 'a' / 'b'),
            str(target),
        ]
        ensure_path(target)
        assert len(mkdir_calls) == 3

    def test_existing_directory_not_created(self, tmp_path, mkdir_calls):
        """Test an existing directory never triggers mkdir."""
        ensure_path(tmp_path)
        assert mkdir_calls == []

    def test_only_missing_levels_created(self, tmp_path, mkdir_calls):
        """Test existing ancestors are left alone."""
        (tmp_path / 'a').mkdir()
        mkdir_calls.clear()
        ensure_path(tmp_path / 'a' / 'b')
        assert mkdir_calls == [str(tmp_path / 'a' / 'b')]

    def test_empty_path_is_noop(self, mkdir_calls):
        """Test an empty path means the current directory."""
        ensure_path('')
        assert mkdir_calls == []

    def test_relative_path(self, tmp_path, monkeypatch):
        """Test relative paths are resolved against the working directory."""
        monkeypatch.chdir(tmp_path)
        ensure_path(os.path.join('rel', 'dir'))
        assert (tmp_path / 'rel' / 'dir').is_dir()

    def test_trailing_separator(self, tmp_path):
        """Test a trailing separator is accepted."""
        target = str(tmp_path / 'a' / 'b') + os.sep
        ensure_path(target)
        assert os.path.isdir(target)

    def test_file_in_the_way_raises(self, tmp_path):
        """Test a regular file blocking the path raises PathCreationFailed."""
        blocker = tmp_path / 'blocker'
        blocker.write_text('x')
        with pytest.raises(PathCreationFailed) as exc_info:
            ensure_path(blocker / 'sub')
        err = exc_info.value
        assert err.path == str(blocker)
        assert err.reason
        assert str(err).startswith(f"Could not create directory {blocker}: ")
        assert isinstance(err, TreeConfigError)

    def test_mkdir_error_wrapped(self, tmp_path, monkeypatch):
        """Test any OSError from mkdir is wrapped with the path."""
        def failing_mkdir(path, mode=0o777):
            raise PermissionError(13, 'Permission denied', path)

        monkeypatch.setattr(os, 'mkdir', failing_mkdir)
        target = tmp_path / 'denied'
        with pytest.raises(PathCreationFailed, match='Permission denied') as exc_info:
            ensure_path(target)
        assert exc_info.value.path == str(target)
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_concurrent_creation_is_success(self, tmp_path, monkeypatch):
        """Test a directory created by someone else mid-call is accepted."""
        real_mkdir = os.mkdir

        def racing_mkdir(path, mode=0o777):
            real_mkdir(path, mode)
            raise FileExistsError(17, 'File exists', path)

        monkeypatch.setattr(os, 'mkdir', racing_mkdir)
        target = tmp_path / 'raced'
        ensure_path(target)
        assert target.is_dir()

    @pytest.mark.skipif(sys.platform == 'win32', reason="POSIX permissions")
    def test_custom_mode(self, tmp_path):
        """Test the mode is applied to created directories."""
        old_umask = os.umask(0)
        try:
            PathEnsurer(mode=0o700).ensure(tmp_path / 'private')
        finally:
            os.umask(old_umask)
        mode = stat.S_IMODE((tmp_path / 'private').stat().st_mode)
        assert mode == 0o700

    def test_default_mode(self):
        """Test the default permission bits."""
        assert PathEnsurer().mode == 0o755


class TestDefaultConfigPath:
    """Tests for default_config_path."""

    def test_with_home(self, tmp_path):
        """Test the hidden per-application directory layout."""
        path = default_config_path('gobby', home=tmp_path)
        assert path == os.path.join(str(tmp_path), '.gobby', 'config.xml')

    def test_custom_filename(self, tmp_path):
        """Test overriding the file name."""
        path = default_config_path('app', filename='prefs.xml', home=tmp_path)
        assert os.path.basename(path) == 'prefs.xml'

    def test_default_home(self, tmp_path, monkeypatch):
        """Test the user's home directory is used by default."""
        monkeypatch.setenv('HOME', str(tmp_path))
        monkeypatch.setenv('USERPROFILE', str(tmp_path))
        path = default_config_path('app')
        assert path == os.path.join(str(tmp_path), '.app', 'config.xml')
