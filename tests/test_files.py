"""
Tests for netrc file location, reading and writing.
"""

import os
import stat
from pathlib import Path

import pytest
from netrckit.core.errors import NetrcError
from netrckit.core.files import (
    default_path,
    find_machine,
    parse_file,
    save_file,
)


class TestDefaultPath:
    """Test netrc file location."""

    def test_netrc_env(self, monkeypatch, tmp_path):
        """$NETRC wins when set."""
        monkeypatch.setenv("NETRC", str(tmp_path / "custom"))
        assert default_path() == tmp_path / "custom"

    def test_home_fallback(self, monkeypatch, tmp_path):
        """Without $NETRC the file lives in the home directory."""
        monkeypatch.delenv("NETRC", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_path() == Path(str(tmp_path)) / ".netrc"


class TestParseFile:
    """Test reading netrc files."""

    def test_parse_file(self, good_path):
        """A file on disk parses like its bytes."""
        document = parse_file(good_path)
        assert len(document) == 4
        assert document.find_record("ray").password == "mypassword"

    def test_uses_default_path(self, monkeypatch, good_path):
        """With no path the $NETRC file is read."""
        monkeypatch.setenv("NETRC", str(good_path))
        assert len(parse_file()) == 4

    def test_error_names_file(self, bad_order_path):
        """Parse errors carry the file name."""
        with pytest.raises(NetrcError) as exc_info:
            parse_file(bad_order_path)
        assert exc_info.value.bad_default_order
        assert exc_info.value.filename == str(bad_order_path)
        assert str(exc_info.value).startswith(f"{bad_order_path}: line 9:")

    def test_missing_file(self, tmp_path):
        """I/O errors propagate unchanged."""
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "absent")


class TestFindMachine:
    """Test the one-shot lookup helper."""

    def test_found(self, good_path):
        """A named machine is returned."""
        assert find_machine(good_path, "ray").login == "demo"

    def test_default(self, good_path):
        """An unknown machine gives the default entry."""
        assert find_machine(good_path, "non.existent").is_default()


class TestSaveFile:
    """Test writing netrc files."""

    def test_save_round_trip(self, good_path, good_bytes, tmp_path):
        """Saving an unedited document writes the same bytes."""
        target = tmp_path / "copy"
        save_file(parse_file(good_path), target)
        assert target.read_bytes() == good_bytes

    def test_save_edit(self, good_path):
        """An edit is written back in place."""
        document = parse_file(good_path)
        document.find_record("ray").update_password("newpass")
        save_file(document, good_path)
        assert parse_file(good_path).find_record("ray").password == "newpass"

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_new_file_is_private(self, good_path, tmp_path):
        """A new netrc file is readable by its owner only."""
        target = tmp_path / "new"
        save_file(parse_file(good_path), target)
        assert stat.S_IMODE(target.stat().st_mode) & 0o077 == 0

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_existing_mode_kept(self, good_path):
        """Rewriting a file keeps its permissions."""
        good_path.chmod(0o640)
        save_file(parse_file(good_path), good_path)
        assert stat.S_IMODE(good_path.stat().st_mode) == 0o640
