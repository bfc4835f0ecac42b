"""Tests for backup tree layout models."""
import pytest
from pathlib import Path
from claude_config.models.layout import (
    ConfigScope,
    EntryKind,
    ManagedEntry,
    default_target_root,
    entries_for,
)


class TestManagedEntry:
    """Test ManagedEntry dataclass."""

    def test_create_file_entry(self):
        """Test creating a file entry with defaults."""
        # Given/When: a plain file entry
        entry = ManagedEntry("CLAUDE.md", required=True)

        # Then: it is a required file named after its path
        assert entry.kind == EntryKind.FILE
        assert entry.required is True
        assert entry.name == "CLAUDE.md"
        assert not entry.is_directory

    def test_directory_name_has_trailing_slash(self):
        """Test that directory entries display with a trailing slash."""
        entry = ManagedEntry(".claude/rules", EntryKind.DIRECTORY)

        assert entry.is_directory
        assert entry.name == ".claude/rules/"

    @pytest.mark.parametrize("path", ["", "/etc/passwd", "../outside", "a/../../b"])
    def test_rejects_unsafe_paths(self, path):
        """Test that empty, absolute and traversing paths are rejected."""
        with pytest.raises(ValueError, match="Invalid entry path"):
            ManagedEntry(path)

    def test_source_and_target_paths(self, tmp_path):
        """Test resolving an entry in the backup tree and on the system."""
        # Given: a nested entry
        entry = ManagedEntry(".claude/settings.json")

        # When/Then: paths are joined under the scope subtree and target root
        assert entry.source_in(tmp_path, ConfigScope.PROJECT) == (
            tmp_path / "project" / ".claude" / "settings.json"
        )
        assert entry.target_in(tmp_path / "proj") == tmp_path / "proj/.claude/settings.json"


class TestEntries:
    """Test scope manifests."""

    def test_global_entries(self):
        """Test the global manifest lists CLAUDE.md first and as required."""
        entries = entries_for(ConfigScope.GLOBAL)
        paths = [e.path for e in entries]

        assert paths[0] == "CLAUDE.md"
        assert entries[0].required
        assert "settings.json" in paths
        assert "hooks" in paths

    def test_project_entries(self):
        """Test the project manifest includes .claude subdirectories."""
        paths = [e.path for e in entries_for(ConfigScope.PROJECT)]

        assert "CLAUDE.md" in paths
        assert "claude-guidelines" in paths
        assert ".claude/skills" in paths
        assert ".claude/settings.json" in paths

    def test_entries_for_returns_copy(self):
        """Test that callers cannot mutate the manifest."""
        entries = entries_for(ConfigScope.ENTERPRISE)
        entries.clear()

        assert entries_for(ConfigScope.ENTERPRISE)


class TestDefaultTargetRoot:
    """Test default_target_root()."""

    def test_global_is_home_claude(self, home_dir):
        assert default_target_root(ConfigScope.GLOBAL) == home_dir / ".claude"

    def test_project_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert default_target_root(ConfigScope.PROJECT) == Path.cwd()
        assert default_target_root(ConfigScope.PROJECT, project_dir=tmp_path / "p") == (
            tmp_path / "p"
        )

    def test_enterprise_override(self, tmp_path):
        assert default_target_root(ConfigScope.ENTERPRISE, enterprise_dir=tmp_path) == tmp_path
