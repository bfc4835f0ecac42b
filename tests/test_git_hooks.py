"""Tests for the pre-commit hook installer."""
import os
import pytest
from claude_config.core.git_hooks import PRE_COMMIT_TEMPLATE, install_pre_commit, list_hooks


class TestInstallPreCommit:
    """Test install_pre_commit()."""

    def test_installs_executable_hook(self, tmp_path):
        """Test that the hook is written and made executable."""
        # Given: a git repository without hooks/
        (tmp_path / ".git").mkdir()

        # When: we install
        hook = install_pre_commit(tmp_path)

        # Then: hook exists, is executable and validates skills
        assert hook == tmp_path / ".git" / "hooks" / "pre-commit"
        assert hook.read_text() == PRE_COMMIT_TEMPLATE
        assert os.access(hook, os.X_OK)
        assert "claude-config validate-skills" in hook.read_text()

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Not a git repository"):
            install_pre_commit(tmp_path)

    def test_existing_hook_requires_force(self, tmp_path):
        """Test that an existing hook is only replaced with force."""
        # Given: an existing custom hook
        hooks = tmp_path / ".git" / "hooks"
        hooks.mkdir(parents=True)
        (hooks / "pre-commit").write_text("#!/bin/sh\necho custom\n")

        # When/Then: install without force refuses
        with pytest.raises(FileExistsError):
            install_pre_commit(tmp_path)
        assert "custom" in (hooks / "pre-commit").read_text()

        # And: force replaces it
        install_pre_commit(tmp_path, force=True)
        assert (hooks / "pre-commit").read_text() == PRE_COMMIT_TEMPLATE


class TestListHooks:
    """Test list_hooks()."""

    def test_ignores_samples(self, tmp_path):
        hooks = tmp_path / ".git" / "hooks"
        hooks.mkdir(parents=True)
        (hooks / "pre-commit").write_text("")
        (hooks / "pre-push.sample").write_text("")

        assert list_hooks(tmp_path) == ["pre-commit"]

    def test_no_git_directory(self, tmp_path):
        assert list_hooks(tmp_path) == []
