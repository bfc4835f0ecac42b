"""Tests for claude-config.yaml parsing."""
import pytest
import yaml
from pathlib import Path
from claude_config.core.config import (
    CONFIG_TEMPLATE,
    ClaudeConfig,
    RepositoryConfig,
    ToolConfig,
    load_config,
)


class TestToolConfig:
    """Test ToolConfig dataclass."""

    def test_defaults(self):
        """Test default tool settings."""
        config = ToolConfig()

        assert config.backup_existing is True
        assert config.project_dir is None
        assert config.max_skill_lines == 500
        assert config.skill_dirs == ["project/.claude/skills", "plugin/skills"]

    def test_paths_are_converted(self):
        """Test that string paths become Path objects."""
        config = ToolConfig(project_dir="/srv/project", enterprise_dir="/etc/managed")

        assert config.project_dir == Path("/srv/project")
        assert config.enterprise_dir == Path("/etc/managed")

    @pytest.mark.parametrize("value", [0, -5, "many"])
    def test_invalid_max_skill_lines(self, value):
        with pytest.raises(ValueError, match="max_skill_lines"):
            ToolConfig(max_skill_lines=value)

    def test_skill_dirs_must_be_list(self):
        with pytest.raises(ValueError, match="skill_dirs"):
            ToolConfig(skill_dirs="plugin/skills")


class TestRepositoryConfig:
    """Test RepositoryConfig dataclass."""

    def test_defaults(self, home_dir):
        """Test default repository settings."""
        config = RepositoryConfig()

        assert config.github_user == "kcenon"
        assert config.github_repo == "claude-config"
        assert config.github_branch == "main"
        assert config.install_dir == home_dir / "claude_config_backup"
        assert config.clone_url == "https://github.com/kcenon/claude-config.git"

    @pytest.mark.parametrize("field_name,value", [
        ("github_user", ""),
        ("github_user", "a/b"),
        ("github_repo", None),
        ("github_branch", ""),
    ])
    def test_invalid_values(self, field_name, value):
        with pytest.raises(ValueError, match=field_name):
            RepositoryConfig(**{field_name: value})

    def test_with_env_overrides(self, tmp_path):
        """Test that environment variables override configured values."""
        # Given: repository config and an environment with overrides
        config = RepositoryConfig(github_user="someone")
        environ = {
            "GITHUB_USER": "other",
            "GITHUB_BRANCH": "develop",
            "INSTALL_DIR": str(tmp_path / "checkout"),
        }

        # When: we apply the environment
        result = config.with_env(environ)

        # Then: overrides win, the rest is preserved
        assert result.github_user == "other"
        assert result.github_repo == "claude-config"
        assert result.github_branch == "develop"
        assert result.install_dir == tmp_path / "checkout"

    def test_with_env_ignores_empty_values(self):
        config = RepositoryConfig(github_user="someone")

        assert config.with_env({"GITHUB_USER": ""}).github_user == "someone"


class TestLoadConfig:
    """Test load_config()."""

    def test_missing_file_returns_defaults(self, tmp_path):
        """Test that a missing config file is not an error."""
        config = load_config(tmp_path / "claude-config.yaml")

        assert isinstance(config, ClaudeConfig)
        assert config.config.backup_existing is True

    def test_template_parses(self, tmp_path):
        """Test that the init template is a valid config."""
        # Given: the template written to disk
        path = tmp_path / "claude-config.yaml"
        path.write_text(CONFIG_TEMPLATE)

        # When: we load it
        config = load_config(path)

        # Then: values match the defaults
        assert config.config.max_skill_lines == 500
        assert config.repository.github_repo == "claude-config"

    def test_load_values(self, tmp_path):
        path = tmp_path / "claude-config.yaml"
        path.write_text(
            "config:\n"
            "  backup_existing: false\n"
            "  skill_dirs: [skills]\n"
            "repository:\n"
            "  github_user: me\n"
        )

        config = load_config(path)

        assert config.config.backup_existing is False
        assert config.config.skill_dirs == ["skills"]
        assert config.repository.github_user == "me"

    def test_empty_file_returns_defaults(self, tmp_path):
        path = tmp_path / "claude-config.yaml"
        path.write_text("")

        assert load_config(path).repository.github_user == "kcenon"

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "claude-config.yaml"
        path.write_text("global: []\n")

        with pytest.raises(ValueError, match="Unknown section"):
            load_config(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "claude-config.yaml"
        path.write_text("config:\n  auto_update: true\n")

        with pytest.raises(ValueError, match="auto_update"):
            load_config(path)

    def test_section_must_be_mapping(self, tmp_path):
        path = tmp_path / "claude-config.yaml"
        path.write_text("config:\n  - a\n")

        with pytest.raises(ValueError, match="expected a mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "claude-config.yaml"
        path.write_text("config: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_config(path)
