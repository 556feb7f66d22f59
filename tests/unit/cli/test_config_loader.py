"""Unit tests for cli.config module."""

import os

import pytest

from guidesync.cli.config import ConfigLoader
from guidesync.cli.models import ConverterConfig
from guidesync.errors import ConfigError, FilesystemError


@pytest.fixture
def write_config(tmp_path):
    def _write(content):
        path = tmp_path / "config.yaml"
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write


class TestLoad:
    """Test cases for ConfigLoader.load()."""

    def test_valid_config(self, write_config):
        """Recognised fields are read."""
        path = write_config("enable_link_target_blank: true\ncontents_dir: ./articles\n")

        config = ConfigLoader.load(path)

        assert config == ConverterConfig(enable_link_target_blank=True, contents_dir="./articles")

    def test_missing_file_returns_defaults(self, tmp_path):
        """A missing configuration file is not an error."""
        config = ConfigLoader.load(str(tmp_path / "missing.yaml"))

        assert config == ConverterConfig()

    def test_empty_file_returns_defaults(self, write_config):
        """An empty file yields the defaults."""
        assert ConfigLoader.load(write_config("")) == ConverterConfig()

    def test_null_document_returns_defaults(self, write_config):
        """A YAML document containing only null yields the defaults."""
        assert ConfigLoader.load(write_config("~\n")) == ConverterConfig()

    def test_invalid_yaml_raises_config_error(self, write_config):
        """Malformed YAML is reported as a configuration error."""
        path = write_config("enable_link_target_blank: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(path)

        assert "Invalid YAML syntax" in str(exc_info.value)

    def test_non_dict_raises_config_error(self, write_config):
        """The top level must be a mapping."""
        path = write_config("- a\n- b\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(path)

        assert "got list" in str(exc_info.value)

    def test_directory_raises_filesystem_error(self, tmp_path):
        """A path that cannot be read as a file is a filesystem error."""
        with pytest.raises(FilesystemError) as exc_info:
            ConfigLoader.load(str(tmp_path))

        assert exc_info.value.operation == "read"


class TestParseConfig:
    """Test cases for field validation."""

    def test_unknown_keys_are_ignored(self, write_config):
        """Keys used by other sync tools are tolerated."""
        path = write_config(
            "subdomain: example\nemail: user@example.com\ndefault_locale: en_us\n"
            "enable_link_target_blank: true\n"
        )

        config = ConfigLoader.load(path)

        assert config.enable_link_target_blank is True
        assert config.contents_dir == "."

    def test_null_value_keeps_default(self, write_config):
        """An explicit null leaves the default in place."""
        config = ConfigLoader.load(write_config("contents_dir:\n"))

        assert config.contents_dir == "."

    def test_wrong_type_raises_config_error(self, write_config):
        """A non-boolean flag is rejected with the field name."""
        path = write_config("enable_link_target_blank: sometimes\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(path)

        assert exc_info.value.field == "enable_link_target_blank"
        assert "must be a bool, got str" in str(exc_info.value)

    def test_empty_contents_dir_raises_config_error(self, write_config):
        """A blank contents directory is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(write_config('contents_dir: "  "\n'))

        assert exc_info.value.field == "contents_dir"
        assert "cannot be empty" in str(exc_info.value)

    def test_contents_dir_is_stripped(self, write_config):
        """Surrounding whitespace is removed from string fields."""
        config = ConfigLoader.load(write_config('contents_dir: " docs "\n'))

        assert config.contents_dir == "docs"


class TestDefaultPath:
    """Test cases for ConfigLoader.default_path()."""

    def test_expands_home(self):
        """The default path lives under the user's home directory."""
        path = ConfigLoader.default_path()

        assert path == os.path.expanduser("~/.config/guidesync/config.yaml")
        assert not path.startswith("~")
