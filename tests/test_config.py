"""
Tests for configuration loading — .prettier-setup.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from prettier_setup.core.config.loader import (
    SETUP_CONFIG_FILE,
    ConfigError,
    default_config_path,
    load_settings,
)
from prettier_setup.core.models.settings import (
    DEFAULT_HUSKY_VERSION,
    DEFAULT_REGISTRY_URL,
    SetupSettings,
)


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path: Path):
        settings = load_settings(tmp_path)
        assert settings == SetupSettings()
        assert settings.registry_url == DEFAULT_REGISTRY_URL
        assert settings.registry_timeout is None
        assert settings.husky_version == DEFAULT_HUSKY_VERSION
        assert settings.install is True

    def test_default_path(self, tmp_path: Path):
        assert default_config_path(tmp_path) == tmp_path / SETUP_CONFIG_FILE

    def test_full_file(self, tmp_path: Path):
        (tmp_path / SETUP_CONFIG_FILE).write_text(textwrap.dedent("""\
            registry_url: https://npm.internal.example.com
            registry_timeout: 10
            husky_version: "^4.3.8"
            install: false
            package_manager: pnpm
            install_timeout: 120
        """))
        settings = load_settings(tmp_path)
        assert settings.registry_url == "https://npm.internal.example.com"
        assert settings.registry_timeout == 10
        assert settings.husky_version == "^4.3.8"
        assert settings.install is False
        assert settings.package_manager == "pnpm"
        assert settings.install_timeout == 120

    def test_empty_file(self, tmp_path: Path):
        (tmp_path / SETUP_CONFIG_FILE).write_text("")
        assert load_settings(tmp_path) == SetupSettings()

    def test_explicit_path(self, tmp_path: Path):
        cfg = tmp_path / "custom.yml"
        cfg.write_text("install: false\n")
        assert load_settings(tmp_path / "elsewhere", cfg).install is False

    def test_explicit_path_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_settings(tmp_path, tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        (tmp_path / SETUP_CONFIG_FILE).write_text("install: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(tmp_path)

    def test_not_a_mapping(self, tmp_path: Path):
        (tmp_path / SETUP_CONFIG_FILE).write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_settings(tmp_path)

    @pytest.mark.parametrize(
        "content",
        [
            "unknown_key: 1\n",
            "package_manager: bun\n",
            "registry_timeout: 0\n",
            "install_timeout: -5\n",
            "registry_url: registry.npmjs.org\n",
            "registry_url: ftp://mirror.local/npm\n",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, content: str):
        (tmp_path / SETUP_CONFIG_FILE).write_text(content)
        with pytest.raises(ConfigError, match="Invalid setup configuration"):
            load_settings(tmp_path)

    def test_registry_url_whitespace_trimmed(self, tmp_path: Path):
        (tmp_path / SETUP_CONFIG_FILE).write_text('registry_url: " https://npm.internal.example.com "\n')
        assert load_settings(tmp_path).registry_url == "https://npm.internal.example.com"
