"""Unit tests for Settings class and get_settings function."""

from pathlib import Path

import pytest

from dimconfig.config import get_settings, reload_settings
from dimconfig.config.settings import Settings, set_toml_config


class TestSettings:
    """Tests for Settings model."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings has sensible defaults."""
        monkeypatch.delenv("DIMCONFIG_ENGINE__DIMENSIONS_BUNDLE", raising=False)
        set_toml_config({})
        settings = Settings()
        assert settings.engine.base_context == {}
        assert settings.engine.dimensions_bundle is None
        assert settings.engine.dimensions_path is None
        assert settings.engine.cache.enabled is True
        assert settings.engine.cache.max_entries == 250
        assert settings.logging.level == "INFO"
        assert settings.logging.format == "json"

    def test_toml_values(self) -> None:
        """Values from the TOML source are applied."""
        set_toml_config({"engine": {"dimensions_bundle": "core", "cache": {"max_entries": 9}}})
        settings = Settings()
        assert settings.engine.dimensions_bundle == "core"
        assert settings.engine.cache.max_entries == 9
        assert settings.engine.cache.enabled is True

    def test_env_overrides_toml(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """DIMCONFIG_* environment variables win over TOML."""
        set_toml_config({"engine": {"cache": {"max_entries": 9}}})
        monkeypatch.setenv("DIMCONFIG_ENGINE__CACHE__MAX_ENTRIES", "3")
        assert Settings().engine.cache.max_entries == 3

    def test_init_overrides_everything(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DIMCONFIG_LOGGING__LEVEL", "DEBUG")
        settings = Settings(logging={"level": "ERROR"})
        assert settings.logging.level == "ERROR"

    def test_invalid_value_rejected(self) -> None:
        """Validation errors surface at construction."""
        set_toml_config({"engine": {"cache": {"max_entries": 0}}})
        with pytest.raises(ValueError):
            Settings()


class TestGetSettings:
    """Tests for get_settings function."""

    def test_reads_config_dir(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_settings loads default.toml from the config directory."""
        (test_config_dir / "default.toml").write_text('[engine]\ndimensions_bundle = "core"\n')
        monkeypatch.setenv("DIMCONFIG_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("DIMCONFIG_ENV", "nonexistent")

        settings = get_settings()
        assert isinstance(settings, Settings)
        assert settings.engine.dimensions_bundle == "core"

    def test_settings_cached(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_settings returns the cached instance."""
        monkeypatch.setenv("DIMCONFIG_CONFIG_DIR", str(test_config_dir))
        assert get_settings() is get_settings()

    def test_reload_settings(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """reload_settings picks up changed files."""
        monkeypatch.setenv("DIMCONFIG_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("DIMCONFIG_ENV", "nonexistent")
        first = get_settings()
        assert first.engine.cache.enabled is True

        (test_config_dir / "default.toml").write_text("[engine.cache]\nenabled = false\n")
        reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded.engine.cache.enabled is False
