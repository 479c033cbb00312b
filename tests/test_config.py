# SPDX-License-Identifier: Apache-2.0
"""Tests for EngineConfig."""

from pathlib import Path

import pytest

from belocal import ConfigurationError, EngineConfig


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so values written by load_dotenv are removed on teardown
    for name in ("BELOCAL_API_KEY", "BELOCAL_BASE_URL", "BELOCAL_TIMEOUT"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestEngineConfig:
    """Test EngineConfig."""

    def test_defaults(self) -> None:
        config = EngineConfig(api_key="test-key")
        assert config.base_url is None
        assert config.timeout == 30.0

    def test_requires_api_key(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            EngineConfig(api_key="")
        assert "BELOCAL_API_KEY" in str(exc_info.value)

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ConfigurationError):
            EngineConfig(api_key="test-key", timeout=-1)


class TestEngineConfigFromEnv:
    """Test EngineConfig.from_env."""

    def test_reads_environment(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("BELOCAL_API_KEY", "env-key")
        clean_env.setenv("BELOCAL_BASE_URL", "https://example.test")
        clean_env.setenv("BELOCAL_TIMEOUT", "12.5")

        config = EngineConfig.from_env(tmp_path / "missing.env")

        assert config.api_key == "env-key"
        assert config.base_url == "https://example.test"
        assert config.timeout == 12.5

    def test_reads_env_file(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("BELOCAL_API_KEY=file-key\n", encoding="utf-8")

        config = EngineConfig.from_env(env_file)

        assert config.api_key == "file-key"
        assert config.timeout == 30.0

    def test_environment_wins_over_file(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("BELOCAL_API_KEY=file-key\n", encoding="utf-8")
        clean_env.setenv("BELOCAL_API_KEY", "env-key")

        assert EngineConfig.from_env(env_file).api_key == "env-key"

    def test_missing_key(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            EngineConfig.from_env(tmp_path / "missing.env")

    def test_invalid_timeout(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("BELOCAL_API_KEY", "env-key")
        clean_env.setenv("BELOCAL_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError) as exc_info:
            EngineConfig.from_env(tmp_path / "missing.env")
        assert "BELOCAL_TIMEOUT" in str(exc_info.value)
