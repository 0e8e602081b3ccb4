"""Unit tests for gateway configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from release_gateway.core.config import (
    ConfigError,
    GatewayConfig,
    ServerConfig,
    load_config,
)
from release_gateway.integrations.charts.config import ChartRepositoryConfig, ChartsConfig


class TestServerConfig:
    """Tests for ServerConfig."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        config = ServerConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 8080

    @pytest.mark.unit
    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_range(self, port: int) -> None:
        with pytest.raises(ValidationError, match="port"):
            ServerConfig(port=port)


class TestChartsConfig:
    """Tests for chart repository configuration."""

    @pytest.mark.unit
    def test_url_trailing_slash_stripped(self) -> None:
        repo = ChartRepositoryConfig(name="stable", url="https://charts.test/stable/")
        assert repo.url == "https://charts.test/stable"

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["", "  ", "a/b"])
    def test_invalid_repository_name(self, name: str) -> None:
        with pytest.raises(ValidationError):
            ChartRepositoryConfig(name=name, url="https://charts.test")

    @pytest.mark.unit
    def test_duplicate_repository_names(self) -> None:
        with pytest.raises(ValidationError, match="duplicate repository names: stable"):
            ChartsConfig(
                repositories=[
                    {"name": "stable", "url": "https://a.test"},
                    {"name": "stable", "url": "https://b.test"},
                ]
            )

    @pytest.mark.unit
    def test_cache_dir_expanded(self) -> None:
        assert "~" not in ChartsConfig(cache_dir="~/charts").cache_dir


class TestFromEnv:
    """Tests for GatewayConfig.from_env."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        config = GatewayConfig.from_env()
        assert config.server.port == 8080
        assert config.backend.base_url == "http://localhost:44134"
        assert config.charts.repositories == []

    @pytest.mark.unit
    def test_env_overrides_base_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RG_HOST", "127.0.0.1")
        monkeypatch.setenv("RG_PORT", "9000")
        monkeypatch.setenv("RG_BACKEND_URL", "https://tiller.prod:44134")
        monkeypatch.setenv("RG_BACKEND_TOKEN", "s3cret")
        monkeypatch.setenv("RG_BACKEND_TIMEOUT", "2.5")
        monkeypatch.setenv("RG_CHART_CACHE_DIR", "/var/cache/charts")
        monkeypatch.setenv("RG_LOG_JSON", "yes")

        config = GatewayConfig.from_env(
            {"server": {"host": "10.0.0.1", "port": 8000}, "backend": {"base_url": "http://x:1"}}
        )

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 9000
        assert config.backend.base_url == "https://tiller.prod:44134"
        assert config.backend.token == "s3cret"
        assert config.backend.timeout == 2.5
        assert config.charts.cache_dir == "/var/cache/charts"
        assert config.logging.json_output is True

    @pytest.mark.unit
    def test_chart_repos_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RG_CHART_REPOS", "stable=https://a.test, incubator=https://b.test/,")

        config = GatewayConfig.from_env()

        assert [(r.name, r.url) for r in config.charts.repositories] == [
            ("stable", "https://a.test"),
            ("incubator", "https://b.test"),
        ]

    @pytest.mark.unit
    def test_malformed_chart_repos(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RG_CHART_REPOS", "stable")

        with pytest.raises(ValueError, match="expected name=url"):
            GatewayConfig.from_env()

    @pytest.mark.unit
    def test_base_config_not_mutated(self) -> None:
        base = {"server": {"port": 8000}}

        GatewayConfig.from_env(base)

        assert base == {"server": {"port": 8000}}

    @pytest.mark.unit
    def test_non_mapping_section(self) -> None:
        with pytest.raises(ValueError, match="must be a mapping"):
            GatewayConfig.from_env({"server": ["not", "a", "mapping"]})


class TestLoadConfig:
    """Tests for load_config."""

    @pytest.mark.unit
    def test_missing_default_file_uses_defaults(self, temp_dir: Path) -> None:
        config = load_config()
        assert config == GatewayConfig()

    @pytest.mark.unit
    def test_default_file_in_cwd(self, temp_dir: Path) -> None:
        (temp_dir / "release-gateway.yaml").write_text("server:\n  port: 7070\n")

        assert load_config().server.port == 7070

    @pytest.mark.unit
    def test_env_var_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("backend:\n  base_url: http://tiller:1\n")
        monkeypatch.setenv("RG_CONFIG", str(path))

        assert load_config().backend.base_url == "http://tiller:1"

    @pytest.mark.unit
    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="config file not found"):
            load_config(tmp_path / "absent.yaml")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("server: [unclosed", "unable to read config file"),
            ("- a\n- b\n", "must contain a mapping"),
            ("server:\n  port: 0\n", "invalid configuration"),
            ("unknown_section: {}\n", "invalid configuration"),
        ],
    )
    def test_invalid_files(self, tmp_path: Path, content: str, message: str) -> None:
        path = tmp_path / "gateway.yaml"
        path.write_text(content)

        with pytest.raises(ConfigError, match=message) as exc_info:
            load_config(path)

        assert exc_info.value.path == str(path)

    @pytest.mark.unit
    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "gateway.yaml"
        path.write_text("")

        assert load_config(path) == GatewayConfig()
