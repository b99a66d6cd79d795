# tests/unit/test_config.py
"""
Tests for configuration building and loading.

Tests cover:
    - Defaults for NEO4J_URI / NEO4J_DATABASE
    - ServerConfig immutability and validation
    - YAML settings file loading
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from neo4j_mcp_server.config import (
    EmptyCredentialField,
    InvalidSettingsFile,
    MissingCredentials,
    RuntimeSettings,
    ServerConfig,
    build_config,
    get_settings_path,
    load_config,
    load_settings,
)


class TestBuildConfig:
    def test_defaults_when_unset(self):
        config = build_config(("neo4j", "neoneoneo"))

        assert config.uri == "bolt://localhost:7687"
        assert config.database == "neo4j"
        assert config.username == "neo4j"
        assert config.password == "neoneoneo"

    def test_defaults_when_empty(self):
        config = build_config(("neo4j", "neoneoneo"), uri="", database="")

        assert config.uri == "bolt://localhost:7687"
        assert config.database == "neo4j"

    def test_overrides_passed_through_verbatim(self):
        config = build_config(
            ("neo4j", "neoneoneo"), uri="not a uri", database="Movies DB"
        )

        assert config.uri == "not a uri"
        assert config.database == "Movies DB"


class TestLoadConfig:
    def test_load_from_environment_mapping(self):
        config = load_config(
            {
                "NEO4J_AUTH": "admin/s3cret",
                "NEO4J_URI": "neo4j://db.example.com:7687",
                "NEO4J_DATABASE": "movies",
            }
        )

        assert config == ServerConfig(
            uri="neo4j://db.example.com:7687",
            username="admin",
            password="s3cret",
            database="movies",
        )

    def test_load_uses_defaults(self):
        config = load_config({"NEO4J_AUTH": "neo4j/neoneoneo"})

        assert config.uri == "bolt://localhost:7687"
        assert config.database == "neo4j"

    def test_load_missing_auth(self):
        with pytest.raises(MissingCredentials):
            load_config({"NEO4J_URI": "bolt://localhost:7687"})

    def test_load_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("NEO4J_AUTH", "neo4j/")
        with pytest.raises(EmptyCredentialField):
            load_config()


class TestServerConfig:
    def test_config_is_frozen(self):
        config = build_config(("neo4j", "neoneoneo"))
        with pytest.raises(ValidationError):
            config.password = "other"

    @pytest.mark.parametrize("username,password", [("", "pw"), ("user", "")])
    def test_empty_credentials_rejected(self, username, password):
        with pytest.raises(ValidationError):
            ServerConfig(username=username, password=password)

    def test_repr_hides_password(self):
        config = build_config(("neo4j", "neoneoneo"))
        assert "neoneoneo" not in repr(config)

    def test_describe_masks_password(self):
        described = build_config(("neo4j", "neoneoneo")).describe()

        assert described["password"] == "********"
        assert described["username"] == "neo4j"
        assert "neoneoneo" not in described.values()


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"

        settings = load_settings(path)

        assert settings == RuntimeSettings()
        assert settings.shutdown_timeout == 10.0
        assert settings.log_level == "INFO"
        assert not path.exists()

    def test_load_values(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("shutdown_timeout: 2.5\nlog_level: DEBUG\nunknown_key: 1\n")

        settings = load_settings(path)

        assert settings.shutdown_timeout == 2.5
        assert settings.log_level == "DEBUG"

    def test_null_timeout_means_unbounded(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("shutdown_timeout: null\n")

        assert load_settings(path).shutdown_timeout is None

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("")

        assert load_settings(path) == RuntimeSettings()

    @pytest.mark.parametrize(
        "content",
        ["shutdown_timeout: -1\n", "log_level: LOUD\n", "- a\n- b\n", "key: [unclosed\n"],
    )
    def test_invalid_file(self, tmp_path: Path, content):
        path = tmp_path / "settings.yaml"
        path.write_text(content)

        with pytest.raises(InvalidSettingsFile) as exc_info:
            load_settings(path)

        assert exc_info.value.path == str(path)
        assert exc_info.value.diagnostics()[0].startswith("Error: invalid settings file")

    def test_settings_path_override(self):
        path = get_settings_path({"NEO4J_MCP_SETTINGS": "/etc/neo4j-mcp/settings.yaml"})
        assert path == Path("/etc/neo4j-mcp/settings.yaml")

    def test_settings_path_default(self):
        path = get_settings_path({})
        assert path.name == "settings.yaml"
        assert path.parent.name == "neo4j-mcp-server"
