"""Tests for gateway configuration loading."""

from __future__ import annotations

import pytest

from genuniqueid.config import GatewayConfig, load_config

_ENV_KEYS = (
    "GENUNIQUEID_API_KEY",
    "GENUNIQUEID_HOST",
    "GENUNIQUEID_PORT",
    "GENUNIQUEID_SECRET_SALT",
    "GENUNIQUEID_SOURCE_ATTRIBUTE",
    "GENUNIQUEID_TARGET_ATTRIBUTE",
    "GENUNIQUEID_SCOPE_ATTRIBUTE",
    "GENUNIQUEID_ENCODING",
    "GENUNIQUEID_PRIVACY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def ini_file(tmp_path):
    path = tmp_path / "genuniqueid.ini"
    path.write_text(
        "[gateway]\n"
        "api_key = from-file\n"
        "host = 0.0.0.0\n"
        "port = 9000\n"
        "\n"
        "[secrets]\n"
        "secretsalt = file-salt\n"
        "\n"
        "[filter]\n"
        "encoding = openldap\n"
        "sourceAttribute = entryUUID\n"
        "privacy = true\n"
    )
    return path


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path):
        config = load_config(tmp_path / "missing.ini")
        assert config == GatewayConfig()
        assert config.filter_config == {}
        assert config.salt() == ""

    def test_reads_ini(self, ini_file):
        config = load_config(ini_file)
        assert config.api_key == "from-file"
        assert config.host == "0.0.0.0"
        assert config.port == 9000
        assert config.secret_salt == "file-salt"
        assert config.filter_config == {
            "encoding": "openldap",
            "sourceAttribute": "entryUUID",
            "privacy": "true",
        }

    def test_env_overrides_file(self, ini_file, monkeypatch):
        monkeypatch.setenv("GENUNIQUEID_PORT", "9100")
        monkeypatch.setenv("GENUNIQUEID_SECRET_SALT", "env-salt")
        monkeypatch.setenv("GENUNIQUEID_ENCODING", "edirectory")
        monkeypatch.setenv("GENUNIQUEID_TARGET_ATTRIBUTE", "uniqueId")
        config = load_config(ini_file)
        assert config.port == 9100
        assert config.salt() == "env-salt"
        assert config.filter_config["encoding"] == "edirectory"
        assert config.filter_config["targetAttribute"] == "uniqueId"
        assert config.filter_config["sourceAttribute"] == "entryUUID"

    def test_salt_not_in_repr(self, ini_file):
        assert "file-salt" not in repr(load_config(ini_file))

    def test_frozen(self):
        config = GatewayConfig()
        with pytest.raises(AttributeError):
            config.port = 1

    def test_percent_in_salt_is_literal(self, tmp_path):
        path = tmp_path / "genuniqueid.ini"
        path.write_text("[secrets]\nsecretsalt = ab%cd\n\n[filter]\nscopeAttribute = %(scope)s\n")
        config = load_config(path)
        assert config.salt() == "ab%cd"
        assert config.filter_config == {"scopeAttribute": "%(scope)s"}
