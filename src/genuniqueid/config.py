"""Configuration for the genuniqueid gateway.

Reads from config/genuniqueid.ini if present, environment variables override.
The secret salt never belongs in version control.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path

_CONFIG_FILE = Path(__file__).resolve().parent.parent.parent / "config" / "genuniqueid.ini"

_FILTER_KEYS = (
    "sourceAttribute",
    "targetAttribute",
    "scopeAttribute",
    "encoding",
    "privacy",
)


@dataclass(frozen=True)
class GatewayConfig:
    """Gateway configuration. Immutable once loaded."""

    api_key: str = ""
    host: str = "127.0.0.1"
    port: int = 8000
    secret_salt: str = field(default="", repr=False)
    filter_config: dict = field(default_factory=dict, hash=False)

    def salt(self) -> str:
        """Salt provider handed to the filter."""
        return self.secret_salt


def load_config(config_path: Path | None = None) -> GatewayConfig:
    """Load config from INI file, then override with environment variables."""
    path = config_path or _CONFIG_FILE
    kwargs: dict = {}
    filter_config: dict = {}

    if path.exists():
        # keep sourceAttribute etc. case-sensitive, salts may contain %
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str
        parser.read(path)
        if parser.has_section("gateway"):
            for ini_key, config_key in [
                ("api_key", "api_key"),
                ("host", "host"),
            ]:
                val = parser.get("gateway", ini_key, fallback=None)
                if val is not None:
                    kwargs[config_key] = val
            port_str = parser.get("gateway", "port", fallback=None)
            if port_str is not None:
                kwargs["port"] = int(port_str)
        if parser.has_section("secrets"):
            val = parser.get("secrets", "secretsalt", fallback=None)
            if val is not None:
                kwargs["secret_salt"] = val
        if parser.has_section("filter"):
            for key in _FILTER_KEYS:
                val = parser.get("filter", key, fallback=None)
                if val is not None:
                    filter_config[key] = val

    env_map = {
        "GENUNIQUEID_API_KEY": "api_key",
        "GENUNIQUEID_HOST": "host",
        "GENUNIQUEID_PORT": "port",
        "GENUNIQUEID_SECRET_SALT": "secret_salt",
    }
    for env_key, config_key in env_map.items():
        val = os.getenv(env_key)
        if val is not None:
            if config_key == "port":
                kwargs[config_key] = int(val)
            else:
                kwargs[config_key] = val

    filter_env_map = {
        "GENUNIQUEID_SOURCE_ATTRIBUTE": "sourceAttribute",
        "GENUNIQUEID_TARGET_ATTRIBUTE": "targetAttribute",
        "GENUNIQUEID_SCOPE_ATTRIBUTE": "scopeAttribute",
        "GENUNIQUEID_ENCODING": "encoding",
        "GENUNIQUEID_PRIVACY": "privacy",
    }
    for env_key, filter_key in filter_env_map.items():
        val = os.getenv(env_key)
        if val is not None:
            filter_config[filter_key] = val

    return GatewayConfig(filter_config=filter_config, **kwargs)
