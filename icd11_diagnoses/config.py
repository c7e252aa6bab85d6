"""Configuration loader for the ICD-11 client."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .auth import TOKEN_URL
from .exceptions import ConfigurationError, UnsupportedLanguageError
from .language import ICDLanguage


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.toml"
DEFAULT_ENV_PATH = Path(__file__).parent.parent / ".env"

OFFICIAL_SERVER = "https://id.who.int/icd/"


@dataclass(frozen=True)
class ClientConfig:
    """Settings an :class:`ICD11Client` is built with."""

    base_uri: str = OFFICIAL_SERVER
    api_version: str = "v2"
    language: ICDLanguage = ICDLanguage.ENGLISH
    timeout: float = 10.0
    token_url: str = TOKEN_URL

    @classmethod
    def from_file(cls, path: str | Path = DEFAULT_CONFIG_PATH) -> "ClientConfig":
        """Build settings from the ``[api]`` and ``[servers]`` tables of a TOML file."""
        config = load_config(path)
        api = config.get("api", {})

        server_name = api.get("server", "official")
        servers = config.get("servers", {"official": OFFICIAL_SERVER})
        if server_name not in servers:
            raise ConfigurationError(f"Unknown server {server_name!r} in {path}", "load_config", server_name)

        base_uri = servers[server_name]
        if not base_uri.endswith("/"):
            base_uri += "/"

        return cls(
            base_uri=base_uri,
            api_version=api.get("version", "v2"),
            language=_language(api.get("language", "en"), path),
            timeout=float(api.get("timeout", 10)),
            token_url=api.get("token_url", TOKEN_URL),
        )


def _language(code: str, path) -> ICDLanguage:
    try:
        return ICDLanguage.by_code(code)
    except UnsupportedLanguageError as e:
        raise ConfigurationError(f"Unknown language {code!r} in {path}", "load_config", code) from e


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load configuration from a TOML file (config.toml in project root by default)."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_credentials(env_path: str | Path = DEFAULT_ENV_PATH) -> tuple[str | None, str | None]:
    """Read ICD_CLIENT_ID / ICD_CLIENT_SECRET from a .env file or the environment."""
    load_dotenv(env_path)
    return os.getenv("ICD_CLIENT_ID"), os.getenv("ICD_CLIENT_SECRET")
