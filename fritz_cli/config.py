"""Configuration constants and credential resolution for the FRITZ!Box CLI."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigError

DEFAULT_BASE_URL = "http://fritz.box"
DEFAULT_CONFIG   = "config.json"
# Credentials can also be supplied via FRITZ_URL / FRITZ_USER / FRITZ_PASSWORD env vars
ENV_BASE_URL = "FRITZ_URL"
ENV_USER     = "FRITZ_USER"
ENV_PASSWORD = "FRITZ_PASSWORD"

LOGIN_SID_URL   = "/login_sid.lua"
DATA_URL        = "/data.lua"
REBOOT_URL      = "/reboot.lua"
INETSTAT_URL    = "/internet/inetstat_monitor.lua"

REQUEST_TIMEOUT          = 15    # seconds per HTTP request
RECONNECT_SETTLE_SECONDS = 30    # time until a reconnect takes full effect
DEFAULT_COLUMN_SPACING   = 2

# "No session" value returned by login_sid.lua before (or instead of) a login
SENTINEL_SID = "0000000000000000"


@dataclass(frozen=True)
class Credentials:
    """Fully resolved connection settings consumed by the session client."""

    base_url: str
    username: str
    password: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"Credentials(base_url={self.base_url!r}, "
            f"username={self.username!r}, password='***')"
        )


def read_config_file(path: Path) -> dict:
    """
    Load the JSON config file written by ``fritz-cli init``.

    A missing file is not an error and yields an empty dict; a file that is
    not a JSON object raises ConfigError.
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def load_credentials(
    path: Path,
    base_url: "str | None" = None,
    username: "str | None" = None,
    password: "str | None" = None,
    environ: "dict | None" = None,
) -> dict:
    """
    Merge credential sources, highest priority first:

      1. explicit values (command-line flags)
      2. environment (FRITZ_URL / FRITZ_USER / FRITZ_PASSWORD)
      3. the JSON config file at *path*

    Returns a dict with the keys ``base_url``, ``username`` and ``password``;
    values that no source provides are ``None`` (the CLI prompts for a
    missing password).  ``base_url`` falls back to DEFAULT_BASE_URL.
    """
    env = os.environ if environ is None else environ
    file_cfg = read_config_file(path)

    def pick(explicit, env_key, file_key):
        if explicit:
            return explicit
        if env.get(env_key):
            return env[env_key]
        value = file_cfg.get(file_key)
        return str(value) if value is not None else None

    return {
        "base_url": pick(base_url, ENV_BASE_URL, "base_url") or DEFAULT_BASE_URL,
        "username": pick(username, ENV_USER, "username"),
        "password": pick(password, ENV_PASSWORD, "password"),
    }


def write_config(path: Path, credentials: Credentials) -> None:
    """Write *credentials* as the JSON config file, readable by the owner only."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "base_url": credentials.base_url,
        "username": credentials.username,
        "password": credentials.password,
    }
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    path.chmod(0o600)
