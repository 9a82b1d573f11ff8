"""Load dashboard settings from YAML and the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from screener.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Settings:
    api_url: str = "http://localhost:8080/api"
    timeout: float = 15.0
    parallel_rankings: bool = False
    activity_limit: int = 3
    ping_attempts: int = 2


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        log.debug("No settings file at %s — using defaults", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected a mapping, got %s", path.name, type(data).__name__)
        return {}
    # Accept both a flat file and one nested under "api:"
    api = data.pop("api", None)
    if isinstance(api, dict):
        if "url" in api:
            data.setdefault("api_url", api["url"])
        if "timeout" in api:
            data.setdefault("timeout", api["timeout"])
    return data


def _number(settings: Settings, name: str, cast, floor=None):
    """Convert one numeric setting, falling back to its default when unusable."""
    value = getattr(settings, name)
    default = getattr(Settings(), name)
    try:
        number = cast(value)
    except (TypeError, ValueError, OverflowError):
        log.warning("Setting %s=%r is not a number — using %r", name, value, default)
        number = default
    if floor is not None:
        number = max(floor, number)
    return number


def load_settings(path: Path | None = None) -> Settings:
    data = _read_yaml(path or SETTINGS_PATH)
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        log.warning("Unknown settings ignored: %s", ", ".join(unknown))

    settings = Settings(**{k: v for k, v in data.items() if k in known})

    url = get_env("SCREENER_API_URL")
    if url:
        settings.api_url = url
    timeout = get_env("SCREENER_TIMEOUT")
    if timeout:
        try:
            settings.timeout = float(timeout)
        except ValueError:
            log.warning("SCREENER_TIMEOUT=%r is not a number — keeping %.1fs", timeout, settings.timeout)
    parallel = get_env("SCREENER_PARALLEL_RANKINGS")
    if parallel:
        settings.parallel_rankings = parallel.lower() in _TRUTHY

    settings.api_url = str(settings.api_url).rstrip("/")
    settings.timeout = _number(settings, "timeout", float)
    settings.activity_limit = _number(settings, "activity_limit", int, floor=0)
    settings.ping_attempts = _number(settings, "ping_attempts", int, floor=1)
    return settings
