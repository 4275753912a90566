"""
Run configuration for the theme asset migration.

The configuration is built once at startup by :func:`load_config` and then
passed explicitly to every component.  Values come from a JSON file with
``source``, ``destination`` and ``migration`` sections; anything the file
leaves empty is filled from the environment.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class MigrationConfig:
    source_store_url: str = ""
    source_store_token: str = ""
    destination_store_url: str = ""
    destination_store_token: str = ""
    destination_store_theme: str = ""
    source_theme_role: str = "main"
    staging_dir: str = "."
    request_timeout: float = 30.0
    requests_per_minute: int = 120
    dry_run: bool = False
    limit: Optional[int] = None


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


_TRUE = ("true", "1", "yes")
_FALSE = ("false", "0", "no", "")


def _parse_flag(value: Any, name: str) -> bool:
    """Read a boolean setting; ``None`` means unset."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def load_config(config_file: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> MigrationConfig:
    """
    Build a :class:`MigrationConfig` from ``config_file`` and ``env``.

    Store credentials found in the file take precedence; missing ones fall
    back to ``SOURCE_STORE_URL``, ``SOURCE_STORE_TOKEN``,
    ``DESTINATION_STORE_URL``, ``DESTINATION_STORE_TOKEN`` and
    ``DESTINATION_STORE_THEME``.

    :param config_file: Optional path to a JSON configuration file.  A path
        that does not exist is ignored.
    :param env: Mapping used instead of ``os.environ`` (mostly for tests).
    :return: The immutable configuration for one run.
    :raises ValueError: if the file is not valid JSON or holds an invalid
        migration setting.
    """
    env = os.environ if env is None else env
    data: Dict[str, Any] = {}
    if config_file and os.path.exists(config_file):
        with open(config_file, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {config_file}: {e}") from e

    source = _section(data, "source")
    destination = _section(data, "destination")
    migration = _section(data, "migration")

    request_timeout = migration.get("request_timeout")
    requests_per_minute = migration.get("requests_per_minute")
    limit = migration.get("limit")
    try:
        request_timeout = 30.0 if request_timeout is None else float(request_timeout)
        requests_per_minute = 120 if requests_per_minute is None else int(requests_per_minute)
        limit = None if limit is None else int(limit)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid migration setting in {config_file}: {e}") from e

    return MigrationConfig(
        source_store_url=source.get("store_url") or env.get("SOURCE_STORE_URL", ""),
        source_store_token=source.get("access_token") or env.get("SOURCE_STORE_TOKEN", ""),
        destination_store_url=destination.get("store_url") or env.get("DESTINATION_STORE_URL", ""),
        destination_store_token=destination.get("access_token") or env.get("DESTINATION_STORE_TOKEN", ""),
        destination_store_theme=destination.get("theme_name") or env.get("DESTINATION_STORE_THEME", ""),
        source_theme_role=source.get("theme_role") or "main",
        staging_dir=migration.get("staging_dir") or ".",
        request_timeout=request_timeout,
        requests_per_minute=requests_per_minute,
        dry_run=_parse_flag(migration.get("dry_run"), "dry_run"),
        limit=limit,
    )
