"""JSON config loading and dashboard settings.

The config file is only read. Column and sort changes made in a session live
in memory and are gone on exit. All access is defensive: malformed or missing
config falls back to defaults key by key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .daemon import ConnectionSettings
from .state import ColumnSpec, SortKey, SortSpec
from .state.sync import DEFAULT_SYNC_INTERVAL_SECONDS
from .ui_theme import COLOR_SLOTS

logger = logging.getLogger(__name__)

APP_NAME = "spoiler"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_TORRENT_DIR = Path("~/Downloads")
MIN_REFRESH_SECONDS = 0.2


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", config_path)
        return {}
    return data


def _string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _port(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if 0 < value < 65536 else None


def _refresh_seconds(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value != value or value <= 0:
        return None
    return max(MIN_REFRESH_SECONDS, float(value))


COLOR_KEYS: tuple[str, ...] = ("fg_normal",) + tuple(key for pair in COLOR_SLOTS.values() for key in pair)


def _colors(data: dict[str, object]) -> dict[str, str]:
    """Collect hex color overrides from top-level keys and the ``colors`` object."""
    colors = {key: data[key] for key in COLOR_KEYS if isinstance(data.get(key), str)}
    nested = data.get("colors")
    if isinstance(nested, dict):
        colors.update(
            (key, item) for key, item in nested.items() if isinstance(key, str) and isinstance(item, str)
        )
    return colors


@dataclass
class DashboardSettings:
    """Everything ``run_dashboard`` needs, merged from config and CLI flags."""

    connection: ConnectionSettings = field(default_factory=ConnectionSettings)
    refresh_seconds: float = DEFAULT_SYNC_INTERVAL_SECONDS
    torrent_dir: Path = DEFAULT_TORRENT_DIR
    theme: str | None = None
    no_color: bool = False
    colors: dict[str, str] = field(default_factory=dict)
    columns: ColumnSpec = field(default_factory=ColumnSpec.default)
    sort: SortSpec = field(default_factory=SortSpec)

    @classmethod
    def from_config(cls, data: dict[str, object]) -> DashboardSettings:
        defaults = ConnectionSettings()
        connection = ConnectionSettings(
            host=_string(data, "host") or defaults.host,
            port=_port(data.get("port")) or defaults.port,
            username=_string(data, "username"),
            password=_string(data, "password"),
            rpc_path=_string(data, "rpc_path") or defaults.rpc_path,
        )
        sort_key = SortKey.parse(data.get("sort_key")) or SortSpec().key
        descending = data.get("sort_descending")
        torrent_dir = _string(data, "torrent_dir")
        return cls(
            connection=connection,
            refresh_seconds=_refresh_seconds(data.get("refresh_seconds")) or DEFAULT_SYNC_INTERVAL_SECONDS,
            torrent_dir=Path(torrent_dir) if torrent_dir else DEFAULT_TORRENT_DIR,
            theme=_string(data, "theme"),
            colors=_colors(data),
            columns=ColumnSpec.from_config(data.get("columns")),
            sort=SortSpec(sort_key, descending if isinstance(descending, bool) else False),
        )

    def resolved_torrent_dir(self) -> Path:
        return self.torrent_dir.expanduser()


def load_settings(path: Path | None = None) -> DashboardSettings:
    return DashboardSettings.from_config(load_config(path))


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_TORRENT_DIR",
    "DashboardSettings",
    "load_config",
    "load_settings",
]
