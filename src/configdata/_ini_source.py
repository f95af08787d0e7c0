"""INI file value source with optional hot reload.

Sections become key prefixes joined with ``:``::

    LogLevel = Info

    [TelemetryService]
    StorageType = "documentDb"

yields ``LogLevel`` and ``TelemetryService:StorageType``. Lookups are
case-insensitive.
"""

from __future__ import annotations

import configparser
import logging
import os
import threading
from pathlib import Path

from ._types import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "appsettings.ini"

# Synthetic section holding keys that appear before the first header.
_ROOT_SECTION = "\x00root"
_NO_DEFAULTS = "\x00defaults"


def parse_ini(text: str, *, origin: str = "<string>") -> dict[str, str]:
    """Parse INI *text* into a flat ``{"section:key": value}`` table."""
    parser = configparser.ConfigParser(
        delimiters=("=",),
        interpolation=None,
        strict=True,
        empty_lines_in_values=False,
        default_section=_NO_DEFAULTS,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        # No multi-line values: indented lines are ordinary entries.
        lines = "\n".join(line.strip() for line in text.splitlines())
        parser.read_string(f"[{_ROOT_SECTION}]\n{lines}", source=origin)
    except configparser.Error as exc:
        raise ConfigError(f"Invalid configuration file {origin}: {exc}") from exc

    table: dict[str, str] = {}
    for section in parser.sections():
        prefix = "" if section == _ROOT_SECTION else f"{section.strip()}:"
        for option, value in parser.items(section, raw=True):
            key = f"{prefix}{option.strip()}".lower()
            if key in table:
                raise ConfigError(f"Duplicate key '{key}' in configuration file {origin}")
            table[key] = _unquote(value)
    return table


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


class IniFileSource:
    """Value source backed by an INI file.

    With ``reload_on_change`` the file's modification time is checked on every
    lookup and the table is rebuilt when it moves. The table is replaced as a
    whole, so a lookup never mixes two generations of the file.
    """

    def __init__(
        self,
        path: str | os.PathLike[str] = DEFAULT_FILE_NAME,
        *,
        optional: bool = True,
        reload_on_change: bool = True,
    ) -> None:
        self.path = Path(path)
        self.optional = optional
        self.reload_on_change = reload_on_change
        self._lock = threading.Lock()
        self._mtime: int | None = None
        self._table: dict[str, str] = {}
        self._table, self._mtime = self._load()

    def lookup(self, key: str) -> str | None:
        if self.reload_on_change:
            self._reload_if_changed()
        return self._table.get(key.lower())

    def reload(self) -> None:
        """Re-read the file unconditionally."""
        table, mtime = self._load()
        with self._lock:
            self._table, self._mtime = table, mtime

    # -- Internals ----------------------------------------------------------

    def _stat_mtime(self) -> int | None:
        try:
            return self.path.stat().st_mtime_ns
        except FileNotFoundError:
            return None

    def _load(self) -> tuple[dict[str, str], int | None]:
        mtime = self._stat_mtime()
        if mtime is None:
            if not self.optional:
                raise ConfigError(f"Configuration file {self.path} not found")
            return {}, None
        try:
            text = self.path.read_text(encoding="utf-8-sig")
        except OSError as exc:
            raise ConfigError(f"Unable to read configuration file {self.path}") from exc
        return parse_ini(text, origin=str(self.path)), mtime

    def _reload_if_changed(self) -> None:
        if self._stat_mtime() == self._mtime:
            return
        with self._lock:
            if self._stat_mtime() == self._mtime:
                return
            try:
                self._table, self._mtime = self._load()
            except ConfigError as exc:
                # Keep serving the last good generation until the file changes again.
                self._mtime = self._stat_mtime()
                logger.warning(
                    "Configuration reload failed",
                    extra={"path": str(self.path), "error": str(exc)},
                )
                return
            logger.info("Configuration reloaded", extra={"path": str(self.path)})
