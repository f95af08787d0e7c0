"""``ConfigData`` — typed accessors over a value source.

Every accessor follows the same path::

    source.lookup(key) or default  ->  placeholder resolution  ->  coercion

Nothing is cached: each call reads the source and the environment afresh.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from ._casters import Csv, parse_bool, parse_int
from ._placeholders import PlaceholderResolver
from ._repository import EnvironmentProvider, ValueSource
from ._types import InvalidConfigurationError


class ConfigData:
    """Reads string, bool, int and list values with ``${VAR}`` expansion.

    Parameters
    ----------
    source:
        Where raw values come from (``IniFileSource``, ``MappingSource``, ...).
    environment:
        Environment used to resolve placeholders. Defaults to ``os.environ``.
    logger:
        Receives the unresolved-placeholder error and warning records.
    resolver:
        Ready-made resolver; overrides *environment* and *logger*.
    """

    def __init__(
        self,
        source: ValueSource,
        *,
        environment: EnvironmentProvider | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        resolver: PlaceholderResolver | None = None,
    ) -> None:
        self.source = source
        self.resolver = resolver or PlaceholderResolver(environment, logger)

    def contains(self, key: str) -> bool:
        return self.source.lookup(key) is not None

    def get_string(self, key: str, default: str = "") -> str:
        value = self.source.lookup(key)
        if value is None:
            value = default
        return self.resolver.resolve(value)  # type: ignore[return-value]

    def get_bool(self, key: str, default: bool = False) -> bool:
        parsed = parse_bool(self.get_string(key, str(default)))
        return default if parsed is None else parsed

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get_string(key, str(default))
        try:
            return parse_int(value)
        except ValueError as exc:
            raise InvalidConfigurationError(key) from exc

    def get_list(
        self,
        key: str,
        default: Iterable[str] = (),
        *,
        delimiter: str = ",",
        cast: Callable[[str], Any] = str,
    ) -> list[Any]:
        """Read a delimited list; empty items are dropped."""
        value = self.get_string(key, delimiter.join(default))
        try:
            return Csv(cast=cast, delimiter=delimiter)(value)
        except ValueError as exc:
            raise InvalidConfigurationError(key) from exc


# ---------------------------------------------------------------------------
# Module-level instance management
# ---------------------------------------------------------------------------

_active_config: ConfigData | None = None


def set_config(cfg: ConfigData | None) -> None:
    """Set the module-level ``ConfigData``."""
    global _active_config
    _active_config = cfg


def get_config() -> ConfigData | None:
    """Return the current module-level ``ConfigData`` (may be ``None``)."""
    return _active_config


def default_config() -> ConfigData:
    """Return the module-level ``ConfigData``, reading ``appsettings.ini`` on first use."""
    global _active_config
    if _active_config is None:
        from ._ini_source import IniFileSource

        _active_config = ConfigData(IniFileSource())
    return _active_config
