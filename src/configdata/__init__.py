"""Typed configuration accessors with environment-variable placeholders.

Values read from an INI file (or any other key-value source) may embed
``${NAME}`` (required) and ``${?NAME}`` (optional) references to environment
variables, which are substituted on every read.
"""

from ._version import __version__
from ._app_config import AppConfig
from ._casters import Csv, parse_bool, parse_int
from ._ini_source import IniFileSource, parse_ini
from ._placeholders import PlaceholderResolver, scan
from ._reader import ConfigData, default_config, get_config, set_config
from ._repository import (
    ChainedSource,
    EnvironmentProvider,
    FakeEnvironment,
    MappingSource,
    OsEnvironment,
    ValueSource,
)
from ._testing import override_config
from ._types import (
    ConfigError,
    InvalidConfigurationError,
    PlaceholderToken,
    Secret,
    UnresolvedPlaceholderError,
)

__all__ = [
    "__version__",
    # Core
    "ConfigData",
    "PlaceholderResolver",
    "default_config",
    "get_config",
    "set_config",
    "scan",
    # Errors
    "ConfigError",
    "UnresolvedPlaceholderError",
    "InvalidConfigurationError",
    # Sources
    "ValueSource",
    "MappingSource",
    "ChainedSource",
    "IniFileSource",
    "parse_ini",
    "EnvironmentProvider",
    "OsEnvironment",
    # Typed groups
    "AppConfig",
    "Secret",
    "PlaceholderToken",
    # Helpers
    "Csv",
    "parse_bool",
    "parse_int",
    # Testing
    "override_config",
    "FakeEnvironment",
]
