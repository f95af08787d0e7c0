"""Foundation types for configdata.

Provides exception classes, the parsed placeholder token, and the Secret
wrapper type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Base exception for config-related errors."""


class UnresolvedPlaceholderError(ConfigError):
    """Raised when ``${NAME}`` placeholders have no environment value."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = tuple(names)
        super().__init__(f"Environment variables not found: {', '.join(self.names)}")


class InvalidConfigurationError(ConfigError):
    """Raised when a configuration value cannot be coerced to the requested type."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unable to load configuration value for '{key}'")


# ---------------------------------------------------------------------------
# Placeholder token
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlaceholderToken:
    """One ``${NAME}`` or ``${?NAME}`` occurrence inside a raw value."""

    name: str
    mandatory: bool
    span: tuple[int, int]

    @property
    def literal(self) -> str:
        if self.mandatory:
            return "${" + self.name + "}"
        return "${?" + self.name + "}"


# ---------------------------------------------------------------------------
# Secret
# ---------------------------------------------------------------------------


class Secret(Generic[T]):
    """Wraps a value so it is redacted in ``repr`` / ``str`` output.

    Access the real value via ``.secret_value``.
    """

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "_value", value)

    @property
    def secret_value(self) -> T:
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        return "Secret('***')"

    def __str__(self) -> str:
        return "***"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Secret):
            return bool(self._value == other._value)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        # Validate the inner type (``str`` for ``Secret[str]``) before wrapping.
        args = get_args(source_type)
        inner_schema = handler.generate_schema(args[0] if args else Any)

        def _wrap(value: Any) -> "Secret[Any]":
            return Secret(value)

        def _serialize(value: "Secret[Any]", _info: Any) -> str:
            return "***"

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.no_info_after_validator_function(_wrap, inner_schema),
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize,
                info_arg=True,
            ),
        )
