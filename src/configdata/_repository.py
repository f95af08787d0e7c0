"""Value-source and environment protocols, plus in-memory implementations."""

from __future__ import annotations

import os
from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class ValueSource(Protocol):
    """Abstraction over where raw configuration values come from.

    Keys are flat strings; hierarchical sources join levels with ``:``
    (``"Section:Key"``).
    """

    def lookup(self, key: str) -> str | None:
        ...


@runtime_checkable
class EnvironmentProvider(Protocol):
    """Read-only view of the process environment."""

    def snapshot(self) -> Mapping[str, str]:
        ...


class MappingSource:
    """Dict-backed value source with case-insensitive keys.

    >>> source = MappingSource({"Service:Port": "8080"})
    >>> source.lookup("service:port")
    '8080'
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = {
            key.lower(): value for key, value in (values or {}).items()
        }

    def lookup(self, key: str) -> str | None:
        return self._values.get(key.lower())

    def set(self, key: str, value: str) -> None:
        self._values[key.lower()] = value

    def remove(self, key: str) -> None:
        self._values.pop(key.lower(), None)


class ChainedSource:
    """Layers several sources; a later source overrides an earlier one."""

    def __init__(self, *sources: ValueSource) -> None:
        self.sources = list(sources)

    def lookup(self, key: str) -> str | None:
        for source in reversed(self.sources):
            value = source.lookup(key)
            if value is not None:
                return value
        return None


class OsEnvironment:
    """Reads ``os.environ``; every call returns a fresh copy."""

    def snapshot(self) -> Mapping[str, str]:
        return dict(os.environ)


class FakeEnvironment:
    """Fixed environment for tests.

    >>> env = FakeEnvironment({"HOST": "localhost"})
    >>> env.snapshot()["HOST"]
    'localhost'
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def snapshot(self) -> Mapping[str, str]:
        return dict(self._values)

    # -- Mutation helpers for test setup ------------------------------------

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def unset(self, name: str) -> None:
        self._values.pop(name, None)
