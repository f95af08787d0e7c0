"""Test utilities for configdata."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping

from ._reader import ConfigData, get_config, set_config
from ._repository import FakeEnvironment, MappingSource


@contextmanager
def override_config(
    *,
    values: Mapping[str, str] | None = None,
    env: Mapping[str, str] | None = None,
) -> Iterator[ConfigData]:
    """Temporarily replace the module-level ``ConfigData`` with in-memory fakes.

    Usage::

        with override_config(values={"Port": "${PORT}"}, env={"PORT": "9000"}) as cfg:
            assert default_config().get_int("Port") == 9000
            cfg.source.set("Extra", "42")  # mutate inside context
    """
    previous = get_config()
    fake = ConfigData(MappingSource(values), environment=FakeEnvironment(env))
    set_config(fake)
    try:
        yield fake
    finally:
        set_config(previous)
