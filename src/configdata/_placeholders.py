"""Environment-variable placeholder resolution.

Two placeholder forms are recognised inside configuration values:

``${NAME}``
    Mandatory. Every mandatory name must be set in the environment or the
    whole value is rejected with ``UnresolvedPlaceholderError``.
``${?NAME}``
    Optional. Substituted when set; otherwise left verbatim and reported
    with a warning.

``NAME`` is an ASCII identifier. There is no escaping and no nesting, and
substituted text is never scanned again.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from ._repository import EnvironmentProvider, OsEnvironment
from ._types import PlaceholderToken, UnresolvedPlaceholderError

_IDENT = r"[a-zA-Z_][a-zA-Z0-9_]*"

_MANDATORY_RE = re.compile(r"\$\{(" + _IDENT + r")\}", re.ASCII)
_OPTIONAL_RE = re.compile(r"\$\{\?(" + _IDENT + r")\}", re.ASCII)
_ANY_RE = re.compile(r"\$\{(\??)(" + _IDENT + r")\}", re.ASCII)

_NOT_FOUND = "Environment variables not found"


def scan(raw: str, *, mandatory: bool) -> list[PlaceholderToken]:
    """Return every placeholder of one form in *raw*, in order."""
    pattern = _MANDATORY_RE if mandatory else _OPTIONAL_RE
    return [
        PlaceholderToken(name=m.group(1), mandatory=mandatory, span=m.span())
        for m in pattern.finditer(raw)
    ]


def _distinct_names(tokens: list[PlaceholderToken]) -> list[str]:
    return list(dict.fromkeys(token.name for token in tokens))


class PlaceholderResolver:
    """Substitutes environment values for placeholders in raw strings."""

    def __init__(
        self,
        environment: EnvironmentProvider | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.environment = environment or OsEnvironment()
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, raw: str | None) -> str | None:
        """Return *raw* with its placeholders substituted.

        Raises ``UnresolvedPlaceholderError`` if any ``${NAME}`` is unset.
        """
        if not raw:
            return raw

        env = self.environment.snapshot()
        self._check_mandatory(raw, env)
        self._check_optional(raw, env)
        return self._substitute(raw, env)

    # -- Passes -------------------------------------------------------------

    def _check_mandatory(self, raw: str, env: Mapping[str, str]) -> None:
        missing = [name for name in _distinct_names(scan(raw, mandatory=True)) if name not in env]
        if missing:
            vars_not_found = ", ".join(missing)
            self.logger.error(_NOT_FOUND, extra={"varsNotFound": vars_not_found})
            raise UnresolvedPlaceholderError(missing)

    def _check_optional(self, raw: str, env: Mapping[str, str]) -> None:
        missing = [name for name in _distinct_names(scan(raw, mandatory=False)) if name not in env]
        if missing:
            self.logger.warning(_NOT_FOUND, extra={"varsNotFound": ", ".join(missing)})

    @staticmethod
    def _substitute(raw: str, env: Mapping[str, str]) -> str:
        # Single pass over the original text: inserted values are never rescanned.
        def _replace(match: re.Match[str]) -> str:
            return env.get(match.group(2), match.group(0))

        return _ANY_RE.sub(_replace, raw)
