"""Typed config groups using Pydantic BaseModel.

Subclass ``AppConfig`` and declare fields plus a ``Meta`` inner class naming
the INI section::

    class StorageConfig(AppConfig):
        class Meta:
            section = "TelemetryService:Storage"

        type: str = "documentDb"
        database: str
        connection_string: Secret[str]

    cfg = StorageConfig.load()
    cfg.database            # TelemetryService:Storage:database, placeholders resolved
    cfg.connection_string   # Secret instance, repr shows '***'
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ._reader import ConfigData, default_config


class AppConfig(BaseModel):
    """Base class for declarative, typed config groups."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    class Meta:
        section: str = ""

    @classmethod
    def load(cls, cfg: ConfigData | None = None) -> "AppConfig":
        """Read every field the source defines and return a validated instance.

        Values go through placeholder resolution before Pydantic coerces
        them. Fields the source does not define keep their declared default,
        or fail validation when they have none.
        """
        active = cfg or default_config()
        section = getattr(cls.Meta, "section", "")

        raw_data: dict[str, Any] = {}
        for field_name, field in cls.model_fields.items():
            name = field.alias or field_name
            key = f"{section}:{name}" if section else name
            if active.contains(key):
                raw_data[name] = active.get_string(key)

        return cls.model_validate(raw_data)
