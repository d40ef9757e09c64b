"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, TypeVar

from dotenv import load_dotenv

from searchbase.config.settings.base import Settings
from searchbase.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)


def _is_required(field: dataclasses.Field) -> bool:  # type: ignore[type-arg]
    return (
        field.default is dataclasses.MISSING
        and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
    )


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source.

    :meth:`values` returns only the fields the source actually provides, so
    several sources can be merged before the dataclass is built.
    """

    @abc.abstractmethod
    def values(self, settings_class: type[T]) -> dict[str, Any]: ...

    def source_key(self, settings_class: type[T], field_name: str) -> str:
        """Name of *field_name* in this source, used in error messages."""
        return field_name

    def load(self, settings_class: type[T]) -> T:
        """Build *settings_class* from this source alone."""
        kwargs = self.values(settings_class)
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            if field.name not in kwargs and _is_required(field):
                raise MissingRequiredSettingError(self.source_key(settings_class, field.name))
        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}") from exc


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables (``<PREFIX>_<FIELD>``)."""

    def source_key(self, settings_class: type[T], field_name: str) -> str:
        prefix = getattr(settings_class, "_prefix", "").upper()
        return f"{prefix}_{field_name}".upper().lstrip("_")

    def values(self, settings_class: type[T]) -> dict[str, Any]:
        found: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = self.source_key(settings_class, field.name)
            raw = os.environ.get(env_key)
            if raw is None:
                continue
            try:
                found[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc
        return found

    def _coerce(self, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        origin = getattr(type_hint, "__origin__", None)
        if type_hint is bool or type_hint == "bool":
            return value.lower() in ("1", "true", "yes", "on")
        if type_hint is int or type_hint == "int":
            return int(value)
        if type_hint is float or type_hint == "float":
            return float(value)
        if origin is list or (isinstance(type_hint, str) and type_hint.startswith("list")):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


class DotenvSettingsLoader(EnvSettingsLoader):
    """Load a ``.env`` file into the environment, then read it like ``EnvSettingsLoader``."""

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def values(self, settings_class: type[T]) -> dict[str, Any]:
        load_dotenv(self._env_file, override=self._override)
        return super().values(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
