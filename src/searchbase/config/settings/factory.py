"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from searchbase.config.settings.base import Settings
from searchbase.config.settings.loaders import SettingsLoader
from searchbase.config.validation.errors import (
    ConfigError,
    MissingRequiredSettingError,
)
from searchbase.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

_log = get_logger(__name__)


class SettingsFactory:
    """Merge the values of several loaders, apply overrides, and construct
    a settings dataclass in one step.

    Each loader contributes only the fields its source provides; later
    loaders override earlier ones for overlapping fields.  *overrides* (if
    provided) take the highest priority.  The dataclass is built and
    validated once, after everything has been merged.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Parameters
        ----------
        settings_cls:
            The :class:`~searchbase.config.settings.base.Settings` subclass to
            construct.
        loaders:
            Ordered sequence of loaders.  Later loaders win on field conflicts.
        overrides:
            Explicit key-value pairs applied after all loaders.

        Raises
        ------
        MissingRequiredSettingError
            When a required field (no default) is absent after all sources
            have been merged.
        InvalidSettingValueError
            When a source holds a value that cannot be coerced, or the merged
            settings fail validation.
        ConfigError
            On any other construction failure.
        """
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            found = loader.values(settings_cls)
            _log.debug("searchbase.settings_loaded", loader=type(loader).__name__, fields=sorted(found))
            merged.update(found)

        if overrides:
            merged.update(overrides)

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name in merged:
                continue
            if (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
            ):
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
