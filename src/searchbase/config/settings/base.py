"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass
class Settings:
    """Base class for settings read from ``<_prefix>_<FIELD>`` variables.

    Subclasses are dataclasses; ``_validate`` runs after construction and
    raises a :class:`~searchbase.config.validation.ConfigError` subclass.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


__all__ = ["Settings"]
