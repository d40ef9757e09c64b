"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError        (application.py)
    │   ├── ValueChangeRejected
    │   └── ConfigError         (searchbase.config.validation)
    │       ├── MissingRequiredSettingError
    │       └── InvalidSettingValueError
    └── InfrastructureError     (infrastructure.py)
        ├── ExternalServiceError
        │   └── SearchRequestError
        │       └── TransformHookError
        └── VoiceSessionError
"""

from searchbase.kernel.errors.application import ApplicationError, ValueChangeRejected
from searchbase.kernel.errors.base import BaseError
from searchbase.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    SearchRequestError,
    TransformHookError,
    VoiceSessionError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ExternalServiceError",
    "InfrastructureError",
    "SearchRequestError",
    "TransformHookError",
    "ValueChangeRejected",
    "VoiceSessionError",
]
