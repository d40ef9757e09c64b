"""Observability – structured logging ports and helpers."""
from searchbase.observability.logging.protocol import Logger
from searchbase.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from searchbase.observability.logging.factory import JsonLoggerFactory
from searchbase.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "Logger",
    "SensitiveFieldsFilter",
    "get_logger",
]
