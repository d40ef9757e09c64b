"""Application query – query DSL construction."""
from searchbase.application.query.builder import (
    default_query,
    generate_query_options,
    normalize_fields,
    should_query,
)

__all__ = ["default_query", "generate_query_options", "normalize_fields", "should_query"]
