"""Application results – normalized search responses."""
from searchbase.application.results.result_set import ResultSet

__all__ = ["ResultSet"]
