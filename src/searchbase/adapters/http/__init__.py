"""HTTP adapter – async httpx client for the search engine."""
from searchbase.adapters.http.client import HttpxSearchClient

__all__ = ["HttpxSearchClient"]
