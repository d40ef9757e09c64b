"""Application pipeline – search request execution."""
from searchbase.application.pipeline.request import (
    SEARCH_ID_HEADER,
    SEARCH_QUERY_HEADER,
    RequestPipeline,
    SearchRequest,
)

__all__ = ["SEARCH_ID_HEADER", "SEARCH_QUERY_HEADER", "RequestPipeline", "SearchRequest"]
