"""Application – query building, request execution and the search core."""
