"""
searchbase – headless search state and query engine.

Import path convention::

    from searchbase import Searchbase, ApplyOptions
    from searchbase.application.query import default_query
    from searchbase.kernel.errors import SearchRequestError
"""

from searchbase.application.results import ResultSet
from searchbase.application.searchbase import Searchbase
from searchbase.kernel.observable import StateChange
from searchbase.kernel.types import ApplyOptions, DataField, MicStatus, SortOption, StateOptions

__version__ = "0.1.0"
__all__ = [
    "ApplyOptions",
    "DataField",
    "MicStatus",
    "ResultSet",
    "Searchbase",
    "SortOption",
    "StateChange",
    "StateOptions",
    "__version__",
]
