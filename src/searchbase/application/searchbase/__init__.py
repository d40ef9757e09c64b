"""Searchbase – headless search component core."""
from searchbase.application.searchbase.callbacks import CALLBACK_CHANNELS, ChangeCallbacks
from searchbase.application.searchbase.core import Searchbase
from searchbase.application.searchbase.input import get_control_value

__all__ = ["CALLBACK_CHANNELS", "ChangeCallbacks", "Searchbase", "get_control_value"]
