"""Config settings – SearchbaseSettings."""
import dataclasses
from typing import ClassVar

from searchbase.config.settings.base import Settings
from searchbase.config.validation import InvalidSettingValueError, MissingRequiredSettingError


@dataclasses.dataclass
class SearchbaseSettings(Settings):
    """Connection and query defaults read from ``SEARCHBASE_*`` variables.

    ``SEARCHBASE_DATA_FIELD`` is a comma separated list; boosted fields use
    the engine syntax directly (``title^3``).
    """

    _prefix: ClassVar[str] = "SEARCHBASE"

    index: str
    url: str
    data_field: list[str] = dataclasses.field(default_factory=list)
    credentials: str = ""
    query_format: str = "or"
    fuzziness: str = "0"
    search_operators: bool = False
    size: int = 10
    nested_field: str = ""
    timeout: float = 10.0

    def _validate(self) -> None:
        for name in ("index", "url", "data_field"):
            if not getattr(self, name):
                raise MissingRequiredSettingError(name)
        if self.query_format not in ("or", "and"):
            raise InvalidSettingValueError("query_format", self.query_format, "expected 'or' or 'and'")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")

    @property
    def fuzziness_value(self) -> int | str:
        """``"2"`` becomes ``2``; ``"AUTO"`` stays a string."""
        fuzziness = str(self.fuzziness)
        return int(fuzziness) if fuzziness.isdigit() else fuzziness


__all__ = ["SearchbaseSettings"]
