"""Key/value parameter sources the connection parameters are read from."""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from .common.logging import get_logger
from .common.utils import sanitize_log_data

logger = get_logger(__name__)


@runtime_checkable
class ParameterSource(Protocol):
    """Read-only view over the gateway's settings store."""

    def get(self, key: str) -> str | None:
        """Return the value for key, or None if it is not set."""
        ...

    def get_int(self, key: str) -> int:
        """Return the value for key as an integer; unset or garbage is 0."""
        ...


def parse_int(value: str | None) -> int:
    """Parse the leading integer of value the way the settings store does.

    Leading whitespace and a sign are accepted, trailing garbage is ignored
    and anything unparsable yields 0.
    """
    if value is None:
        return 0
    text = value.strip()
    end = 0
    if text[:1] in ("-", "+"):
        end = 1
    while end < len(text) and text[end].isdigit():
        end += 1
    digits = text[:end]
    if not digits or digits in ("-", "+"):
        return 0
    return int(digits)


class MappingParameterSource:
    """ParameterSource backed by a plain mapping."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values: dict[str, str] = dict(values or {})

    @classmethod
    def from_dump(cls, text: str) -> "MappingParameterSource":
        """Build a source from ``key=value`` lines (e.g. a settings dump).

        Blank lines and lines without ``=`` are skipped; the value keeps
        everything after the first ``=``.
        """
        values: dict[str, str] = {}
        for line in text.splitlines():
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key:
                values[key] = value
        logger.debug("Parameters loaded from dump", params=sanitize_log_data(values))
        return cls(values)

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def get_int(self, key: str) -> int:
        return parse_int(self._values.get(key))

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def unset(self, key: str) -> None:
        self._values.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._values
