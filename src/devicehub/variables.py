"""Live values referenced by device records.

A device record never stores the value it controls, only an integer
reference (e.g. ``OnOffID``) into a variable source. Handlers resolve the
reference every time they read or write state.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class VariableNotFoundError(KeyError):
    """Raised when a record references a variable that does not exist."""


class VariableSource(ABC):
    """Read/write access to live values by reference."""

    @abstractmethod
    def exists(self, ref: int) -> bool:
        """Return True if the reference resolves to a variable."""
        pass

    @abstractmethod
    def get(self, ref: int) -> Any:
        """Return the current value.

        Raises:
            VariableNotFoundError: If the reference does not resolve
        """
        pass

    @abstractmethod
    def set(self, ref: int, value: Any) -> None:
        """Write a new value.

        Raises:
            VariableNotFoundError: If the reference does not resolve
        """
        pass


class InMemoryVariableSource(VariableSource):
    """Variable source backed by a plain dict."""

    def __init__(self, values: Optional[dict[int, Any]] = None):
        self._values: dict[int, Any] = dict(values or {})
        self._next_ref = max(self._values, default=0) + 1

    def create(self, value: Any) -> int:
        """Create a new variable holding ``value`` and return its reference."""
        ref = self._next_ref
        self._next_ref += 1
        self._values[ref] = value
        return ref

    def delete(self, ref: int) -> None:
        self._values.pop(ref, None)

    def exists(self, ref: int) -> bool:
        return _normalize_ref(ref) in self._values

    def get(self, ref: int) -> Any:
        key = _normalize_ref(ref)
        if key not in self._values:
            raise VariableNotFoundError(ref)
        return self._values[key]

    def set(self, ref: int, value: Any) -> None:
        key = _normalize_ref(ref)
        if key not in self._values:
            raise VariableNotFoundError(ref)
        self._values[key] = value


class JsonFileVariableSource(InMemoryVariableSource):
    """Variable source persisted to a JSON file so values survive restarts."""

    def __init__(self, state_file: Path):
        self.state_file = state_file
        super().__init__(self._load())

    def _load(self) -> dict[int, Any]:
        if self.state_file.exists():
            try:
                with open(self.state_file, "r") as f:
                    raw = json.load(f)
                logger.info(f"Loaded variables from {self.state_file}")
                return {int(ref): value for ref, value in raw.items()}
            except (json.JSONDecodeError, IOError, ValueError) as e:
                logger.warning(f"Could not load variables file: {e}. Starting empty.")
        return {}

    def _save(self) -> None:
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.state_file, "w") as f:
                json.dump({str(ref): value for ref, value in self._values.items()}, f, indent=2)
            logger.debug(f"Variables saved to {self.state_file}")
        except IOError as e:
            logger.error(f"Failed to save variables: {e}")

    def create(self, value: Any) -> int:
        ref = super().create(value)
        self._save()
        return ref

    def delete(self, ref: int) -> None:
        super().delete(ref)
        self._save()

    def set(self, ref: int, value: Any) -> None:
        super().set(ref, value)
        self._save()


def _normalize_ref(ref: Any) -> Optional[int]:
    # Records are JSON, so references may arrive as strings.
    try:
        return int(ref)
    except (TypeError, ValueError):
        return None
