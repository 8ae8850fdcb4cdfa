"""
Base sanitizer interface for all field sanitizers.

A sanitizer turns one untrusted raw value into a storage-ready value. It never
raises for bad input: unusable values become the empty/invalid marker and are
reported later by the validators.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseSanitizer(ABC):
    """
    Abstract base class for all sanitizers.

    Each sanitizer implements the normalization for one field kind or role
    (text, date, time, postcode, richtext).
    """

    @abstractmethod
    def sanitize(self, value: Any) -> str | None:
        """
        Normalize a raw value.

        Args:
            value: Raw submitted value (usually a string, possibly None)

        Returns:
            The sanitized value; None marks an empty or invalid date/time
        """
        pass

    @property
    @abstractmethod
    def sanitizer_type(self) -> str:
        """Return the sanitizer type identifier."""
        pass

    @staticmethod
    def is_blank(value: Any) -> bool:
        return value is None or (isinstance(value, str) and value == "")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
