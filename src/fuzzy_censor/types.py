"""Core types — policies and shared constants."""

from __future__ import annotations
import re
from dataclasses import dataclass, field

# Returned whenever a value is too short to be partially shown
MASK = "*****"

VALID_PHONE_PATTERN = r"\(?\d{3}\)?-? *\d{3}-? *-?\d{3}"


@dataclass(frozen=True, slots=True)
class CensorshipPolicy:
    """How much of a string stays visible when it is censored."""
    max_visible_prefix: int = 4
    min_visible_prefix: int = 2   # only used by censor_text(allow_short=True)

    def __post_init__(self) -> None:
        if not isinstance(self.max_visible_prefix, int) or not isinstance(self.min_visible_prefix, int):
            raise ValueError("visible prefix bounds must be integers")
        if not 0 <= self.min_visible_prefix < self.max_visible_prefix:
            raise ValueError(
                f"expected 0 <= min_visible_prefix < max_visible_prefix, "
                f"got {self.min_visible_prefix} and {self.max_visible_prefix}"
            )


@dataclass(frozen=True, slots=True)
class PhoneMatchPolicy:
    """Suffix window and accepted shape for phone numbers."""
    suffix_digits: int = 7
    pattern: re.Pattern = field(default=re.compile(VALID_PHONE_PATTERN))

    def __post_init__(self) -> None:
        if not isinstance(self.suffix_digits, int) or self.suffix_digits <= 0:
            raise ValueError(f"suffix_digits must be a positive integer, got {self.suffix_digits!r}")
        if isinstance(self.pattern, str):
            try:
                object.__setattr__(self, "pattern", re.compile(self.pattern))
            except re.error as e:
                raise ValueError(f"invalid phone pattern {self.pattern!r}: {e}") from e
        elif not isinstance(self.pattern, re.Pattern):
            raise ValueError(f"pattern must be a regex string, got {type(self.pattern).__name__}")


DEFAULT_CENSORSHIP = CensorshipPolicy()
DEFAULT_PHONE_POLICY = PhoneMatchPolicy()
