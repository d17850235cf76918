"""Diacritic transliteration over a fixed table.

Only the letters below are folded; everything else (other accented
letters, Cyrillic, CJK, ...) is returned unchanged.
"""

from __future__ import annotations
from types import MappingProxyType

CHARACTER_MAP = MappingProxyType({
    "Č": "C",
    "č": "c",
    "Ć": "C",
    "ć": "c",
    "Š": "S",
    "š": "s",
    "Ž": "Z",
    "ž": "z",
    "Đ": "Dj",
    "đ": "dj",
})


def transliterate(text: str | None) -> str:
    """Replace mapped diacritics with their ASCII equivalents."""
    if not text:
        return ""
    return "".join(CHARACTER_MAP.get(ch, ch) for ch in text)
