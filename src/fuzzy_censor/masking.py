"""Text censoring — keep a short visible prefix, mask the rest.

    censor_text("1234567890")               -> "1234******"
    censor_text("1234567890", spaced=True)  -> "1234* ******"
    censor_text("abc")                      -> "*****"
"""

from __future__ import annotations

from .types import CensorshipPolicy, DEFAULT_CENSORSHIP, MASK


def mask_tail(text: str, visible: int, *, spaced: bool = False) -> str:
    """Keep text[:visible] and replace every later character with '*'."""
    removed = len(text) - visible
    filler = ("* " if spaced else "") + "*" * removed
    return text[:visible] + filler


def censor_text(
    text: str | None,
    *,
    spaced: bool = False,
    policy: CensorshipPolicy = DEFAULT_CENSORSHIP,
    allow_short: bool = False,
) -> str:
    """Censor a string according to the given policy.

    Strings shorter than policy.max_visible_prefix are never partially
    shown and come back as the fixed MASK.  With allow_short, strings of
    at least policy.min_visible_prefix characters keep that shorter
    prefix instead.
    """
    if text is None:
        return MASK

    if len(text) >= policy.max_visible_prefix:
        visible = policy.max_visible_prefix
    elif allow_short and len(text) >= policy.min_visible_prefix:
        visible = policy.min_visible_prefix
    else:
        return MASK

    return mask_tail(text, visible, spaced=spaced)


def remove_trailing(text: str | None, count: int = 2) -> str | None:
    """Drop `count` trailing characters, e.g. a dangling ", " separator."""
    if text and text.strip() and len(text) >= count:
        return text[:len(text) - count]
    return text
