"""Phone number shape check, censoring and suffix-window equality.

Two numbers are the same subscriber when their last N characters match,
so "0038763111222" and "063111222" compare equal for N = 7: the
country/landline prefix is ignored.
"""

from __future__ import annotations

from .masking import mask_tail
from .types import DEFAULT_PHONE_POLICY, MASK, PhoneMatchPolicy


def is_valid_phone_number(
    phone: str | None, *, policy: PhoneMatchPolicy = DEFAULT_PHONE_POLICY,
) -> bool:
    """Shape check against policy.pattern — not a full E.164 validator."""
    if not phone or not phone.strip():
        return False
    return policy.pattern.search(phone) is not None


def censor_phone(
    phone: str | None, *, policy: PhoneMatchPolicy = DEFAULT_PHONE_POLICY,
) -> str:
    """Show the first policy.suffix_digits characters, mask the rest."""
    if phone is None or len(phone) < policy.suffix_digits:
        return MASK
    return mask_tail(phone, policy.suffix_digits)


def same_phone_numbers(
    first: str | None,
    second: str | None,
    *,
    policy: PhoneMatchPolicy = DEFAULT_PHONE_POLICY,
) -> bool:
    """True when both trailing suffix_digits-character windows are equal."""
    if first is None or second is None:
        return False
    n = policy.suffix_digits
    return len(first) >= n and len(second) >= n and first[-n:] == second[-n:]
