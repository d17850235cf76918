"""fuzzy-censor — fuzzy string equality and partial masking for short text and phone numbers."""

from .distance import best_match, edit_distance, rank_candidates, similarity
from .masking import censor_text, remove_trailing
from .phone import censor_phone, is_valid_phone_number, same_phone_numbers
from .transliteration import CHARACTER_MAP, transliterate
from .toolkit import Toolkit, ToolkitConfig
from .config import create_toolkit, load_config, load_from_yaml
from .types import (
    CensorshipPolicy, PhoneMatchPolicy,
    DEFAULT_CENSORSHIP, DEFAULT_PHONE_POLICY, MASK,
)

__all__ = [
    "transliterate", "CHARACTER_MAP",
    "edit_distance", "similarity", "rank_candidates", "best_match",
    "censor_text", "remove_trailing",
    "is_valid_phone_number", "censor_phone", "same_phone_numbers",
    "Toolkit", "ToolkitConfig",
    "create_toolkit", "load_config", "load_from_yaml",
    "CensorshipPolicy", "PhoneMatchPolicy",
    "DEFAULT_CENSORSHIP", "DEFAULT_PHONE_POLICY", "MASK",
]
__version__ = "0.1.0"
