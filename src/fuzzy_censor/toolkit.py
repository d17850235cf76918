"""Toolkit — the main API, with policies bound once.

Usage:
    from fuzzy_censor import Toolkit, ToolkitConfig, CensorshipPolicy

    toolkit = Toolkit()          # stateless, thread-safe
    toolkit.censor_text("1234567890")        # "1234******"
    toolkit.same_phone_numbers("0038763111222", "063111222")  # True

    strict = Toolkit(ToolkitConfig(censorship=CensorshipPolicy(max_visible_prefix=6, min_visible_prefix=3)))
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence

from .distance import best_match, edit_distance, rank_candidates, similarity
from .masking import censor_text
from .phone import censor_phone, is_valid_phone_number, same_phone_numbers
from .transliteration import transliterate
from .types import (
    CensorshipPolicy,
    DEFAULT_CENSORSHIP,
    DEFAULT_PHONE_POLICY,
    PhoneMatchPolicy,
)


@dataclass(frozen=True)
class ToolkitConfig:
    """Configuration for the Toolkit."""
    censorship: CensorshipPolicy = DEFAULT_CENSORSHIP
    phone: PhoneMatchPolicy = DEFAULT_PHONE_POLICY
    spaced: bool = False                # default filler style for censor_text
    fold_diacritics: bool = False       # transliterate before scoring
    similarity_threshold: float = 0.8   # used by find_duplicates / best_match

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(
                f"similarity_threshold must be within [0.0, 1.0], got {self.similarity_threshold!r}"
            )


class Toolkit:
    """Fuzzy comparison and censoring with a fixed set of policies."""

    def __init__(self, config: ToolkitConfig | None = None) -> None:
        self.config = config or ToolkitConfig()

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def transliterate(self, text: str | None) -> str:
        return transliterate(text)

    def edit_distance(self, source: str | None, target: str | None) -> int:
        return edit_distance(*self._fold(source, target))

    def similarity(self, source: str | None, target: str | None) -> float:
        return similarity(*self._fold(source, target))

    def censor_text(self, text: str | None, spaced: bool | None = None) -> str:
        if spaced is None:
            spaced = self.config.spaced
        return censor_text(text, spaced=spaced, policy=self.config.censorship)

    def rank(
        self,
        query: str,
        candidates: Iterable[str],
        *,
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[tuple[str, float]]:
        """Candidates ranked by similarity; threshold defaults to 0.0."""
        return rank_candidates(
            query,
            candidates,
            threshold=0.0 if threshold is None else threshold,
            limit=limit,
            fold_diacritics=self.config.fold_diacritics,
        )

    def best_match(self, query: str, candidates: Iterable[str]) -> tuple[str, float] | None:
        """Best candidate at or above the configured similarity threshold."""
        return best_match(
            query,
            candidates,
            threshold=self.config.similarity_threshold,
            fold_diacritics=self.config.fold_diacritics,
        )

    def find_duplicates(self, values: Sequence[str]) -> list[tuple[int, int, float]]:
        """Index pairs (i, j), i < j, whose similarity clears the threshold."""
        folded = [transliterate(v) if self.config.fold_diacritics else v for v in values]
        pairs: list[tuple[int, int, float]] = []
        for i in range(len(folded)):
            for j in range(i + 1, len(folded)):
                score = similarity(folded[i], folded[j])
                if score >= self.config.similarity_threshold:
                    pairs.append((i, j, score))
        return pairs

    # ------------------------------------------------------------------
    # Phone numbers
    # ------------------------------------------------------------------

    def is_valid_phone_number(self, phone: str | None) -> bool:
        return is_valid_phone_number(phone, policy=self.config.phone)

    def censor_phone(self, phone: str | None) -> str:
        return censor_phone(phone, policy=self.config.phone)

    def same_phone_numbers(self, first: str | None, second: str | None) -> bool:
        return same_phone_numbers(first, second, policy=self.config.phone)

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def censor_fields(
        self,
        records: list[dict],
        fields: Iterable[str] = (),
        *,
        phone_fields: Iterable[str] = (),
    ) -> list[dict]:
        """Censor named string fields in a list of dicts.

        Returns new dicts.  Does NOT mutate the originals.  Missing keys
        and non-string values are left as they are.
        """
        text_keys = tuple(fields)
        phone_keys = tuple(phone_fields)
        out: list[dict] = []
        for record in records:
            updates: dict = {}
            for key in text_keys:
                value = record.get(key)
                if isinstance(value, str):
                    updates[key] = self.censor_text(value)
            for key in phone_keys:
                value = record.get(key)
                if isinstance(value, str):
                    updates[key] = self.censor_phone(value)
            out.append({**record, **updates} if updates else record)
        return out

    def _fold(self, source: str | None, target: str | None) -> tuple[str | None, str | None]:
        if not self.config.fold_diacritics:
            return source, target
        return (
            None if source is None else transliterate(source),
            None if target is None else transliterate(target),
        )
