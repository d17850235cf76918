"""Edit distance and similarity scoring.

Levenshtein distance: the minimum number of single-character insertions,
deletions or substitutions that turn one word into the other.

Note the compatibility edge rules in edit_distance(): an empty side
yields 0 and equal inputs yield their length.  similarity() short-circuits
both cases itself, so its scores are unaffected.
"""

from __future__ import annotations
from typing import Iterable

from .transliteration import transliterate


def edit_distance(source: str | None, target: str | None) -> int:
    """Number of edits needed to transform source into target."""
    if source is None or target is None:
        return 0
    if not source or not target:
        return 0
    if source == target:
        return len(source)

    rows = len(source)
    cols = len(target)

    distance = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows + 1):
        distance[i][0] = i
    for j in range(cols + 1):
        distance[0][j] = j

    for i in range(1, rows + 1):
        for j in range(1, cols + 1):
            cost = 0 if source[i - 1] == target[j - 1] else 1
            distance[i][j] = min(
                distance[i - 1][j] + 1,         # deletion
                distance[i][j - 1] + 1,         # insertion
                distance[i - 1][j - 1] + cost,  # substitution
            )

    return distance[rows][cols]


def similarity(source: str | None, target: str | None) -> float:
    """Similarity ratio in [0.0, 1.0], 1.0 meaning identical."""
    if source is None or target is None:
        return 0.0
    if not source or not target:
        return 0.0
    if source == target:
        return 1.0

    return 1.0 - edit_distance(source, target) / max(len(source), len(target))


def rank_candidates(
    query: str,
    candidates: Iterable[str],
    *,
    threshold: float = 0.0,
    limit: int | None = None,
    fold_diacritics: bool = False,
) -> list[tuple[str, float]]:
    """Score every candidate against query, best first.

    Candidates scoring below threshold are dropped.  Ties keep their
    input order.  With fold_diacritics both sides are transliterated
    before scoring; the returned candidates are the originals.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    needle = transliterate(query) if fold_diacritics else query
    scored: list[tuple[str, float]] = []
    for candidate in candidates:
        hay = transliterate(candidate) if fold_diacritics else candidate
        score = similarity(needle, hay)
        if score >= threshold:
            scored.append((candidate, score))

    scored.sort(key=lambda pair: -pair[1])
    if limit is not None:
        scored = scored[:limit]
    return scored


def best_match(
    query: str,
    candidates: Iterable[str],
    *,
    threshold: float = 0.0,
    fold_diacritics: bool = False,
) -> tuple[str, float] | None:
    """Highest-scoring candidate, or None when nothing clears threshold."""
    ranked = rank_candidates(
        query, candidates, threshold=threshold, limit=1, fold_diacritics=fold_diacritics,
    )
    return ranked[0] if ranked else None
