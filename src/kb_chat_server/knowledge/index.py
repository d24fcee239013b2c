"""
Fuzzy Corpus Index

This module implements the approximate-match index built over the flattened
corpus. Each entry is searchable by its question text and by every keyword
tag; an entry's similarity is the best similarity of any of its fields.

Key Properties
--------------
- Built once from an ordered entry sequence; no incremental updates
- Field strings are normalized once at build time
- Similarity scores come from RapidFuzz WRatio (0-100)
- Distances are reported in [0, 1] (0 = identical, 1 = unrelated)
- Candidates farther than the configured threshold are never returned
- Read-only after construction, so safe to share across threads
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process
from rapidfuzz.utils import default_process

from .models import CorpusEntry
from ..core.errors import CorpusIndexError

logger = logging.getLogger("kb.index")


class FuzzyIndex:
    """
    Approximate string index over corpus entries.
    """

    def __init__(
        self,
        entries: Sequence[CorpusEntry],
        threshold: float = 0.4,
    ) -> None:
        """
        Build the index.

        Parameters
        ----------
        entries : Sequence[CorpusEntry]
            Flattened corpus in stored order.

        threshold : float
            Maximum distance (0-1) of a candidate returned by search().

        Raises
        ------
        CorpusIndexError
            If the threshold is out of range or an entry cannot be indexed.
        """
        if not 0.0 <= threshold <= 1.0:
            raise CorpusIndexError(
                f"Fuzzy threshold must be within [0, 1], got {threshold}."
            )

        self._entries: Tuple[CorpusEntry, ...] = tuple(entries)
        self._threshold = threshold

        # Parallel lists: normalized field text and owning entry position
        self._choices: List[str] = []
        self._owners: List[int] = []

        self._build()

    # ------------------------------------------------------------------
    # Internal Helpers
    # ------------------------------------------------------------------

    def _build(self) -> None:
        for pos, entry in enumerate(self._entries):
            if not isinstance(entry, CorpusEntry):
                raise CorpusIndexError(
                    f"Unexpected corpus item at position {pos}: {type(entry).__name__}"
                )

            for text in (entry.question, *entry.keywords):
                try:
                    normalized = default_process(text)
                except Exception as exc:
                    raise CorpusIndexError(
                        f"Failed to normalize field of entry {pos}: {type(exc).__name__}"
                    ) from exc

                if not normalized:
                    continue

                self._choices.append(normalized)
                self._owners.append(pos)

        logger.info(
            "Fuzzy index built: %d entries, %d searchable fields",
            len(self._entries),
            len(self._choices),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def threshold(self) -> float:
        return self._threshold

    def __len__(self) -> int:
        return len(self._entries)

    def search(
        self,
        query: str,
        limit: Optional[int] = None,
    ) -> List[Tuple[CorpusEntry, float]]:
        """
        Search the index for entries similar to the query.

        Returns (entry, distance) tuples ordered by ascending distance. Equal
        distances keep corpus order. Only candidates with
        distance <= threshold are included.
        """
        normalized = default_process(query)
        if not normalized or not self._choices:
            return []

        cutoff = (1.0 - self._threshold) * 100.0

        hits = process.extract(
            normalized,
            self._choices,
            scorer=fuzz.WRatio,
            limit=None,
            score_cutoff=cutoff,
        )

        best: Dict[int, float] = {}
        for _, score, choice_idx in hits:
            owner = self._owners[choice_idx]
            if score > best.get(owner, -1.0):
                best[owner] = score

        ranked = sorted(best.items(), key=lambda item: (-item[1], item[0]))

        results: List[Tuple[CorpusEntry, float]] = []
        for pos, score in ranked:
            distance = min(1.0, max(0.0, 1.0 - score / 100.0))
            results.append((self._entries[pos], distance))

        if limit is not None:
            results = results[:limit]

        return results
