"""
Cross-language expander.

Best-effort English <-> Japanese lookup over the static lexicon.
Terms without an entry are skipped, never guessed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterable, Optional

from app.data.synonyms import ENGLISH_TO_JAPANESE, JAPANESE_SYNONYMS, SynonymTable

logger = logging.getLogger(__name__)


class CrossLanguageExpander:
    def __init__(
        self,
        lexicon: Optional[Mapping[str, str]] = None,
        synonyms: Optional[SynonymTable] = None,
    ) -> None:
        self.lexicon = lexicon if lexicon is not None else ENGLISH_TO_JAPANESE
        self.synonyms = synonyms if synonyms is not None else JAPANESE_SYNONYMS

        # First English key wins when several map to the same Japanese term
        inverse: dict[str, str] = {}
        for english, japanese in self.lexicon.items():
            inverse.setdefault(japanese, english)
        self._inverse = MappingProxyType(inverse)

    def expand_to_japanese(self, english_terms: Iterable[str]) -> list[str]:
        out: list[str] = []
        seen: set[str] = set()
        for term in english_terms or []:
            if not isinstance(term, str):
                continue
            mapped = self.lexicon.get(term.strip().lower())
            if mapped and mapped not in seen:
                out.append(mapped)
                seen.add(mapped)
        return out

    def expand_to_english(self, japanese_terms: Iterable[str]) -> list[str]:
        """Reverse lookup, also trying each term's script variant."""
        out: list[str] = []
        seen: set[str] = set()
        for term in japanese_terms or []:
            if not isinstance(term, str):
                continue
            term = term.strip()
            mapped = self._inverse.get(term)
            if mapped is None:
                counterpart = self.synonyms.counterpart(term)
                if counterpart is not None:
                    mapped = self._inverse.get(counterpart)
            if mapped and mapped not in seen:
                out.append(mapped)
                seen.add(mapped)
        return out


cross_language_expander = CrossLanguageExpander()
