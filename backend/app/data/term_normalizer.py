"""
Bilingual ingredient term normalizer.

Turns raw user or detector input into an IngredientTermSet:
English terms are lowercased and collapsed to a canonical spelling,
Japanese terms are kept verbatim and closed over the script-variant table.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Iterable, Optional, Union

from app.data.synonyms import ENGLISH_COLLAPSE, JAPANESE_SYNONYMS, SynonymTable
from app.schemas.recipes import IngredientTermSet

logger = logging.getLogger(__name__)

# ASCII comma and the full-width Japanese comma
TERM_DELIMITERS = re.compile(r"[,、]")

# Kana (incl. halfwidth katakana), CJK ideographs and the 々 iteration mark
JAPANESE_CHARS = re.compile(
    r"[\u3005\u3040-\u309f\u30a0-\u30ff\u31f0-\u31ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\uff66-\uff9f]"
)


def is_japanese(term: str) -> bool:
    return bool(JAPANESE_CHARS.search(term or ""))


def split_terms(raw: Union[str, Iterable[str], None]) -> list[str]:
    """Split on `,`/`、`, trim, drop empties. Input order is kept."""
    if raw is None:
        return []
    chunks = [raw] if isinstance(raw, str) else list(raw)
    parts: list[str] = []
    for chunk in chunks:
        if not isinstance(chunk, str):
            continue
        for part in TERM_DELIMITERS.split(chunk):
            part = part.strip()
            if part:
                parts.append(part)
    return parts


def _append_unique(target: list[str], seen: set[str], term: str) -> None:
    if term and term not in seen:
        target.append(term)
        seen.add(term)


class TermNormalizer:
    """Canonicalizes ingredient terms in English and Japanese."""

    def __init__(
        self,
        synonyms: Optional[SynonymTable] = None,
        english_collapse: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.synonyms = synonyms if synonyms is not None else JAPANESE_SYNONYMS
        self.english_collapse = english_collapse if english_collapse is not None else ENGLISH_COLLAPSE

    def normalize(self, raw_terms: Union[str, Iterable[str], None]) -> IngredientTermSet:
        raw = split_terms(raw_terms)
        english: list[str] = []
        japanese: list[str] = []
        seen_en: set[str] = set()
        seen_jp: set[str] = set()

        for term in raw:
            if is_japanese(term):
                for variant in self.with_variants(term):
                    _append_unique(japanese, seen_jp, variant)
            else:
                _append_unique(english, seen_en, self.normalize_english_term(term))

        return IngredientTermSet(english=english, japanese=japanese, raw_terms=raw)

    def normalize_english_term(self, term: str) -> str:
        lowered = (term or "").strip().lower()
        return self.english_collapse.get(lowered, lowered)

    def normalize_english(self, terms: Iterable[str]) -> list[str]:
        """Lowercase + collapse a list of English terms, deduplicated in order."""
        out: list[str] = []
        seen: set[str] = set()
        for term in terms or []:
            if not isinstance(term, str):
                continue
            _append_unique(out, seen, self.normalize_english_term(term))
        return out

    def with_variants(self, term: str) -> list[str]:
        """The term followed by its script variant, when one is known."""
        counterpart = self.synonyms.counterpart(term)
        if counterpart is None:
            return [term]
        return [term, counterpart]

    def close_japanese(self, terms: Iterable[str]) -> list[str]:
        """Deduplicate Japanese terms and add every known script variant."""
        out: list[str] = []
        seen: set[str] = set()
        for term in terms or []:
            if not isinstance(term, str):
                continue
            for variant in self.with_variants(term.strip()):
                _append_unique(out, seen, variant)
        return out


term_normalizer = TermNormalizer()
