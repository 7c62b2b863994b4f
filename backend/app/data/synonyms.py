"""
Static ingredient vocabularies.

Three read-only tables, built once at import:
- JAPANESE_SYNONYMS: katakana <-> kanji script variants (symmetric)
- ENGLISH_COLLAPSE: English variant -> canonical English term
- ENGLISH_TO_JAPANESE: canonical English term -> one Japanese term

Matching is exact on all three. No fuzzy lookups.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

# (katakana/common form, kanji form)
JAPANESE_SYNONYM_PAIRS: tuple[tuple[str, str], ...] = (
    # === VEGETABLES & FRUITS ===
    ("トマト", "蕃茄"),
    ("ジャガイモ", "馬鈴薯"),
    ("ニンジン", "人参"),
    ("タマネギ", "玉葱"),
    ("ニンニク", "大蒜"),
    ("ジンジャー", "生姜"),
    ("カリフラワー", "花椰菜"),
    ("エンドウ豆", "豌豆"),
    ("オクラ", "秋葵"),
    ("ナス", "茄子"),
    ("ピーマン", "甘椒"),
    ("ほうれん草", "菠薐草"),

    # === PROTEINS ===
    ("丸鶏", "鶏肉"),

    # === SPICES & SEASONINGS ===
    ("スパイス", "香辛料"),
    ("サフラン", "番紅花"),
    ("ミント", "薄荷"),
    ("カルダモン", "小豆蒄"),
    ("ターメリック", "鬱金"),
    ("クミン", "孜然"),
    ("コリアンダー", "香菜"),
    ("コショウ", "胡椒"),

    # === GRAINS & LEGUMES ===
    ("レンズ豆", "扁豆"),
    ("黒レンズ豆", "黒扁豆"),
    ("キドニービーンズ", "インゲン豆"),

    # === OTHER ===
    ("イースト", "酵母"),
    ("オイル", "油"),
    ("マスタードオイル", "芥子油"),
    ("ココナッツオイル", "椰子油"),
    ("ココナッツミルク", "椰子乳"),
    ("レモン", "檸檬"),
    ("レモン汁", "檸檬汁"),
    ("粉ミルク", "粉乳"),
    ("ローズウォーター", "薔薇水"),
    ("パパイヤペースト", "木瓜ペースト"),
    ("カシューナッツ", "腰果"),
    ("レーズン", "干し葡萄"),
    ("ミックス野菜", "混合野菜"),
    ("フェヌグリークの種", "胡芦巴の種"),
)

# Detector and user spellings that mean the same ingredient
ENGLISH_COLLAPSE_ENTRIES: dict[str, str] = {
    "whole chicken": "chicken",
    "chicken (whole)": "chicken",
    "capsicum": "bell pepper",
    "bell peppers": "bell pepper",
    "aubergine": "eggplant",
    "courgette": "zucchini",
    "scallion": "green onion",
    "scallions": "green onion",
    "spring onion": "green onion",
    "garbanzo bean": "chickpea",
    "garbanzo beans": "chickpea",
    "chickpeas": "chickpea",
}

ENGLISH_TO_JAPANESE_ENTRIES: dict[str, str] = {
    "rice": "米",
    "chicken": "鶏肉",
    "onion": "玉葱",
    "tomato": "トマト",
    "garlic": "ニンニク",
    "ginger": "生姜",
    "potato": "馬鈴薯",
    "cauliflower": "花椰菜",
    "bell pepper": "ピーマン",
    "pepper": "胡椒",
    "coriander": "香菜",
    "cilantro": "香菜",
    "yogurt": "ヨーグルト",
    "cream": "クリーム",
    "butter": "バター",
    "mint": "薄荷",
    "cardamom": "小豆蒄",
    "saffron": "番紅花",
    "cumin": "孜然",
    "turmeric": "鬱金",
    "lentil": "扁豆",
    "lentils": "扁豆",
    "carrot": "ニンジン",
    "spinach": "ほうれん草",
    "eggplant": "ナス",
    "okra": "オクラ",
    "pea": "エンドウ豆",
    "peas": "エンドウ豆",
    "lemon": "レモン",
    "cashew": "カシューナッツ",
    "raisin": "レーズン",
    "yeast": "イースト",
    "kidney beans": "キドニービーンズ",
    "coconut milk": "ココナッツミルク",
    "spices": "スパイス",
    "egg": "卵",
    "milk": "牛乳",
}


class SynonymTable(Mapping):
    """
    Symmetric, read-only term -> counterpart mapping.

    Every pair (a, b) is stored both ways. A term may belong to one pair only.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]]) -> None:
        table: dict[str, str] = {}
        for left, right in pairs:
            for term, counterpart in ((left, right), (right, left)):
                existing = table.get(term)
                if existing is not None and existing != counterpart:
                    raise ValueError(
                        f"Synonym '{term}' already paired with '{existing}', cannot pair with '{counterpart}'"
                    )
                table[term] = counterpart
        self._table = MappingProxyType(table)

    def __getitem__(self, term: str) -> str:
        return self._table[term]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def counterpart(self, term: str) -> Optional[str]:
        return self._table.get(term)

    def pairs(self) -> list[tuple[str, str]]:
        """Each pair once, in table order."""
        seen: set[str] = set()
        out: list[tuple[str, str]] = []
        for term, counterpart in self._table.items():
            if term in seen:
                continue
            seen.update((term, counterpart))
            out.append((term, counterpart))
        return out


JAPANESE_SYNONYMS = SynonymTable(JAPANESE_SYNONYM_PAIRS)
ENGLISH_COLLAPSE: Mapping[str, str] = MappingProxyType(dict(ENGLISH_COLLAPSE_ENTRIES))
ENGLISH_TO_JAPANESE: Mapping[str, str] = MappingProxyType(dict(ENGLISH_TO_JAPANESE_ENTRIES))

logger.debug(
    "Vocabularies loaded: %d synonym pairs, %d collapse rules, %d lexicon entries",
    len(JAPANESE_SYNONYMS.pairs()),
    len(ENGLISH_COLLAPSE),
    len(ENGLISH_TO_JAPANESE),
)
