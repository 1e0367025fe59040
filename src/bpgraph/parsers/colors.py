# -*- coding: utf-8 -*-
"""
Color vocabulary for the colored arrow notation.

Color words resolve to pin types through an ordered list of
(predicate, type) rules. The first matching rule wins; Russian
stems are checked before English words.
"""
from typing import Callable, List, Tuple

from ..core.pins import PinType


ColorRule = Tuple[Callable[[str], bool], PinType]


def _contains(*stems: str) -> Callable[[str], bool]:
    return lambda word: any(stem in word for stem in stems)


COLOR_RULES: List[ColorRule] = [
    (_contains("белый"), PinType.EXEC),
    (_contains("зелен", "зелён"), PinType.INTEGER),
    (_contains("желт", "жёлт"), PinType.FLOAT),
    (_contains("красн"), PinType.BOOLEAN),
    (_contains("синий"), PinType.VECTOR),
    (_contains("white"), PinType.EXEC),
    (_contains("green"), PinType.INTEGER),
    (_contains("yellow"), PinType.FLOAT),
    (_contains("red"), PinType.BOOLEAN),
    (_contains("blue"), PinType.VECTOR),
]

# English word written back by the generator
TYPE_COLOR_WORDS = {
    PinType.EXEC: "white",
    PinType.INTEGER: "green",
    PinType.FLOAT: "yellow",
    PinType.BOOLEAN: "red",
    PinType.VECTOR: "blue",
}


def color_to_type(color_word: str) -> PinType:
    """Resolve a color word (case-insensitive, substring match)."""
    word = color_word.strip().lower()
    for predicate, pin_type in COLOR_RULES:
        if predicate(word):
            return pin_type
    return PinType.WILDCARD


def type_to_color(pin_type: PinType) -> str:
    return TYPE_COLOR_WORDS.get(pin_type, "gray")
