"""Constant lookup tables for the DAMS codec.

Every table is built once at import time and exposed read-only. Iteration
order is declaration order; the decoder relies on it to break ties.
"""

import dataclasses
from types import MappingProxyType
from typing import Dict, Mapping, Tuple


@dataclasses.dataclass(frozen=True)
class LetterClass:
    nudal: int
    letters: str

    @property
    def canonical(self) -> str:
        """Letter recovered by the decoder for this class."""
        return self.letters[0]


LETTER_CLASSES: Tuple[LetterClass, ...] = (
    LetterClass(2, "duyú"),
    LetterClass(3, "oqaóôöáâãà"),
    LetterClass(4, "bveéê"),
    LetterClass(5, "wmh"),
    LetterClass(6, "iztcíç"),
    LetterClass(7, "kpfg"),
    LetterClass(8, "lnr"),
    LetterClass(9, "xsj"),
)

LETTER_CLASS_BY_NUDAL: Mapping[int, LetterClass] = MappingProxyType(
    {group.nudal: group for group in LETTER_CLASSES}
)

# Keys are lowercase; callers look up ``char.lower()``.
STANDARD_TABLE: Mapping[str, int] = MappingProxyType(
    {letter: group.nudal for group in LETTER_CLASSES for letter in group.letters}
)

NUMBER_TABLE: Mapping[str, str] = MappingProxyType(
    {
        "0": "100",
        "1": "101",
        "2": "204",
        "3": "206",
        "4": "208",
        "5": "409",
        "6": "309",
        "7": "209",
        "8": "109",
        "9": "0909",
    }
)

SEPARATOR = "|"
DIGIT_RUN_MARKER = "I"
PUNCTUATION_MARKER = "|0"

_PUNCTUATION_NUMERALS: Tuple[Tuple[str, str], ...] = (
    (".", "X"),
    (",", "XV"),
    (";", "XI"),
    (":", "XII"),
    ("!", "XIII"),
    ("?", "XIV"),
    ("-", "XVI"),
    ("_", "XVII"),
    ("(", "XVIII"),
    (")", "XIX"),
    ("[", "XX"),
    ("]", "XXI"),
    ("{", "XXII"),
    ("}", "XXIII"),
    ("<", "XXIV"),
    (">", "XXV"),
    ("/", "XXVI"),
    ("\\", "XXVII"),
    ("|", "XXVIII"),
    ("@", "XXIX"),
    ("#", "XXX"),
    ("$", "XXXI"),
    ("%", "XXXII"),
    ("^", "XXXIII"),
    ("&", "XXXIV"),
    ("*", "XXXV"),
    ("+", "XXXVI"),
    ("=", "XXXVII"),
    ("~", "XXXVIII"),
    ("`", "XXXIX"),
    ('"', "XL"),
    ("'", "XLI"),
)

PUNCTUATION_TABLE: Mapping[str, str] = MappingProxyType(
    {char: numeral + PUNCTUATION_MARKER for char, numeral in _PUNCTUATION_NUMERALS}
)


def _invert_first(table: Mapping[str, str]) -> Dict[str, str]:
    # First key wins when two keys share a code
    inverted: Dict[str, str] = {}
    for key, code in table.items():
        inverted.setdefault(code, key)
    return inverted


DIGIT_BY_CODE: Mapping[str, str] = MappingProxyType(_invert_first(NUMBER_TABLE))
PUNCTUATION_BY_CODE: Mapping[str, str] = MappingProxyType(
    _invert_first(PUNCTUATION_TABLE)
)

# Lowercase keys; uppercase forms share the same accent digit.
ACCENT_TABLE: Mapping[str, int] = MappingProxyType(
    {
        "á": 4,
        "à": 5,
        "â": 3,
        "ã": 2,
        "é": 4,
        "è": 5,
        "ê": 3,
        "í": 2,
        "ì": 5,
        "î": 3,
        "ó": 5,
        "ò": 4,
        "ô": 3,
        "õ": 2,
        "ú": 5,
        "ù": 4,
        "û": 3,
        "ç": 2,
    }
)

ACCENTED_CHARACTERS = frozenset(
    "áàâãéèêíìîóòôõúùûç" + "áàâãéèêíìîóòôõúùûç".upper()
)


__all__ = [
    "ACCENTED_CHARACTERS",
    "ACCENT_TABLE",
    "DIGIT_BY_CODE",
    "DIGIT_RUN_MARKER",
    "LETTER_CLASSES",
    "LETTER_CLASS_BY_NUDAL",
    "LetterClass",
    "NUMBER_TABLE",
    "PUNCTUATION_BY_CODE",
    "PUNCTUATION_MARKER",
    "PUNCTUATION_TABLE",
    "SEPARATOR",
    "STANDARD_TABLE",
]
