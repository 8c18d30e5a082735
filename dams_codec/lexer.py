"""Tokenizer for DAMS symbolic streams.

The stream alphabet is ``0-9``, ``|`` and the Roman digits ``IVXLCDM``.
Anything outside it was passed through unchanged by the encoder and comes
back as a ``LITERAL`` token.
"""

import dataclasses
import enum
import re
from typing import List, Optional, Tuple

from .roman import to_roman
from .tables import (
    DIGIT_BY_CODE,
    DIGIT_RUN_MARKER,
    PUNCTUATION_BY_CODE,
    PUNCTUATION_MARKER,
    SEPARATOR,
)


class TokenKind(enum.Enum):
    LETTER = "letter"
    ACCENT = "accent"
    DIGIT_CODE = "digit_code"
    DIGIT_JOINER = "digit_joiner"
    GAP = "gap"
    PUNCTUATION = "punctuation"
    SEPARATOR = "separator"
    LITERAL = "literal"
    INVALID = "invalid"


@dataclasses.dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int
    nudal: Optional[int] = None
    upper: bool = False
    accent: int = 0
    char: Optional[str] = None


GRAMMAR_ALPHABET = frozenset("0123456789|IVXLCDM")

# Largest neighbour difference: letter class 9 against a non-letter (0)
MAX_GAP = 9
GAP_NUMERALS = frozenset(to_roman(n) for n in range(1, MAX_GAP + 1))

_MAX_GAP_NUMERAL = max(len(numeral) for numeral in GAP_NUMERALS)
_MAX_PUNCTUATION_NUMERAL = max(
    len(code) - len(PUNCTUATION_MARKER) for code in PUNCTUATION_BY_CODE
)

_LOWER_LETTER = re.compile(r"1\|([2-9])")
_UPPER_LETTER = re.compile(r"([2-9])\|11")
_LOWER_ACCENT = re.compile(r"0([2-5])")
_UPPER_ACCENT = re.compile(r"[2-5]")
_ROMAN_RUN = re.compile(r"[IVXLCDM]+")

_DIGIT_CODES = sorted(DIGIT_BY_CODE, key=len, reverse=True)


def _match_digit_code(code: str, pos: int) -> Optional[str]:
    for candidate in _DIGIT_CODES:
        if code.startswith(candidate, pos):
            return candidate
    return None


def _preceding_gap_value(tokens: List[Token]) -> int:
    """Gap a space before punctuation would carry: the value of the token before it."""
    if not tokens:
        return 0
    last = tokens[-1]
    if last.kind is TokenKind.ACCENT:
        last = tokens[-2]
    if last.kind is TokenKind.LETTER:
        return last.nudal
    if last.kind is TokenKind.DIGIT_CODE:
        return int(last.text[0])
    return 0


def _split_punctuation(run: str, expected_gap: int) -> Optional[Tuple[str, str, str]]:
    # Only cuts with a gap prefix and punctuation numeral of plausible length
    first_cut = max(0, len(run) - _MAX_PUNCTUATION_NUMERAL)
    last_cut = min(len(run) - 1, _MAX_GAP_NUMERAL)
    expected_prefix = to_roman(expected_gap)
    fallback = None
    for cut in range(first_cut, last_cut + 1):
        prefix, numeral = run[:cut], run[cut:]
        if prefix and prefix not in GAP_NUMERALS:
            continue
        char = PUNCTUATION_BY_CODE.get(numeral + PUNCTUATION_MARKER)
        if char is None:
            continue
        if prefix == expected_prefix:
            return prefix, numeral, char
        if fallback is None:
            fallback = prefix, numeral, char
    return fallback


def _lex_roman(code: str, start: int, run: str, tokens: List[Token]) -> int:
    end = start + len(run)
    if code.startswith(PUNCTUATION_MARKER, end):
        split = _split_punctuation(run, _preceding_gap_value(tokens))
        if split is not None:
            prefix, numeral, char = split
            if prefix:
                tokens.append(Token(TokenKind.GAP, prefix, start))
            tokens.append(
                Token(
                    TokenKind.PUNCTUATION,
                    numeral + PUNCTUATION_MARKER,
                    start + len(prefix),
                    char=char,
                )
            )
            return end + len(PUNCTUATION_MARKER)
    elif run == DIGIT_RUN_MARKER and _match_digit_code(code, end) is not None:
        tokens.append(Token(TokenKind.DIGIT_JOINER, run, start))
        return end
    tokens.append(Token(TokenKind.GAP, run, start))
    return end


def tokenize(code: str) -> List[Token]:
    """Split a symbolic stream into tokens.

    Total over any input: characters that fit no rule become ``INVALID``
    tokens, so the token texts always concatenate back to ``code``.
    """
    tokens: List[Token] = []
    pos = 0
    end = len(code)
    while pos < end:
        match = _LOWER_LETTER.match(code, pos)
        if match:
            tokens.append(
                Token(TokenKind.LETTER, match.group(), pos, nudal=int(match.group(1)))
            )
            pos = match.end()
            accent = _LOWER_ACCENT.match(code, pos)
            if accent:
                tokens.append(
                    Token(
                        TokenKind.ACCENT,
                        accent.group(),
                        pos,
                        accent=int(accent.group(1)),
                    )
                )
                pos = accent.end()
            continue

        match = _UPPER_LETTER.match(code, pos)
        if match:
            tokens.append(
                Token(
                    TokenKind.LETTER,
                    match.group(),
                    pos,
                    nudal=int(match.group(1)),
                    upper=True,
                )
            )
            pos = match.end()
            # An uppercase letter straight after another one is not an accent
            accent = _UPPER_ACCENT.match(code, pos)
            if accent and not _UPPER_LETTER.match(code, pos):
                tokens.append(
                    Token(TokenKind.ACCENT, accent.group(), pos, accent=int(accent.group()))
                )
                pos = accent.end()
            continue

        digit_code = _match_digit_code(code, pos)
        if digit_code is not None:
            tokens.append(
                Token(
                    TokenKind.DIGIT_CODE,
                    digit_code,
                    pos,
                    char=DIGIT_BY_CODE[digit_code],
                )
            )
            pos += len(digit_code)
            continue

        match = _ROMAN_RUN.match(code, pos)
        if match:
            pos = _lex_roman(code, pos, match.group(), tokens)
            continue

        char = code[pos]
        if char == SEPARATOR:
            tokens.append(Token(TokenKind.SEPARATOR, char, pos))
        elif char in GRAMMAR_ALPHABET:
            tokens.append(Token(TokenKind.INVALID, char, pos))
        else:
            tokens.append(Token(TokenKind.LITERAL, char, pos, char=char))
        pos += 1
    return tokens


__all__ = ["GAP_NUMERALS", "GRAMMAR_ALPHABET", "MAX_GAP", "Token", "TokenKind", "tokenize"]
