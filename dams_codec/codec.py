import dataclasses
import enum
import json
import logging
from typing import List, Optional

from .lexer import TokenKind, tokenize
from .roman import to_roman
from .tables import (
    ACCENTED_CHARACTERS,
    ACCENT_TABLE,
    DIGIT_RUN_MARKER,
    LETTER_CLASS_BY_NUDAL,
    NUMBER_TABLE,
    PUNCTUATION_MARKER,
    PUNCTUATION_TABLE,
    SEPARATOR,
    STANDARD_TABLE,
)

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    def __init__(self, offset: int, chunk: str):
        super().__init__(f"Unrecognized chunk {chunk!r} at offset {offset}")
        self.offset = offset
        self.chunk = chunk


@dataclasses.dataclass
class CodecConfig:
    accent_aware: bool = False
    keep_literals: bool = False
    strict: bool = False
    version: str = "v1"

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "accent_aware": self.accent_aware,
            "keep_literals": self.keep_literals,
            "strict": self.strict,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CodecConfig":
        version = data.get("version", "v1")
        if version != "v1":
            raise ValueError(f"Unsupported codec config version: {version}")
        return cls(
            accent_aware=bool(data.get("accent_aware", False)),
            keep_literals=bool(data.get("keep_literals", False)),
            strict=bool(data.get("strict", False)),
            version=version,
        )


def save_codec_config(config: CodecConfig, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")


def load_codec_config(path: str) -> CodecConfig:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return CodecConfig.from_dict(raw)


class CharKind(enum.Enum):
    SPACE = "space"
    DIGIT = "digit"
    PUNCTUATION = "punctuation"
    LETTER = "letter"
    ACCENTED_LETTER = "accented_letter"
    UNRECOGNIZED = "unrecognized"


@dataclasses.dataclass(frozen=True)
class CharInfo:
    char: str
    kind: CharKind
    nudal: int = 0
    upper: bool = False
    accent: int = 0

    @property
    def accented(self) -> bool:
        return self.char in ACCENTED_CHARACTERS


def classify(char: str) -> CharInfo:
    if char == " ":
        return CharInfo(char, CharKind.SPACE)
    upper = char == char.upper() and char != char.lower()
    if char in NUMBER_TABLE:
        return CharInfo(char, CharKind.DIGIT)
    if char in PUNCTUATION_TABLE:
        return CharInfo(char, CharKind.PUNCTUATION)
    nudal = STANDARD_TABLE.get(char.lower())
    if nudal is None:
        return CharInfo(char, CharKind.UNRECOGNIZED, upper=upper)
    if char in ACCENTED_CHARACTERS:
        return CharInfo(
            char,
            CharKind.ACCENTED_LETTER,
            nudal=nudal,
            upper=upper,
            accent=ACCENT_TABLE.get(char.lower(), 0),
        )
    return CharInfo(char, CharKind.LETTER, nudal=nudal, upper=upper)


def encode_char(char: str) -> str:
    """Emit the token for one non-space character, without any joiner."""
    info = classify(char)
    if info.kind is CharKind.DIGIT:
        return NUMBER_TABLE[char]
    if info.kind is CharKind.PUNCTUATION:
        return PUNCTUATION_TABLE[char]
    if info.kind is CharKind.LETTER:
        return f"{info.nudal}|11" if info.upper else f"1|{info.nudal}"
    if info.kind is CharKind.ACCENTED_LETTER:
        if info.upper:
            return f"{info.nudal}|11{info.accent}"
        return f"1|{info.nudal}0{info.accent}"
    return char


def gap_value(char: str) -> int:
    """Value a character contributes to a neighbouring gap: NEDAB, class or 0."""
    digit_code = NUMBER_TABLE.get(char)
    if digit_code is not None:
        return int(digit_code[0])
    return STANDARD_TABLE.get(char.lower(), 0)


def encode_gap(prev: str, nxt: str) -> str:
    # Non-digit followed by a digit always gets a bare "I", whatever the difference
    if prev not in NUMBER_TABLE and nxt in NUMBER_TABLE:
        return DIGIT_RUN_MARKER
    return to_roman(abs(gap_value(prev) - gap_value(nxt)))


def encode(text: str) -> str:
    if not text:
        return ""
    parts: List[str] = []
    last = len(text) - 1
    for i, char in enumerate(text):
        if char == " ":
            # Edge spaces have only one neighbour and are dropped
            if 0 < i < last:
                parts.append(encode_gap(text[i - 1], text[i + 1]))
            continue

        follows_token = i > 0 and text[i - 1] != " "
        if char in NUMBER_TABLE:
            if follows_token:
                parts.append(DIGIT_RUN_MARKER)
            parts.append(NUMBER_TABLE[char])
            continue

        token = encode_char(char)
        if follows_token and PUNCTUATION_MARKER not in token:
            parts.append(SEPARATOR)
        parts.append(token)
    return "".join(parts)


def decode_letter(nudal: int, upper: bool, accent: int = 0, accent_aware: bool = False) -> str:
    group = LETTER_CLASS_BY_NUDAL[nudal]
    letter = group.canonical
    if accent_aware and accent:
        for candidate in group.letters:
            if ACCENT_TABLE.get(candidate) == accent:
                letter = candidate
                break
    return letter.upper() if upper else letter


# A content token right after one of these was not preceded by a space
_JOINING_KINDS = (TokenKind.SEPARATOR, TokenKind.DIGIT_JOINER, TokenKind.GAP)
_CONTENT_KINDS = (TokenKind.LETTER, TokenKind.DIGIT_CODE, TokenKind.LITERAL)


def decode(code: str, config: Optional[CodecConfig] = None) -> str:
    """Best-effort inverse of :func:`encode`.

    Letters come back as the canonical member of their class, so the result
    matches the original text only when it already used canonical letters.
    Unrecognized chunks are dropped unless ``config.strict`` is set.
    """
    if config is None:
        config = CodecConfig()
    if not code:
        return ""

    pieces: List[str] = []
    previous: Optional[TokenKind] = None
    letter_token = None
    for token in tokenize(code):
        kind = token.kind
        if kind is TokenKind.INVALID:
            if config.strict:
                raise DecodeError(token.offset, token.text)
            logger.debug("Skipping chunk %r at offset %d", token.text, token.offset)
            continue
        if kind is TokenKind.LITERAL and not config.keep_literals:
            logger.debug("Dropping literal %r at offset %d", token.char, token.offset)
            continue

        # The encoder only omits a joiner after a space whose gap was zero
        if (
            kind in _CONTENT_KINDS
            and previous is not None
            and previous not in _JOINING_KINDS
        ):
            pieces.append(" ")

        if kind is TokenKind.LETTER:
            pieces.append(decode_letter(token.nudal, token.upper))
            letter_token = token
        elif kind is TokenKind.ACCENT:
            if config.accent_aware and previous is TokenKind.LETTER:
                pieces[-1] = decode_letter(
                    letter_token.nudal,
                    letter_token.upper,
                    accent=token.accent,
                    accent_aware=True,
                )
        elif kind in (TokenKind.DIGIT_CODE, TokenKind.PUNCTUATION):
            pieces.append(token.char)
        elif kind is TokenKind.GAP:
            pieces.append(" ")
        elif kind is TokenKind.LITERAL:
            pieces.append(token.char)
        previous = kind

    return "".join(pieces)


__all__ = [
    "CharInfo",
    "CharKind",
    "CodecConfig",
    "DecodeError",
    "classify",
    "decode",
    "decode_letter",
    "encode",
    "encode_char",
    "encode_gap",
    "gap_value",
    "load_codec_config",
    "save_codec_config",
]
