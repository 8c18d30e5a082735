"""DAMS text transliteration codec (digits, separators and Roman numerals)."""

from .codec import (
    CharInfo,
    CharKind,
    CodecConfig,
    DecodeError,
    classify,
    decode,
    encode,
    encode_char,
    load_codec_config,
    save_codec_config,
)
from .lexer import Token, TokenKind, tokenize
from .roman import to_roman
from .tables import (
    ACCENT_TABLE,
    LETTER_CLASSES,
    NUMBER_TABLE,
    PUNCTUATION_TABLE,
    STANDARD_TABLE,
    LetterClass,
)

__all__ = [
    "ACCENT_TABLE",
    "CharInfo",
    "CharKind",
    "CodecConfig",
    "DecodeError",
    "LETTER_CLASSES",
    "LetterClass",
    "NUMBER_TABLE",
    "PUNCTUATION_TABLE",
    "STANDARD_TABLE",
    "Token",
    "TokenKind",
    "classify",
    "decode",
    "encode",
    "encode_char",
    "load_codec_config",
    "save_codec_config",
    "to_roman",
    "tokenize",
]

__version__ = "0.1.0"
