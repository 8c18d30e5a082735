from typing import Tuple

ROMAN_NUMERALS: Tuple[Tuple[int, str], ...] = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


def to_roman(num: int) -> str:
    """Render ``num`` in subtractive Roman notation; zero renders as ``""``."""
    if num < 0:
        raise ValueError(f"Roman numerals have no negative form: {num}")
    parts = []
    for value, symbol in ROMAN_NUMERALS:
        count, num = divmod(num, value)
        parts.append(symbol * count)
    return "".join(parts)


__all__ = ["ROMAN_NUMERALS", "to_roman"]
