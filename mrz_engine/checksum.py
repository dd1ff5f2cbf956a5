from __future__ import annotations

from .constants import ALPHABET_MAPPING, FILLER, WEIGHTS
from .exceptions import InvalidCharacter


def char_value(char: str) -> int:
    if char in ALPHABET_MAPPING:
        return ALPHABET_MAPPING[char]
    if char in "0123456789":
        return int(char)
    if char == FILLER:
        return 0
    raise InvalidCharacter(f"Invalid MRZ character: {char!r}")


def calculate_check_digit(value: str) -> str:
    """Weighted modulo-10 check digit of ``value`` as a one-character string."""
    total = 0
    for idx, ch in enumerate(value.upper()):
        total += char_value(ch) * WEIGHTS[idx % len(WEIGHTS)]
    return str(total % 10)


def is_value_valid(value: str, check_digit: str) -> bool:
    return calculate_check_digit(value) == check_digit
