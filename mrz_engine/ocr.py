from __future__ import annotations

# Digits read where a letter is expected.
LETTER_CORRECTIONS: dict[str, str] = {"0": "O", "1": "I", "2": "Z", "8": "B"}

# Letters read where a digit is expected.
DIGIT_CORRECTIONS: dict[str, str] = {"O": "0", "Q": "0", "U": "0", "D": "0", "I": "1", "Z": "2", "B": "8"}


def replace_digits(value: str) -> str:
    return "".join(LETTER_CORRECTIONS.get(ch, ch) for ch in value)


def replace_letters(value: str) -> str:
    return "".join(DIGIT_CORRECTIONS.get(ch, ch) for ch in value)


def correct_sex(value: str) -> str:
    return value.replace("P", "F")
