from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import FILLER
from .exceptions import IndexOutOfRange, InvalidDateCharacter, InvalidDateFormat
from .models import MRZField
from .ocr import correct_sex, replace_digits, replace_letters


class FieldType(str, Enum):
    NAMES = "names"
    BIRTHDATE = "birthdate"
    EXPIRY_DATE = "expiry_date"
    SEX = "sex"
    PERSONAL_NUMBER = "personal_number"
    OPTIONAL_DATA = "optional_data"
    DOCUMENT_TYPE = "document_type"
    DOCUMENT_NUMBER = "document_number"
    COUNTRY_CODE = "country_code"
    NATIONALITY = "nationality"
    ALPHABETIC = "alphabetic"
    NUMERIC = "numeric"
    HASH = "hash"


_DIGIT_FIELDS = {FieldType.BIRTHDATE, FieldType.EXPIRY_DATE, FieldType.HASH, FieldType.NUMERIC}
_LETTER_FIELDS = {
    FieldType.NAMES,
    FieldType.DOCUMENT_TYPE,
    FieldType.COUNTRY_CODE,
    FieldType.NATIONALITY,
    FieldType.ALPHABETIC,
}
_DATE_FIELDS = {FieldType.BIRTHDATE, FieldType.EXPIRY_DATE}

_SEX_LABELS = {"M": "MALE", "F": "FEMALE", FILLER: "UNSPECIFIED"}


@dataclass(frozen=True)
class FieldFormatter:
    """Slices, corrects and formats single MRZ fields."""

    ocr_correction: bool = True

    def field(
        self,
        field_type: FieldType,
        line: str,
        start: int,
        length: int,
        check_digit_follows: bool = False,
    ) -> MRZField:
        end = start + length
        if start < 0 or end > len(line):
            raise IndexOutOfRange(f"Field {field_type.value} [{start}:{end}) exceeds line of length {len(line)}")

        raw_value = line[start:end]
        check_digit = line[end:end + 1] if check_digit_follows else ""
        if self.ocr_correction:
            raw_value = self.correct(raw_value, field_type)

        result = MRZField(value=self.format(raw_value, field_type), raw_value=raw_value, check_digit=check_digit)
        if check_digit_follows:
            result = result.validated()
        return result

    def correct(self, value: str, field_type: FieldType) -> str:
        if field_type in _DIGIT_FIELDS:
            return replace_letters(value)
        if field_type in _LETTER_FIELDS:
            return replace_digits(value)
        if field_type is FieldType.SEX:
            return correct_sex(value)
        return value

    def format(self, value: str, field_type: FieldType) -> str:
        if field_type is FieldType.NAMES:
            return " ".join(self.names(value))
        if field_type in _DATE_FIELDS:
            return self.date(value)
        if field_type is FieldType.SEX:
            return self.sex(value)
        return value

    @staticmethod
    def names(value: str) -> list[str]:
        identifiers = value.split(FILLER * 2)
        primary = identifiers[0].replace(FILLER, " ")
        secondary = identifiers[1].replace(FILLER, " ") if len(identifiers) > 1 else ""
        return [primary, secondary]

    @staticmethod
    def date(value: str) -> str:
        # Unset dates are kept as-is; the check digit decides their validity.
        if FILLER in value:
            return value
        if any(ch not in "0123456789" for ch in value):
            raise InvalidDateCharacter(f"Invalid date character in {value!r}")
        if len(value) != 6:
            raise InvalidDateFormat(f"Invalid date format: {value!r}")
        return value

    @staticmethod
    def sex(value: str) -> str:
        return _SEX_LABELS.get(value, "")
