from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .checksum import calculate_check_digit
from .constants import (
    BIRTHDATE_FIELD,
    COUNTRY_CODE_FIELD,
    DOCUMENT_NUMBER_FIELD,
    DOCUMENT_TYPE_FIELD,
    EXPIRY_DATE_FIELD,
    FINAL_CHECK_DIGIT_FIELD,
    NAME_FIELD,
    NATIONALITY_FIELD,
    OPTIONAL_DATA_1_FIELD,
    OPTIONAL_DATA_2_FIELD,
    SEX_FIELD,
    TD1_CHARACTERS_PER_LINE,
    TD1_LINE_COUNT,
    TD2_CHARACTERS_PER_LINE,
    TD3_CHARACTERS_PER_LINE,
    VISA_MARKER,
)
from .countries import resolve_issuing_state
from .exceptions import InvalidLineLength
from .formatter import FieldFormatter, FieldType
from .models import DocumentFormat, MRZField, MRZResult
from .settings import MRZSettings, settings as default_settings


@dataclass(frozen=True)
class FieldSpec:
    name: str
    field_type: FieldType
    line: int
    start: int
    length: int
    check_digit: bool = False


@dataclass(frozen=True)
class CompositePart:
    name: str
    with_check_digit: bool = True


@dataclass(frozen=True)
class CompositeCheck:
    """Final check digit computed over several fields.

    ``compare_with`` names the attribute of the final check digit field the
    computed digit is compared against.
    """

    parts: tuple[CompositePart, ...]
    compare_with: str = "value"
    final_field: str = FINAL_CHECK_DIGIT_FIELD


@dataclass(frozen=True)
class MRZLayout:
    document_format: DocumentFormat
    line_count: int
    line_length: int
    fields: tuple[FieldSpec, ...]
    required_valid: tuple[str, ...]
    composite: CompositeCheck | None = None
    is_visa: bool = False


_CORE_VALID = (DOCUMENT_NUMBER_FIELD, BIRTHDATE_FIELD, EXPIRY_DATE_FIELD)

TD1_LAYOUT = MRZLayout(
    document_format=DocumentFormat.TD1,
    line_count=TD1_LINE_COUNT,
    line_length=TD1_CHARACTERS_PER_LINE,
    fields=(
        FieldSpec(DOCUMENT_TYPE_FIELD, FieldType.DOCUMENT_TYPE, 0, 0, 2),
        FieldSpec(COUNTRY_CODE_FIELD, FieldType.COUNTRY_CODE, 0, 2, 3),
        FieldSpec(DOCUMENT_NUMBER_FIELD, FieldType.DOCUMENT_NUMBER, 0, 5, 9, check_digit=True),
        FieldSpec(OPTIONAL_DATA_1_FIELD, FieldType.OPTIONAL_DATA, 0, 15, 15),
        FieldSpec(BIRTHDATE_FIELD, FieldType.BIRTHDATE, 1, 0, 6, check_digit=True),
        FieldSpec(SEX_FIELD, FieldType.SEX, 1, 7, 1),
        FieldSpec(EXPIRY_DATE_FIELD, FieldType.EXPIRY_DATE, 1, 8, 6, check_digit=True),
        FieldSpec(NATIONALITY_FIELD, FieldType.NATIONALITY, 1, 15, 3),
        FieldSpec(OPTIONAL_DATA_2_FIELD, FieldType.OPTIONAL_DATA, 1, 18, 11),
        FieldSpec(FINAL_CHECK_DIGIT_FIELD, FieldType.HASH, 1, 29, 1),
        FieldSpec(NAME_FIELD, FieldType.NAMES, 2, 0, 30),
    ),
    required_valid=_CORE_VALID,
    composite=CompositeCheck(
        parts=(
            CompositePart(DOCUMENT_NUMBER_FIELD),
            CompositePart(OPTIONAL_DATA_1_FIELD),
            CompositePart(BIRTHDATE_FIELD),
            CompositePart(EXPIRY_DATE_FIELD),
            CompositePart(OPTIONAL_DATA_2_FIELD),
        ),
    ),
)

_TD2_COMMON_FIELDS = (
    FieldSpec(DOCUMENT_TYPE_FIELD, FieldType.DOCUMENT_TYPE, 0, 0, 2),
    FieldSpec(COUNTRY_CODE_FIELD, FieldType.COUNTRY_CODE, 0, 2, 3),
    FieldSpec(NAME_FIELD, FieldType.NAMES, 0, 5, 31),
    FieldSpec(DOCUMENT_NUMBER_FIELD, FieldType.DOCUMENT_NUMBER, 1, 0, 9, check_digit=True),
    FieldSpec(NATIONALITY_FIELD, FieldType.NATIONALITY, 1, 10, 3),
    FieldSpec(BIRTHDATE_FIELD, FieldType.BIRTHDATE, 1, 13, 6, check_digit=True),
    FieldSpec(SEX_FIELD, FieldType.SEX, 1, 20, 1),
    FieldSpec(EXPIRY_DATE_FIELD, FieldType.EXPIRY_DATE, 1, 21, 6, check_digit=True),
)

TD2_LAYOUT = MRZLayout(
    document_format=DocumentFormat.TD2,
    line_count=2,
    line_length=TD2_CHARACTERS_PER_LINE,
    fields=_TD2_COMMON_FIELDS
    + (
        FieldSpec(OPTIONAL_DATA_1_FIELD, FieldType.PERSONAL_NUMBER, 1, 28, 7, check_digit=True),
        FieldSpec(FINAL_CHECK_DIGIT_FIELD, FieldType.HASH, 1, 35, 1),
    ),
    required_valid=_CORE_VALID,
    composite=CompositeCheck(
        parts=(
            CompositePart(DOCUMENT_NUMBER_FIELD),
            CompositePart(BIRTHDATE_FIELD),
            CompositePart(EXPIRY_DATE_FIELD),
            CompositePart(OPTIONAL_DATA_1_FIELD, with_check_digit=False),
        ),
        compare_with="raw_value",
    ),
)

# Visas carry no final check digit, the optional data runs to the end of the line.
TD2_VISA_LAYOUT = MRZLayout(
    document_format=DocumentFormat.TD2,
    line_count=2,
    line_length=TD2_CHARACTERS_PER_LINE,
    fields=_TD2_COMMON_FIELDS + (FieldSpec(OPTIONAL_DATA_1_FIELD, FieldType.PERSONAL_NUMBER, 1, 28, 8),),
    required_valid=_CORE_VALID,
    is_visa=True,
)

TD3_LAYOUT = MRZLayout(
    document_format=DocumentFormat.TD3,
    line_count=2,
    line_length=TD3_CHARACTERS_PER_LINE,
    fields=(
        FieldSpec(DOCUMENT_TYPE_FIELD, FieldType.DOCUMENT_TYPE, 0, 0, 2),
        FieldSpec(COUNTRY_CODE_FIELD, FieldType.COUNTRY_CODE, 0, 2, 3),
        FieldSpec(NAME_FIELD, FieldType.NAMES, 0, 5, 39),
        FieldSpec(DOCUMENT_NUMBER_FIELD, FieldType.DOCUMENT_NUMBER, 1, 0, 9, check_digit=True),
        FieldSpec(NATIONALITY_FIELD, FieldType.NATIONALITY, 1, 10, 3),
        FieldSpec(BIRTHDATE_FIELD, FieldType.BIRTHDATE, 1, 13, 6, check_digit=True),
        FieldSpec(SEX_FIELD, FieldType.SEX, 1, 20, 1),
        FieldSpec(EXPIRY_DATE_FIELD, FieldType.EXPIRY_DATE, 1, 21, 6, check_digit=True),
        FieldSpec(OPTIONAL_DATA_1_FIELD, FieldType.PERSONAL_NUMBER, 1, 28, 14, check_digit=True),
        FieldSpec(FINAL_CHECK_DIGIT_FIELD, FieldType.HASH, 1, 43, 1),
    ),
    required_valid=_CORE_VALID + (OPTIONAL_DATA_1_FIELD,),
    composite=CompositeCheck(
        parts=(
            CompositePart(DOCUMENT_NUMBER_FIELD),
            CompositePart(BIRTHDATE_FIELD),
            CompositePart(EXPIRY_DATE_FIELD),
            CompositePart(OPTIONAL_DATA_1_FIELD),
        ),
    ),
)


def resolve_layout(document_format: DocumentFormat, lines: Sequence[str]) -> MRZLayout:
    if document_format is DocumentFormat.TD1:
        return TD1_LAYOUT
    if document_format is DocumentFormat.TD2:
        return TD2_VISA_LAYOUT if lines[0].startswith(VISA_MARKER) else TD2_LAYOUT
    return TD3_LAYOUT


@dataclass
class LayoutParser:
    layout: MRZLayout
    formatter: FieldFormatter = field(default_factory=FieldFormatter)
    settings: MRZSettings = field(default_factory=lambda: default_settings)

    def parse(self, lines: Sequence[str]) -> MRZResult:
        self._check_lines(lines)
        fields = {
            spec.name: self.formatter.field(spec.field_type, lines[spec.line], spec.start, spec.length, spec.check_digit)
            for spec in self.layout.fields
        }
        return MRZResult(
            document_format=self.layout.document_format,
            is_visa=self.layout.is_visa,
            is_valid=self.validate_all_check_digits(fields),
            fields=fields,
            issuing_state=resolve_issuing_state(
                fields[COUNTRY_CODE_FIELD].value,
                default=self.settings.unknown_issuing_state,
            ),
        )

    def validate_all_check_digits(self, fields: Mapping[str, MRZField]) -> bool:
        fields_valid = all(fields[name].is_valid for name in self.layout.required_valid)
        composite = self.layout.composite
        if composite is None:
            return fields_valid

        composite_value = "".join(
            fields[part.name].raw_value + (fields[part.name].check_digit if part.with_check_digit else "")
            for part in composite.parts
        )
        calculated = calculate_check_digit(composite_value)
        return fields_valid and calculated == getattr(fields[composite.final_field], composite.compare_with)

    def _check_lines(self, lines: Sequence[str]) -> None:
        if len(lines) != self.layout.line_count:
            raise InvalidLineLength(
                f"{self.layout.document_format.value} expects {self.layout.line_count} lines, got {len(lines)}"
            )
        for line in lines:
            if len(line) != self.layout.line_length:
                raise InvalidLineLength(
                    f"{self.layout.document_format.value} expects lines of {self.layout.line_length} characters"
                )
