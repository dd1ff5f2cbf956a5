from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from .constants import (
    DOCUMENT_NUMBER_FIELD,
    TD1_CHARACTERS_PER_LINE,
    TD1_LINE_COUNT,
    TD2_CHARACTERS_PER_LINE,
    TD3_CHARACTERS_PER_LINE,
)
from .exceptions import InvalidLineLength, UnresolvedFormat
from .layouts import LayoutParser, resolve_layout
from .logging import mask_sensitive
from .models import DocumentFormat, MRZResult
from .settings import MRZSettings, settings as default_settings
from .utils import all_equal, trim_fillers

logger = structlog.get_logger("mrz_parser")

_TWO_LINE_FORMATS = {
    TD2_CHARACTERS_PER_LINE: DocumentFormat.TD2,
    TD3_CHARACTERS_PER_LINE: DocumentFormat.TD3,
}


def split_mrz_string(value: str) -> list[str]:
    """Split a raw MRZ string into lines.

    Embedded line breaks win; otherwise the total length decides the cut.
    """
    value = value.strip()
    if "\n" in value or "\r" in value:
        return [line.strip() for line in value.splitlines() if line.strip()]
    if len(value) == TD1_LINE_COUNT * TD1_CHARACTERS_PER_LINE:
        return [value[i:i + TD1_CHARACTERS_PER_LINE] for i in range(0, len(value), TD1_CHARACTERS_PER_LINE)]
    if len(value) == 2 * TD2_CHARACTERS_PER_LINE:
        return [value[:TD2_CHARACTERS_PER_LINE], value[TD2_CHARACTERS_PER_LINE:]]
    return [value[:TD3_CHARACTERS_PER_LINE], value[TD3_CHARACTERS_PER_LINE:]]


def detect_format(lines: Sequence[str]) -> DocumentFormat:
    lengths = [len(line) for line in lines]
    if len(lines) == TD1_LINE_COUNT:
        if all(length == TD1_CHARACTERS_PER_LINE for length in lengths):
            return DocumentFormat.TD1
        raise InvalidLineLength(f"TD1 lines must be {TD1_CHARACTERS_PER_LINE} characters, got {lengths}")
    if len(lines) == 2:
        if not all_equal(lengths):
            raise InvalidLineLength(f"MRZ lines differ in length: {lengths}")
        if lengths[0] not in _TWO_LINE_FORMATS:
            raise UnresolvedFormat(f"No two-line MRZ format has {lengths[0]} characters per line")
        return _TWO_LINE_FORMATS[lengths[0]]
    raise InvalidLineLength(f"Unsupported MRZ line count: {len(lines)}")


@dataclass
class MRZParser:
    """Parse session over one MRZ input."""

    lines: list[str]
    settings: MRZSettings = field(default_factory=lambda: default_settings)
    mrz_type: DocumentFormat | None = None

    @classmethod
    def from_lines(cls, lines: Sequence[str], settings: MRZSettings | None = None) -> MRZParser:
        return cls(lines=list(lines), settings=settings or default_settings)

    @classmethod
    def from_string(cls, value: str, settings: MRZSettings | None = None) -> MRZParser:
        return cls(lines=split_mrz_string(value), settings=settings or default_settings)

    def get_mrz_type(self) -> DocumentFormat:
        try:
            self.mrz_type = detect_format(self.lines)
        except InvalidLineLength as exc:
            self.mrz_type = None
            logger.warning("mrz_format_rejected", line_lengths=[len(line) for line in self.lines], error=str(exc))
            raise
        logger.debug("mrz_format_detected", format=self.mrz_type.value)
        return self.mrz_type

    def parse(self) -> MRZResult:
        document_format = self.get_mrz_type()
        layout = resolve_layout(document_format, self.lines)
        result = LayoutParser(layout=layout, settings=self.settings).parse(self.lines)
        logger.debug(
            "mrz_parsed",
            format=result.document_format.value,
            is_valid=result.is_valid,
            is_visa=result.is_visa,
            document_number=mask_sensitive(trim_fillers(result.value(DOCUMENT_NUMBER_FIELD))),
        )
        return result


def _parser_for(value: str | Sequence[str], settings: MRZSettings | None) -> MRZParser:
    if isinstance(value, str):
        return MRZParser.from_string(value, settings=settings)
    return MRZParser.from_lines(value, settings=settings)


def detect_type(value: str | Sequence[str], settings: MRZSettings | None = None) -> DocumentFormat:
    return _parser_for(value, settings).get_mrz_type()


def parse_mrz(value: str | Sequence[str], settings: MRZSettings | None = None) -> MRZResult:
    return _parser_for(value, settings).parse()
