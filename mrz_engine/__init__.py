from .checksum import calculate_check_digit, is_value_valid
from .countries import ISSUING_COUNTRY_CODES, resolve_issuing_state
from .exceptions import (
    IndexOutOfRange,
    InvalidCharacter,
    InvalidDateCharacter,
    InvalidDateFormat,
    InvalidLineLength,
    MRZError,
    UnresolvedFormat,
)
from .formatter import FieldFormatter, FieldType
from .layouts import TD1_LAYOUT, TD2_LAYOUT, TD2_VISA_LAYOUT, TD3_LAYOUT, LayoutParser, MRZLayout
from .logging import configure_logging, mask_sensitive
from .models import DocumentFormat, MRZField, MRZResult
from .parser import MRZParser, detect_format, detect_type, parse_mrz, split_mrz_string
from .settings import MRZSettings

__all__ = [
    "calculate_check_digit",
    "is_value_valid",
    "ISSUING_COUNTRY_CODES",
    "resolve_issuing_state",
    "IndexOutOfRange",
    "InvalidCharacter",
    "InvalidDateCharacter",
    "InvalidDateFormat",
    "InvalidLineLength",
    "MRZError",
    "UnresolvedFormat",
    "FieldFormatter",
    "FieldType",
    "TD1_LAYOUT",
    "TD2_LAYOUT",
    "TD2_VISA_LAYOUT",
    "TD3_LAYOUT",
    "LayoutParser",
    "MRZLayout",
    "configure_logging",
    "mask_sensitive",
    "DocumentFormat",
    "MRZField",
    "MRZResult",
    "MRZParser",
    "detect_format",
    "detect_type",
    "parse_mrz",
    "split_mrz_string",
    "MRZSettings",
]
