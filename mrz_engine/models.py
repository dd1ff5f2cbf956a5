from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from .checksum import is_value_valid
from .constants import FILLER
from .utils import trim_fillers


class MRZBaseModel(BaseModel):
    """Base model with strict validation, forbidden unknown fields and no mutation."""

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)


class DocumentFormat(str, Enum):
    TD1 = "TD1"
    TD2 = "TD2"
    TD3 = "TD3"


class MRZField(MRZBaseModel):
    value: str
    raw_value: str
    check_digit: str = ""
    is_valid: bool = True

    def validated(self) -> MRZField:
        """Return this field with its check digit verified.

        A filler check digit means "no check digit": the field is valid only
        when it is blank, and the check digit becomes ``"0"``.
        """
        check_digit = self.check_digit
        if check_digit == FILLER:
            if trim_fillers(self.raw_value):
                return self.model_copy(update={"is_valid": False})
            check_digit = "0"
        elif len(check_digit) != 1 or check_digit not in "0123456789":
            return self.model_copy(update={"is_valid": False})

        return self.model_copy(
            update={"check_digit": check_digit, "is_valid": is_value_valid(self.raw_value, check_digit)}
        )


class MRZResult(MRZBaseModel):
    document_format: DocumentFormat
    is_visa: bool
    is_valid: bool
    fields: Mapping[str, MRZField]
    issuing_state: str

    @field_validator("fields", mode="after")
    @classmethod
    def _read_only_fields(cls, fields: Mapping[str, MRZField]) -> Mapping[str, MRZField]:
        return MappingProxyType(dict(fields))

    @field_serializer("fields")
    def _dump_fields(self, fields: Mapping[str, MRZField]) -> dict[str, Any]:
        return {name: field.model_dump() for name, field in fields.items()}

    def value(self, name: str) -> str:
        field = self.fields.get(name)
        return field.value if field is not None else ""
