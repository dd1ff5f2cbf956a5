from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .constants import FILLER


def trim_fillers(value: str) -> str:
    return value.strip(FILLER)


def all_equal(values: Sequence[Any]) -> bool:
    return all(value == values[0] for value in values[1:])
