"""
Shared input handling for the calculators.

Form fields arrive as raw strings. Numeric fields that are blank or
unparsable fall back to the field's default instead of failing validation.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


def parse_number(value: Any, default: Optional[float], integer: bool = False) -> Any:
    """
    Parse a form value into a number, substituting ``default`` when it can't be.

    Accepts numbers and numeric strings (thousands separators and a leading
    ``$`` are ignored). NaN and infinity count as unparsable.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, str):
        text = value.strip().replace(",", "").lstrip("$")
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        return value

    if not math.isfinite(number):
        return default
    if integer:
        return int(number)
    return number


class CalculatorInputs(BaseModel):
    """Base model for a calculator's form inputs."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _default_unparsable_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields[info.field_name]
        if field.annotation is float:
            return parse_number(value, field.default)
        if field.annotation is int:
            return parse_number(value, field.default, integer=True)
        if field.annotation == Optional[float]:
            return parse_number(value, None)
        if field.annotation == Optional[int]:
            return parse_number(value, None, integer=True)
        return value
