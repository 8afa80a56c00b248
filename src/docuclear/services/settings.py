"""
DocuClear - Processor Settings

Immutable tone/layout settings passed explicitly into the page pipeline.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from docuclear.utils.exceptions import ConfigurationError

VALID_ROTATIONS = (0, 90, 180, 270)


class FilterMode(Enum):
    """Visual mode of the processed page."""

    ORIGINAL = "original"
    GRAYSCALE = "grayscale"
    BINARY = "binary"
    ENHANCED = "enhanced"

    @classmethod
    def parse(cls, value: FilterMode | str) -> FilterMode:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ConfigurationError("mode", f"'{value}' is not one of: {choices}") from None


# field name -> inclusive (min, max)
_RANGES: dict[str, tuple[int, int]] = {
    "threshold": (0, 255),
    "sharpness": (0, 100),
    "brightness": (-100, 100),
    "contrast": (-100, 100),
    "margin": (0, 50),
}


@dataclass(frozen=True)
class ProcessorSettings:
    """Tone and layout settings for one processing run.

    Attributes:
        threshold: Binary cut-off on the channel average (BINARY mode only)
        sharpness: Sharpen blend amount in percent
        brightness: Brightness offset, scaled by 1.5 when applied
        contrast: Contrast amount, scaled by 1.5 when applied
        rotation: Clockwise page rotation in degrees
        margin: Shrinks the drawn page by this percentage
        mode: Visual mode
    """

    threshold: int = 128
    sharpness: int = 20
    brightness: int = 10
    contrast: int = 20
    rotation: int = 0
    margin: int = 0
    mode: FilterMode = FilterMode.ENHANCED

    def __post_init__(self) -> None:
        for name, (low, high) in _RANGES.items():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(name, f"expected an integer, got {value!r}")
            if not low <= value <= high:
                raise ConfigurationError(name, f"{value} is outside [{low}, {high}]")
        if self.rotation not in VALID_ROTATIONS:
            raise ConfigurationError(
                "rotation", f"{self.rotation!r} is not one of {list(VALID_ROTATIONS)}"
            )
        # Accept plain strings from config files and CLI flags
        object.__setattr__(self, "mode", FilterMode.parse(self.mode))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProcessorSettings:
        """Build settings from a mapping, ignoring unknown keys."""
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["mode"] = self.mode.value
        return data

    def replace(self, **changes: Any) -> ProcessorSettings:
        return dataclasses.replace(self, **changes)

    def rotated(self) -> ProcessorSettings:
        """Settings with the page turned a further 90 degrees clockwise."""
        return self.replace(rotation=(self.rotation + 90) % 360)
