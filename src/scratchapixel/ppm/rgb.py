from __future__ import annotations

import operator
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class RGB:
    """One byte per channel."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            raw = getattr(self, name)
            if isinstance(raw, (bool, np.bool_)):
                raise TypeError(f"RGB.{name} must be an int, got {type(raw).__name__}")
            try:
                value = operator.index(raw)
            except TypeError as e:
                raise TypeError(f"RGB.{name} must be an int, got {type(raw).__name__}") from e
            if not 0 <= value <= 255:
                raise ValueError(f"RGB.{name} must be in [0, 255], got {value}")
            # numpy integers are stored as plain ints
            object.__setattr__(self, name, value)

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.g
        yield self.b

    @classmethod
    def from_hex(cls, text: str) -> RGB:
        """
        Parse '#rrggbb', 'rrggbb' or the short form '#rgb' (case-insensitive).
        """
        val = text.strip().lstrip("#")
        if len(val) == 3:
            val = "".join(c * 2 for c in val)
        if len(val) != 6:
            raise ValueError(f"invalid hex color: {text!r}")
        try:
            return cls(int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16))
        except ValueError as e:
            raise ValueError(f"invalid hex color: {text!r}") from e

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)
RED = RGB(255, 0, 0)
