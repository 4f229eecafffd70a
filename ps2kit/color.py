"""RGBA colours and the 16-bit packed colour format used by icon textures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA colour."""

    r: int
    g: int
    b: int
    a: int

    WHITE: ClassVar[Color]

    @classmethod
    def from_u16(cls, value: int) -> Color:
        """Unpack a 5-5-5-1 colour (red in the low bits, alpha in bit 15)."""
        r = value & 0x1F
        g = (value >> 5) & 0x1F
        b = (value >> 10) & 0x1F
        a = 255 if value & 0x8000 else 0
        return cls(r * 255 // 31, g * 255 // 31, b * 255 // 31, a)

    def to_u16(self) -> int:
        """Pack into the 5-5-5-1 format; any non-zero alpha sets bit 15."""
        r = (self.r * 31 // 255) & 0x1F
        g = (self.g * 31 // 255) & 0x1F
        b = (self.b * 31 // 255) & 0x1F
        a = 0x8000 if self.a > 0 else 0
        return r | (g << 5) | (b << 10) | a

    def to_rgba(self) -> tuple[int, int, int, int]:
        """Return the channels as an (r, g, b, a) tuple."""
        return (self.r, self.g, self.b, self.a)


Color.WHITE = Color(255, 255, 255, 255)