"""Parsing of icon.sys save metadata."""

from __future__ import annotations

import struct
import unicodedata
from dataclasses import dataclass

from ps2kit.color import Color
from ps2kit.util import parse_cstring

_LAYOUT = struct.Struct("<4sHHII16I12f12I4f68s64s64s64s")


class IconSysFormatError(ValueError):
    """Raised when icon.sys data is truncated."""


@dataclass(frozen=True)
class ColorF:
    r: float
    g: float
    b: float
    a: float


@dataclass(frozen=True)
class Vector:
    x: float
    y: float
    z: float
    w: float


def parse_sjis_string(data: bytes) -> str:
    """Decode Shift-JIS text, apply NFKC and cut at the first NUL."""
    text = bytes(data).decode("cp932", errors="replace")
    normalized = unicodedata.normalize("NFKC", text)
    return parse_cstring(normalized.encode("utf-8"))


def _colors(values) -> tuple[Color, ...]:
    return tuple(
        Color(*(v & 0xFF for v in values[i:i + 4])) for i in range(0, len(values), 4)
    )


@dataclass
class IconSys:
    """The fields of an icon.sys file."""

    title_line_transparency: int
    background_transparency: int
    background_colors: tuple[Color, Color, Color, Color]
    light_directions: tuple[Vector, Vector, Vector]
    light_colors: tuple[Color, Color, Color]
    ambient_color: ColorF
    title: str
    icon_file: str
    icon_copy_file: str
    icon_delete_file: str

    @classmethod
    def from_bytes(cls, data: bytes) -> IconSys:
        """Parse icon.sys data."""
        try:
            fields = _LAYOUT.unpack_from(bytes(data))
        except struct.error as exc:
            raise IconSysFormatError("unexpected end of icon.sys data") from exc

        _magic, title_line_transparency, _, background_transparency, _ = fields[:5]
        background = fields[5:21]
        directions = fields[21:33]
        lights = fields[33:45]
        ambient = fields[45:49]
        title, icon_file, icon_copy_file, icon_delete_file = fields[49:53]

        return cls(
            title_line_transparency=title_line_transparency,
            background_transparency=background_transparency,
            background_colors=_colors(background),
            light_directions=tuple(
                Vector(*directions[i:i + 4]) for i in range(0, len(directions), 4)
            ),
            light_colors=_colors(lights),
            ambient_color=ColorF(*ambient),
            title=parse_sjis_string(title),
            icon_file=parse_cstring(icon_file),
            icon_copy_file=parse_cstring(icon_copy_file),
            icon_delete_file=parse_cstring(icon_delete_file),
        )