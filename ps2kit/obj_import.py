"""Building ICN icons from Wavefront OBJ meshes."""

from __future__ import annotations

import math
import os
from pathlib import Path

from ps2kit.color import Color
from ps2kit.icn import (
    ICN,
    TEXTURE_SIZE,
    UV,
    AnimationHeader,
    ICNHeader,
    IcnTexture,
    Normal,
    Vertex,
)

FIXED_POINT = 4096.0
TEXTURE_TYPE = 0x07
WHITE_PIXEL = 0xFFFF

Point = tuple[float, float, float]
Triangle = tuple[Point, Point, Point]


class OBJFormatError(ValueError):
    """Raised when OBJ text cannot be turned into triangles."""


def _resolve_index(token: str, vertex_count: int, line_number: int) -> int:
    reference = token.split("/", 1)[0]
    try:
        index = int(reference)
    except ValueError:
        raise OBJFormatError(f"line {line_number}: bad vertex reference {token!r}") from None
    resolved = index - 1 if index > 0 else vertex_count + index
    if index == 0 or not 0 <= resolved < vertex_count:
        raise OBJFormatError(f"line {line_number}: vertex index {index} out of range")
    return resolved


def parse_obj_triangles(text: str) -> list[Triangle]:
    """Return the triangles of the single object in OBJ text.

    Faces with more than three corners are split into a fan of triangles.
    """
    vertices: list[Point] = []
    triangles: list[Triangle] = []
    objects = 0

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        keyword, *args = line.split()
        if keyword == "o":
            objects += 1
            if objects > 1:
                raise OBJFormatError("expected exactly one object")
        elif keyword == "v":
            if len(args) < 3:
                raise OBJFormatError(f"line {line_number}: vertex needs three coordinates")
            try:
                x, y, z = (float(value) for value in args[:3])
            except ValueError:
                raise OBJFormatError(f"line {line_number}: bad vertex coordinate") from None
            vertices.append((x, y, z))
        elif keyword == "f":
            if len(args) < 3:
                raise OBJFormatError(f"line {line_number}: face needs three corners")
            corners = [vertices[_resolve_index(arg, len(vertices), line_number)] for arg in args]
            first = corners[0]
            triangles.extend(
                (first, second, third) for second, third in zip(corners[1:], corners[2:])
            )
    return triangles


def _to_i16(value: float) -> int:
    """Convert like a saturating float-to-i16 cast: truncate, clamp, NaN is 0."""
    if math.isnan(value):
        return 0
    return int(max(-32768.0, min(32767.0, value)))


def _vertex(point: Point) -> Vertex:
    x, y, z = point
    return Vertex(
        _to_i16(x * FIXED_POINT),
        _to_i16(-(y * FIXED_POINT)),
        _to_i16(-(z * FIXED_POINT)),
        0,
    )


def icn_from_obj(text: str) -> ICN:
    """Build a single-shape, untextured white icon from OBJ text."""
    vertices = [_vertex(point) for triangle in parse_obj_triangles(text) for point in triangle]
    count = len(vertices)
    return ICN(
        header=ICNHeader(
            animation_shape_count=1,
            vertex_count=count,
            texture_type=TEXTURE_TYPE,
        ),
        animation_shapes=[vertices],
        normals=[Normal(0, 0, 0, 0)] * count,
        uvs=[UV(0, 0)] * count,
        colors=[Color.WHITE] * count,
        texture=IcnTexture([WHITE_PIXEL] * TEXTURE_SIZE),
        animation_header=AnimationHeader(
            tag=0, frame_length=0, anim_speed=0.0, play_offset=0, frame_count=0
        ),
        frames=[],
    )


def create_icn(source: str | os.PathLike, target: str | os.PathLike) -> ICN:
    """Read an OBJ file, write the resulting icon to ``target`` and return it."""
    icn = icn_from_obj(Path(source).read_text(encoding="utf-8"))
    Path(target).write_bytes(icn.to_bytes())
    return icn