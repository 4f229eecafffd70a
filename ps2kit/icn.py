"""Reading and writing ICN 3D save icons."""

from __future__ import annotations

import io
import math
import struct
from dataclasses import dataclass, field
from decimal import Decimal
from itertools import islice
from typing import Iterable, Iterator

from PIL import Image

from ps2kit.color import Color

ICN_MAGIC = 0x010000
ANIMATION_TAG = 0x01
TEXTURE_WIDTH = 128
TEXTURE_HEIGHT = 128
TEXTURE_SIZE = TEXTURE_WIDTH * TEXTURE_HEIGHT
UNCOMPRESSED_MAX_TYPE = 0x07
FIXED_POINT = 4096.0

_HEADER = struct.Struct("<IIIII")
_VERTEX = struct.Struct("<hhhH")
_UV = struct.Struct("<hh")
_ANIMATION = struct.Struct("<IIfII")
_FRAME = struct.Struct("<IIII")
_KEY = struct.Struct("<ff")
_TEXTURE = struct.Struct(f"<{TEXTURE_SIZE}H")


class ICNFormatError(ValueError):
    """Raised when ICN data is malformed or cannot be encoded."""


@dataclass(frozen=True)
class Vertex:
    x: int
    y: int
    z: int
    w: int


@dataclass(frozen=True)
class Normal:
    x: int
    y: int
    z: int
    w: int


@dataclass(frozen=True)
class UV:
    u: int
    v: int


@dataclass
class IcnTexture:
    """A 128x128 texture of packed 16-bit colours."""

    pixels: list[int] = field(default_factory=lambda: [0] * TEXTURE_SIZE)

    def __post_init__(self) -> None:
        self.pixels = list(self.pixels)
        if len(self.pixels) != TEXTURE_SIZE:
            raise ValueError(
                f"texture needs {TEXTURE_SIZE} pixels, got {len(self.pixels)}"
            )


@dataclass(frozen=True)
class Key:
    time: float
    value: float


@dataclass
class Frame:
    shape_id: int
    keys: list[Key] = field(default_factory=list)


@dataclass
class AnimationHeader:
    tag: int
    frame_length: int
    anim_speed: float
    play_offset: int
    frame_count: int


@dataclass
class ICNHeader:
    animation_shape_count: int
    vertex_count: int
    texture_type: int


AnimationShape = list[Vertex]


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def unpack(self, fmt: str | struct.Struct) -> tuple:
        layout = fmt if isinstance(fmt, struct.Struct) else struct.Struct(fmt)
        end = self._pos + layout.size
        if end > len(self._data):
            raise ICNFormatError("unexpected end of ICN data")
        values = layout.unpack_from(self._data, self._pos)
        self._pos = end
        return values


def _next_word(words: Iterator[int]) -> int:
    try:
        return next(words)
    except StopIteration:
        raise ICNFormatError("compressed texture ends in the middle of a run") from None


def decompress_texture(words: Iterable[int]) -> list[int]:
    """Expand run-length encoded texture words into TEXTURE_SIZE pixels."""
    stream = iter(words)
    pixels: list[int] = []
    for count in stream:
        if count < 0xFF00:
            pixel = _next_word(stream)
            pixels.extend([pixel] * max(0, min(count, TEXTURE_SIZE - len(pixels))))
        else:
            for _ in range((0xFFFF ^ count) + 1):
                if len(pixels) >= TEXTURE_SIZE:
                    break
                pixels.append(_next_word(stream))
    pixels.extend([0] * (TEXTURE_SIZE - len(pixels)))
    return pixels


def _to_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _format_float(value: float) -> str:
    """Format a single-precision value as the shortest plain decimal."""
    number = _to_f32(value)
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    for digits in range(1, 18):
        candidate = format(number, f".{digits}g")
        if _to_f32(float(candidate)) == number:
            break
    text = format(Decimal(candidate), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _negate_i16(value: int) -> int:
    return ((-value + 0x8000) & 0xFFFF) - 0x8000


def _read_color(reader: _Reader) -> Color:
    r, b, g, a = reader.unpack("<4B")
    return Color(r, g, b, a)


def _read_frame(reader: _Reader) -> Frame:
    shape_id, key_count, _, _ = reader.unpack(_FRAME)
    if key_count == 0:
        raise ICNFormatError("animation frame has a key count of zero")
    keys = [Key(*reader.unpack(_KEY)) for _ in range(key_count - 1)]
    return Frame(shape_id, keys)


def _read_texture(reader: _Reader, texture_type: int) -> IcnTexture:
    if texture_type <= UNCOMPRESSED_MAX_TYPE:
        return IcnTexture(list(reader.unpack(_TEXTURE)))
    (size,) = reader.unpack("<I")
    words = reader.unpack(f"<{size // 2}H")
    return IcnTexture(decompress_texture(words))


@dataclass
class ICN:
    """A 3D icon: animation shapes, per-vertex data, animation and texture."""

    header: ICNHeader
    animation_shapes: list[AnimationShape]
    normals: list[Normal]
    uvs: list[UV]
    colors: list[Color]
    texture: IcnTexture
    animation_header: AnimationHeader
    frames: list[Frame]

    @classmethod
    def from_bytes(cls, data: bytes) -> ICN:
        """Parse ICN data."""
        reader = _Reader(bytes(data))

        magic, shape_count, texture_type, _, vertex_count = reader.unpack(_HEADER)
        if magic != ICN_MAGIC:
            raise ICNFormatError(f"bad ICN magic {magic:#x}")
        header = ICNHeader(shape_count, vertex_count, texture_type)

        shapes: list[AnimationShape] = [[] for _ in range(shape_count)]
        normals: list[Normal] = []
        uvs: list[UV] = []
        colors: list[Color] = []
        for _ in range(vertex_count):
            for shape in shapes:
                shape.append(Vertex(*reader.unpack(_VERTEX)))
            normals.append(Normal(*reader.unpack(_VERTEX)))
            uvs.append(UV(*reader.unpack(_UV)))
            colors.append(_read_color(reader))

        tag, frame_length, anim_speed, play_offset, frame_count = reader.unpack(_ANIMATION)
        if tag != ANIMATION_TAG:
            raise ICNFormatError(f"bad animation tag {tag:#x}")
        frames = [_read_frame(reader) for _ in range(frame_count)]
        animation_header = AnimationHeader(
            tag, frame_length, anim_speed, play_offset, frame_count
        )

        texture = _read_texture(reader, texture_type)

        return cls(
            header=header,
            animation_shapes=shapes,
            normals=normals,
            uvs=uvs,
            colors=colors,
            texture=texture,
            animation_header=animation_header,
            frames=frames,
        )

    def _shape_bytes(self) -> Iterator[bytes]:
        count = self.header.vertex_count
        shapes = self.animation_shapes[: self.header.animation_shape_count]
        if len(shapes) < self.header.animation_shape_count:
            raise ValueError("fewer animation shapes than the header declares")
        for sequence in (*shapes, self.normals, self.uvs, self.colors):
            if len(sequence) < count:
                raise ValueError("fewer vertex records than the header declares")
        per_vertex = islice(zip(zip(*shapes), self.normals, self.uvs, self.colors), count)
        for vertices, normal, uv, color in per_vertex:
            for vertex in vertices:
                yield _VERTEX.pack(vertex.x, vertex.y, vertex.z, vertex.w)
                yield _VERTEX.pack(normal.x, normal.y, normal.z, normal.w)
                yield _UV.pack(uv.u, uv.v)
                yield struct.pack("<4B", *color.to_rgba())

    def _animation_bytes(self) -> Iterator[bytes]:
        if self.header.vertex_count <= 0:
            raise ValueError("ICN needs at least one vertex")
        if self.header.animation_shape_count <= 0:
            raise ValueError("ICN needs at least one animation shape")
        anim = self.animation_header
        yield _ANIMATION.pack(
            ANIMATION_TAG, anim.frame_length, anim.anim_speed, anim.play_offset, anim.frame_count
        )
        for frame in self.frames:
            yield _FRAME.pack(frame.shape_id, len(frame.keys) + 1, 0, 0)
            for key in frame.keys:
                yield _KEY.pack(key.time, key.value)

    def _texture_bytes(self) -> bytes:
        if self.header.texture_type > UNCOMPRESSED_MAX_TYPE:
            raise ICNFormatError("Failed to compress texture")
        return _TEXTURE.pack(*self.texture.pixels)

    def to_bytes(self) -> bytes:
        """Serialise the icon; compressed textures cannot be written."""
        header = _HEADER.pack(
            ICN_MAGIC,
            self.header.animation_shape_count,
            self.header.texture_type,
            0,
            self.header.vertex_count,
        )
        shapes = b"".join(self._shape_bytes())
        animation = b"".join(self._animation_bytes())
        return header + shapes + animation + self._texture_bytes()

    def export_obj(self) -> str:
        """Export the first animation shape as Wavefront OBJ text."""
        if not self.animation_shapes:
            raise ValueError("ICN has no animation shapes")
        lines = ["mtllib list.mtl", "o list"]
        for vertex in self.animation_shapes[0]:
            x = _format_float(vertex.x / FIXED_POINT)
            y = _format_float(_negate_i16(vertex.y) / FIXED_POINT)
            z = _format_float(_negate_i16(vertex.z) / FIXED_POINT)
            lines.append(f"v {x} {y} {z}")
        for uv in islice(self.uvs, self.header.vertex_count):
            u = _format_float(uv.u / FIXED_POINT)
            v = _format_float(1.0 - _to_f32(uv.v / FIXED_POINT))
            lines.append(f"vt {u} {v}")
        lines.append("usemtl tex")
        for face in range(self.header.vertex_count // 3):
            a, b, c = face * 3 + 1, face * 3 + 2, face * 3 + 3
            lines.append(f"f {a}/{a} {b}/{b} {c}/{c}")
        return "\n".join(lines) + "\n"

    def export_png(self) -> bytes:
        """Render the texture as PNG image data."""
        image = Image.new("RGBA", (TEXTURE_WIDTH, TEXTURE_HEIGHT))
        image.putdata([Color.from_u16(pixel).to_rgba() for pixel in self.texture.pixels])
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()