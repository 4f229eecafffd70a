import io
import struct

import pytest
from PIL import Image

from ps2kit.color import Color
from ps2kit.icn import (
    ICN,
    ICN_MAGIC,
    TEXTURE_SIZE,
    UV,
    AnimationHeader,
    Frame,
    ICNFormatError,
    ICNHeader,
    IcnTexture,
    Key,
    Normal,
    Vertex,
    decompress_texture,
)


def _sample_icn(texture_type=0x07, colors=None):
    vertices = [Vertex(4096, 0, 0, 0), Vertex(0, 4096, 0, 0), Vertex(0, 0, -4096, 0)]
    pixels = [0x801F] * TEXTURE_SIZE
    pixels[1] = 0x7C00
    return ICN(
        header=ICNHeader(animation_shape_count=1, vertex_count=3, texture_type=texture_type),
        animation_shapes=[vertices],
        normals=[Normal(0, 4096, 0, 0)] * 3,
        uvs=[UV(0, 0), UV(4096, 4096), UV(2048, 2048)],
        colors=colors or [Color(10, 20, 20, 128)] * 3,
        texture=IcnTexture(pixels),
        animation_header=AnimationHeader(
            tag=1, frame_length=60, anim_speed=0.5, play_offset=0, frame_count=1
        ),
        frames=[Frame(shape_id=0, keys=[Key(0.0, 1.0), Key(30.0, 0.5)])],
    )


def test_round_trip_uncompressed():
    icn = _sample_icn()
    parsed = ICN.from_bytes(icn.to_bytes())
    assert parsed == icn


def test_header_starts_with_magic():
    data = _sample_icn().to_bytes()
    assert struct.unpack_from("<I", data)[0] == ICN_MAGIC
    assert struct.unpack_from("<I", data, 16)[0] == 3


def test_color_channels_are_read_as_r_b_g_a():
    icn = _sample_icn(colors=[Color(1, 2, 3, 4)] * 3)
    parsed = ICN.from_bytes(icn.to_bytes())
    assert parsed.colors[0] == Color(1, 3, 2, 4)


def test_bad_magic_is_rejected():
    data = bytearray(_sample_icn().to_bytes())
    data[0:4] = struct.pack("<I", 0x020000)
    with pytest.raises(ICNFormatError):
        ICN.from_bytes(bytes(data))


def test_truncated_data_is_rejected():
    data = _sample_icn().to_bytes()
    with pytest.raises(ICNFormatError):
        ICN.from_bytes(data[:-1])


def test_bad_animation_tag_is_rejected():
    data = bytearray(_sample_icn().to_bytes())
    tag_offset = 20 + 3 * 24
    assert struct.unpack_from("<I", data, tag_offset)[0] == 1
    data[tag_offset:tag_offset + 4] = struct.pack("<I", 2)
    with pytest.raises(ICNFormatError):
        ICN.from_bytes(bytes(data))


def test_zero_key_count_is_rejected():
    data = bytearray(_sample_icn().to_bytes())
    key_count_offset = 20 + 3 * 24 + 20 + 4
    assert struct.unpack_from("<I", data, key_count_offset)[0] == 3
    data[key_count_offset:key_count_offset + 4] = struct.pack("<I", 0)
    with pytest.raises(ICNFormatError):
        ICN.from_bytes(bytes(data))


def test_compressed_texture_is_parsed():
    uncompressed = _sample_icn().to_bytes()
    body = bytearray(uncompressed[: -TEXTURE_SIZE * 2])
    body[8:12] = struct.pack("<I", 0x08)
    words = [5, 0x1234, 0xFFFE, 7, 8]
    body += struct.pack("<I", len(words) * 2) + struct.pack(f"<{len(words)}H", *words)
    parsed = ICN.from_bytes(bytes(body))
    assert parsed.header.texture_type == 0x08
    assert parsed.texture.pixels[:7] == [0x1234] * 5 + [7, 8]
    assert set(parsed.texture.pixels[7:]) == {0}


def test_writing_compressed_texture_fails():
    with pytest.raises(ICNFormatError):
        _sample_icn(texture_type=0x08).to_bytes()


def test_writing_without_vertices_fails():
    icn = _sample_icn()
    icn.header.vertex_count = 0
    with pytest.raises(ValueError):
        icn.to_bytes()


def test_decompress_repeat_run():
    pixels = decompress_texture([3, 0x1234])
    assert len(pixels) == TEXTURE_SIZE
    assert pixels[:4] == [0x1234, 0x1234, 0x1234, 0]


def test_decompress_literal_run():
    pixels = decompress_texture([0xFFFF ^ 2, 7, 8, 9, 1, 5])
    assert pixels[:5] == [7, 8, 9, 5, 0]


def test_decompress_clamps_to_texture_size():
    pixels = decompress_texture([TEXTURE_SIZE + 100, 9])
    assert pixels == [9] * TEXTURE_SIZE


def test_decompress_truncated_run_raises():
    with pytest.raises(ICNFormatError):
        decompress_texture([5])
    with pytest.raises(ICNFormatError):
        decompress_texture([0xFFFF ^ 1, 7])


def test_texture_requires_full_size():
    with pytest.raises(ValueError):
        IcnTexture([0] * 10)


def test_export_obj():
    text = _sample_icn().export_obj()
    assert text == (
        "mtllib list.mtl\no list\n"
        "v 1 0 0\nv 0 -1 0\nv 0 0 1\n"
        "vt 0 1\nvt 1 0\nvt 0.5 0.5\n"
        "usemtl tex\n"
        "f 1/1 2/2 3/3\n"
    )


def test_export_obj_face_count_follows_vertex_count():
    icn = _sample_icn()
    lines = icn.export_obj().splitlines()
    assert sum(line.startswith("v ") for line in lines) == 3
    assert sum(line.startswith("vt ") for line in lines) == icn.header.vertex_count
    assert sum(line.startswith("f ") for line in lines) == icn.header.vertex_count // 3


def test_export_png():
    icn = _sample_icn()
    image = Image.open(io.BytesIO(icn.export_png()))
    assert image.size == (128, 128)
    assert image.mode == "RGBA"
    assert image.getpixel((0, 0)) == Color.from_u16(icn.texture.pixels[0]).to_rgba()
    assert image.getpixel((1, 0)) == Color.from_u16(icn.texture.pixels[1]).to_rgba()
    assert image.getpixel((127, 127)) == Color.from_u16(icn.texture.pixels[-1]).to_rgba()