import pytest

from ps2kit.color import Color


def test_white_constant():
    assert Color.WHITE == Color(255, 255, 255, 255)


def test_white_packs_to_all_bits():
    assert Color.WHITE.to_u16() == 0xFFFF


def test_all_bits_unpacks_to_white():
    assert Color.from_u16(0xFFFF) == Color.WHITE


def test_zero_unpacks_to_transparent_black():
    assert Color.from_u16(0) == Color(0, 0, 0, 0)


def test_red_channel_is_low_bits():
    c = Color.from_u16(0x1F)
    assert c.to_rgba() == (255, 0, 0, 0)


def test_alpha_bit():
    assert Color.from_u16(0x8000).a == 255
    assert Color(0, 0, 0, 1).to_u16() == 0x8000
    assert Color(0, 0, 0, 0).to_u16() == 0


@pytest.mark.parametrize("shift", [0, 5, 10])
@pytest.mark.parametrize("level", [0, 31])
def test_extreme_channels_round_trip(shift, level):
    value = (level << shift) | 0x8000
    assert Color.from_u16(value).to_u16() == value


@pytest.mark.parametrize("value", [0x0000, 0x1234, 0x7FFF, 0x8001, 0xABCD])
def test_packing_is_stable_after_one_pass(value):
    once = Color.from_u16(value).to_u16()
    assert Color.from_u16(once).to_u16() == once


def test_to_rgba_order():
    c = Color(1, 2, 3, 4)
    assert c.to_rgba() == (c.r, c.g, c.b, c.a)