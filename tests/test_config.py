import pytest

from chipeight import config


def test_color_packing_matches_constants():
    assert config.color_to_uint32(*config.PIXEL_COLOR_ON) == config.PIXEL_ON_UINT32
    assert config.color_to_uint32(*config.PIXEL_COLOR_OFF) == config.PIXEL_OFF_UINT32


def test_color_packing_byte_order():
    assert config.color_to_uint32(0x12, 0x34, 0x56, 0x78) == 0x12345678


def test_color_channel_out_of_range():
    with pytest.raises(ValueError):
        config.color_to_uint32(256, 0, 0, 0)


def test_on_and_off_colors_pack_to_fixed_values():
    assert config.color_to_uint32(97, 184, 174, 255) == 0x61B8AEFF
    assert config.color_to_uint32(19, 23, 38, 255) == 0x131726FF


def test_color_packing_extremes():
    assert config.color_to_uint32(0, 0, 0, 0) == 0
    assert config.color_to_uint32(255, 255, 255, 255) == 0xFFFFFFFF


@pytest.mark.parametrize(
    "name, value",
    [("1", 0x1), ("4", 0xC), ("q", 0x4), ("r", 0xD), ("x", 0x0), ("v", 0xF)],
)
def test_keypad_key(name, value):
    assert config.keypad_key(name) == value


def test_keypad_key_is_case_insensitive():
    assert config.keypad_key("Q") == config.keypad_key("q")


def test_keypad_key_unbound():
    assert config.keypad_key("p") is None


def test_mapping_covers_every_keypad_value_once():
    assert sorted(config.KEY_MAPPING.values()) == list(range(16))