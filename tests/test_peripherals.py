import pytest

from chipeight import config
from chipeight.peripherals import Peripherals, PixelError, beep_samples


def test_pixels_start_off():
    p = Peripherals()
    assert not any(p.check_pixel(x, 0) for x in range(config.PIXEL_WIDTH))


def test_set_and_check_pixel():
    p = Peripherals()
    p.set_pixel(3, 4, True)
    assert p.check_pixel(3, 4)
    assert p.pixel_buffer[4 * config.PIXEL_WIDTH + 3] == config.PIXEL_ON_UINT32
    p.set_pixel(3, 4, False)
    assert not p.check_pixel(3, 4)
    assert p.pixel_buffer[4 * config.PIXEL_WIDTH + 3] == config.PIXEL_OFF_UINT32


def test_corner_pixel():
    p = Peripherals()
    p.set_pixel(config.PIXEL_WIDTH - 1, config.PIXEL_HEIGHT - 1, True)
    assert p.pixel_buffer[-1] == config.PIXEL_ON_UINT32


@pytest.mark.parametrize(
    "x, y", [(config.PIXEL_WIDTH, 0), (0, config.PIXEL_HEIGHT), (-1, 0)]
)
def test_pixel_out_of_range(x, y):
    p = Peripherals()
    with pytest.raises(PixelError):
        p.set_pixel(x, y, True)
    with pytest.raises(PixelError):
        p.check_pixel(x, y)


def test_clear_pixel_buffer():
    p = Peripherals()
    p.set_pixel(1, 1, True)
    p.clear_pixel_buffer()
    assert set(p.pixel_buffer) == {config.PIXEL_OFF_UINT32}
    assert len(p.pixel_buffer) == config.PIXEL_WIDTH * config.PIXEL_HEIGHT


def test_press_and_release_key():
    p = Peripherals()
    p.press_key(0xA)
    assert p.key_state[0xA]
    assert p.input_flag
    assert p.last_key == 0xA
    p.release_key(0xA)
    assert not p.key_state[0xA]
    assert p.last_key == 0xA


def test_key_out_of_range():
    p = Peripherals()
    with pytest.raises(ValueError):
        p.press_key(16)
    with pytest.raises(ValueError):
        p.release_key(-1)


def test_beep_samples_length_and_start():
    samples = beep_samples(config.AUDIO_BUFFER_SIZE)
    assert len(samples) == config.AUDIO_BUFFER_SIZE
    assert samples[0] == 0


def test_beep_samples_empty():
    assert beep_samples(0) == b""


def test_beep_samples_is_deterministic_prefix():
    assert beep_samples(100) == beep_samples(200)[:100]