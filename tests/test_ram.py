import pytest

from chipeight import config
from chipeight.ram import RAM


def test_new_memory_is_zeroed():
    ram = RAM()
    assert all(ram.read(a) == 0 for a in range(config.MEMORY_SIZE))


def test_write_read_round_trip():
    ram = RAM()
    ram.write(0x300, 0xAB)
    assert ram.read(0x300) == 0xAB


def test_write_keeps_low_byte():
    ram = RAM()
    ram.write(10, 0x1FF)
    assert ram.read(10) == 0xFF


@pytest.mark.parametrize("address", [config.MEMORY_SIZE, -1])
def test_out_of_range_access(address):
    ram = RAM()
    with pytest.raises(IndexError):
        ram.read(address)
    with pytest.raises(IndexError):
        ram.write(address, 1)


def test_erase():
    ram = RAM()
    ram.write(5, 7)
    ram.erase()
    assert ram.read(5) == 0


def test_load_bytes_places_data():
    ram = RAM()
    ram.load_bytes(b"\x01\x02\x03", 0x200)
    assert [ram.read(a) for a in range(0x1FF, 0x204)] == [0, 1, 2, 3, 0]


def test_load_bytes_up_to_end_of_memory():
    ram = RAM()
    ram.load_bytes(b"\xEE\xFF", config.MEMORY_SIZE - 2)
    assert ram.read(config.MEMORY_END_ADDRESS) == 0xFF


def test_load_bytes_too_large():
    ram = RAM()
    with pytest.raises(IndexError):
        ram.load_bytes(b"\x00\x00", config.MEMORY_SIZE - 1)


def test_load_file(tmp_path):
    rom = tmp_path / "game.ch8"
    rom.write_bytes(b"\x60\x0A\x12\x00")
    ram = RAM()
    ram.load_file(rom, config.PROGRAM_START_ADDRESS)
    assert [ram.read(config.PROGRAM_START_ADDRESS + i) for i in range(4)] == [0x60, 0x0A, 0x12, 0x00]


def test_load_file_default_address(tmp_path):
    rom = tmp_path / "font.ch8"
    rom.write_bytes(b"\xF0\x90")
    ram = RAM()
    ram.load_file(rom)
    assert (ram.read(0), ram.read(1)) == (0xF0, 0x90)


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        RAM().load_file(tmp_path / "missing.ch8")


def test_load_file_too_large(tmp_path):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(bytes(config.MEMORY_SIZE))
    with pytest.raises(IndexError):
        RAM().load_file(rom, 1)


def test_dump_lists_only_nonzero_bytes():
    ram = RAM()
    ram.write(0x201, 0x2A)
    text = ram.dump(0x200, 4)
    assert text == "Memdump -- Addr 0200, 4 bytes\n0201: 2A\n"