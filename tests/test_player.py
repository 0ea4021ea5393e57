import pytest

from smzsync.player import Module, Player, SRAMShadow, SyncableWRAM, WRAMReadable
from smzsync.syncable import MemoryKind


@pytest.mark.parametrize("value,expected", [(0x09, True), (0x0B, True), (0x07, False), (0x0A, False)])
def test_module_is_overworld(value, expected):
    assert Module(value).is_overworld() is expected


@pytest.mark.parametrize("value,expected", [(0x07, True), (0x09, False)])
def test_module_is_dungeon(value, expected):
    assert Module(value).is_dungeon() is expected


def test_sram_shadow_bus_address_and_reads():
    sram = SRAMShadow()
    assert len(sram) == 0x500
    assert sram.bus_address(0x379) == 0x7EF379
    sram[0x10] = 0x34
    sram[0x11] = 0x12
    assert sram.read_u8(0x10) == 0x34
    assert sram.read_u16(0x10) == 0x1234


def test_sram_shadow_u16_out_of_range():
    assert SRAMShadow().read_u16(0x500) == 0xFFFF


def test_sram_shadow_wrong_size_rejected():
    with pytest.raises(ValueError):
        SRAMShadow(bytes(10))


def test_wram_readable():
    wram = WRAMReadable()
    wram[0x0400] = SyncableWRAM(name="door", value_used=0x8001)
    assert wram.bus_address(0x0400) == 0x7E0400
    assert wram.read_u16(0x0400) == 0x8001
    assert wram.read_u8(0x0400) == 0x01
    with pytest.raises(KeyError):
        wram.read_u8(0x0500)


def test_readable_memory_kinds():
    p = Player()
    assert p.readable_memory(MemoryKind.SRAM) is p.sram
    assert p.readable_memory(MemoryKind.WRAM) is p.wram
    with pytest.raises(ValueError):
        p.readable_memory("vram")


def test_players_do_not_share_memory():
    a, b = Player(), Player()
    a.sram[0] = 1
    assert b.sram[0] == 0


@pytest.mark.parametrize(
    "module,prior,expected",
    [
        (0x00, 0x00, False),
        (0x06, 0x00, False),
        (0x07, 0x00, True),
        (0x09, 0x00, True),
        (0x14, 0x00, False),
        (0x17, 0x00, False),
        (0x1A, 0x00, True),
        (0x1B, 0x00, False),
        (0x0E, 0x09, True),
        (0x0E, 0x01, False),
        (0x0E, 0x0E, True),
    ],
)
def test_is_in_game(module, prior, expected):
    p = Player(module=Module(module), prior_module=Module(prior))
    assert p.is_in_game() is expected


def test_is_in_dungeon():
    assert Player(module=Module(0x07)).is_in_dungeon() is True
    assert Player(module=Module(0x09)).is_in_dungeon() is False
    assert Player(module=Module(0x09), location=1 << 16).is_in_dungeon() is True
    assert Player(module=Module(0x07)).is_dungeon() is True