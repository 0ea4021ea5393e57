"""Binary encoding of player state exchanged between sync clients."""

from __future__ import annotations

import enum
import logging
import struct
from typing import BinaryIO, Callable

from smzsync.player import Module, Player, SyncableWRAM, WRAMReadable

log = logging.getLogger(__name__)

# Bump whenever the wire format changes incompatibly.
SERIALIZATION_VERSION = 0x13

_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3

_NAME_LENGTH = 20


class SerdeError(Exception):
    """Raised when a message cannot be encoded or decoded."""


class MessageType(enum.IntEnum):
    """Message kinds that may follow a packet header."""

    LOCATION = 1
    SFX = 2
    SPRITES1 = 3
    SPRITES2 = 4
    WRAM = 5
    SRAM = 6
    TILEMAPS = 7
    OBJECTS = 8
    ANCILLAE = 9
    TORCHES = 10
    PVP = 11
    PLAYER_NAME = 12

    MAX = 13


def _read_exact(stream: BinaryIO, n: int, what: str) -> bytes:
    data = stream.read(n)
    if data is None or len(data) != n:
        raise SerdeError(f"error deserializing {what}: unexpected end of data")
    return data


def _unpack(stream: BinaryIO, fmt: str, what: str) -> int:
    size = struct.calcsize(fmt)
    return struct.unpack(fmt, _read_exact(stream, size, what))[0]


def _u8(stream: BinaryIO, what: str) -> int:
    return _unpack(stream, "<B", what)


def _u16(stream: BinaryIO, what: str) -> int:
    return _unpack(stream, "<H", what)


def _i16(stream: BinaryIO, what: str) -> int:
    return _unpack(stream, "<h", what)


def _u32(stream: BinaryIO, what: str) -> int:
    return _unpack(stream, "<I", what)


def read_u24(stream: BinaryIO) -> int:
    """Read a little-endian 24-bit unsigned integer."""
    return int.from_bytes(_read_exact(stream, 3, "u24"), "little")


def write_u24(out: BinaryIO, value: int) -> None:
    """Write the low 24 bits of ``value`` little-endian."""
    out.write((value & 0xFFFFFF).to_bytes(3, "little"))


def hash64(data: bytes) -> int:
    """64-bit FNV-1a hash of ``data``."""
    h = _FNV64_OFFSET
    for b in data:
        h ^= b
        h = (h * _FNV64_PRIME) & 0xFFFFFFFFFFFFFFFF
    return h


class Codec:
    """Decodes remote player packets and encodes the local player's state.

    ``should_update_players_list`` is raised whenever decoding changes
    something shown in the players list (team, location, dungeon, colour, name).
    """

    def __init__(self) -> None:
        self.should_update_players_list = False
        self._handlers: dict[MessageType, Callable[[Player, BinaryIO], None]] = {
            MessageType.LOCATION: self._deserialize_location,
            MessageType.SFX: self._deserialize_sfx,
            MessageType.SPRITES1: self._deserialize_sprites1,
            MessageType.SPRITES2: self._deserialize_sprites2,
            MessageType.WRAM: self._deserialize_wram,
            MessageType.SRAM: self._deserialize_sram,
            MessageType.TILEMAPS: self._deserialize_tilemaps,
            MessageType.OBJECTS: self._deserialize_objects,
            MessageType.ANCILLAE: self._deserialize_ancillae,
            MessageType.TORCHES: self._deserialize_torches,
            MessageType.PVP: self._deserialize_pvp,
            MessageType.PLAYER_NAME: self._deserialize_player_name,
        }

    # --- decoding ------------------------------------------------------

    def deserialize(self, stream: BinaryIO, player: Player) -> bool:
        """Apply a packet body to ``player``.

        Returns False when the packet is discarded as stale, True otherwise.
        """
        version = _u8(stream, "header")
        if version != SERIALIZATION_VERSION:
            raise SerdeError(
                f"serialization version mismatch: {version:#04x} != {SERIALIZATION_VERSION:#04x}"
            )

        team = _u8(stream, "header")
        if team != player.team:
            self.should_update_players_list = True
        player.team = team

        frame = _u8(stream, "header")
        next_frame = frame
        last_frame = player.frame
        if last_frame - next_frame >= 128:
            last_frame -= 256
        if next_frame < last_frame:
            log.info("discard stale frame data (%d < %d)", next_frame, last_frame)
            return False
        player.frame = frame

        while True:
            raw = stream.read(1)
            if not raw:
                break
            msg_type = raw[0]
            if msg_type == 0 or msg_type >= MessageType.MAX:
                raise SerdeError(f"message type {msg_type:#04x} out of bounds")
            self._handlers[MessageType(msg_type)](player, stream)
        return True

    def _deserialize_location(self, p: Player, r: BinaryIO) -> None:
        what = "location"
        p.module = Module(_u8(r, what))
        p.sub_module = _u8(r, what)
        p.sub_sub_module = _u8(r, what)

        last_location = p.location
        try:
            p.location = read_u24(r)
        except SerdeError as exc:
            raise SerdeError(f"error deserializing location: {exc}") from exc
        if p.location & (1 << 16):
            p.dungeon_room = p.location & 0xFFFF
        else:
            p.overworld_area = p.location & 0xFFFF
        if p.location != last_location:
            self.should_update_players_list = True

        p.x = _u16(r, what)
        p.y = _u16(r, what)

        last_dungeon = p.dungeon
        p.dungeon = _u16(r, what)
        if p.dungeon != last_dungeon:
            self.should_update_players_list = True

        p.dungeon_entrance = _u16(r, what)
        p.last_overworld_x = _u16(r, what)
        p.last_overworld_y = _u16(r, what)
        p.x_offs = _i16(r, what)
        p.y_offs = _i16(r, what)

        last_color = p.player_color
        p.player_color = _u16(r, what)
        if p.player_color != last_color:
            self.should_update_players_list = True

        # in-Super-Metroid flag; not tracked
        _u8(r, what)

    def _deserialize_sfx(self, p: Player, r: BinaryIO) -> None:
        r.read(2)

    def _deserialize_sprites1(self, p: Player, r: BinaryIO) -> None:
        length = _u8(r, "sprites")
        for i in range(length):
            spr = _read_exact(r, 6, f"sprite {i}")
            if spr[0] & 0x80:
                # 4bpp graphics: one tile, or four for a 16x16 sprite
                tiles = 4 if (spr[5] >> 1) & 1 else 1
                _read_exact(r, 32 * tiles, f"sprite {i} gfx")
            if spr[5] & 0x80:
                _read_exact(r, 32, f"sprite {i} palette")

    def _deserialize_sprites2(self, p: Player, r: BinaryIO) -> None:
        _read_exact(r, 1, "sprite2")
        self._deserialize_sprites1(p, r)

    def _deserialize_wram(self, p: Player, r: BinaryIO) -> None:
        what = "wram"
        count = _u8(r, what)
        offs_start = _u16(r, what)
        if count > 0 and p.wram is None:
            p.wram = WRAMReadable()
        for i in range(count):
            timestamp = _u32(r, what)
            value = _u16(r, what)
            offs = (offs_start + i) & 0xFFFF
            entry = p.wram.get(offs)
            if entry is None:
                p.wram[offs] = SyncableWRAM(
                    name=f"wram[${offs:04x}]",
                    size=2,
                    timestamp=timestamp,
                    value=value,
                    value_used=value,
                )
            else:
                entry.timestamp = timestamp
                entry.value = value
                entry.value_used = value

    def _deserialize_sram(self, p: Player, r: BinaryIO) -> None:
        what = "sram"
        _read_exact(r, 2, what)
        start = _u16(r, what)
        count = _u16(r, what)
        if start + count > len(p.sram):
            raise SerdeError(
                f"error deserializing sram: range ${start:04x}+{count} exceeds SRAM size"
            )
        p.sram[start:start + count] = _read_exact(r, count, what)

    def _deserialize_tilemaps(self, p: Player, r: BinaryIO) -> None:
        what = "tilemaps"
        _u32(r, what)  # timestamp
        _read_exact(r, 3, what)  # location
        _u8(r, what)  # start
        length = _u8(r, what)
        for _ in range(length):
            offs = _u16(r, what)
            count = _u8(r, what)
            if offs & 0x8000:
                _read_exact(r, 3, what)
            else:
                _read_exact(r, 3 * count, what)

    def _deserialize_objects(self, p: Player, r: BinaryIO) -> None:
        raise SerdeError("objects messages are not supported")

    def _deserialize_ancillae(self, p: Player, r: BinaryIO) -> None:
        what = "ancillae"
        count = _u8(r, what)
        for _ in range(count):
            index = _u8(r, what) & 0x7F
            _read_exact(r, 0x20 if index < 5 else 0x16, what)

    def _deserialize_torches(self, p: Player, r: BinaryIO) -> None:
        count = _u8(r, "torches")
        _read_exact(r, 2 * count, "torches")

    def _deserialize_pvp(self, p: Player, r: BinaryIO) -> None:
        raise SerdeError("pvp messages are not supported")

    def _deserialize_player_name(self, p: Player, r: BinaryIO) -> None:
        raw = _read_exact(r, _NAME_LENGTH, "name")
        name = raw.strip(b" \t\n\r\x00").decode("utf-8", errors="replace")
        if name != p.name:
            p.show_join_message = True
            self.should_update_players_list = True
        p.name = name

    # --- encoding ------------------------------------------------------

    def serialize_location(self, player: Player, out: BinaryIO) -> None:
        """Write a location message for ``player``."""
        p = player
        out.write(struct.pack(
            "<BBBB",
            MessageType.LOCATION,
            int(p.module) & 0xFF,
            p.sub_module & 0xFF,
            p.sub_sub_module & 0xFF,
        ))
        write_u24(out, p.location)
        out.write(struct.pack(
            "<HHHHHHHHHB",
            p.x & 0xFFFF,
            p.y & 0xFFFF,
            p.dungeon & 0xFFFF,
            p.dungeon_entrance & 0xFFFF,
            p.last_overworld_x & 0xFFFF,
            p.last_overworld_y & 0xFFFF,
            p.x_offs & 0xFFFF,
            p.y_offs & 0xFFFF,
            p.player_color & 0xFFFF,
            0,  # not in Super Metroid
        ))

    def serialize_sram(self, player: Player, out: BinaryIO, start: int, end_exclusive: int) -> None:
        """Write an SRAM message carrying ``sram[start:end_exclusive]``."""
        if not 0 <= start <= end_exclusive <= len(player.sram):
            raise SerdeError(
                f"error serializing sram: invalid range ${start:04x}..${end_exclusive:04x}"
            )
        out.write(struct.pack(
            "<BBBHH",
            MessageType.SRAM,
            1 if start == 0 else 0,
            0,  # not in Super Metroid
            start,
            end_exclusive - start,
        ))
        out.write(bytes(player.sram[start:end_exclusive]))

    def serialize_wram(self, player: Player, out: BinaryIO, start: int, count: int) -> None:
        """Write a WRAM message with ``count`` tracked values from offset ``start``."""
        start &= 0xFFFF
        count &= 0xFF
        out.write(struct.pack("<BBH", MessageType.WRAM, count, start))
        end = (start + count) & 0xFFFF
        wram = player.wram or {}
        for offs in range(start, end):
            entry = wram.get(offs)
            timestamp, value = (entry.timestamp, entry.value_used) if entry else (0, 0)
            out.write(struct.pack("<IH", timestamp & 0xFFFFFFFF, value & 0xFFFF))