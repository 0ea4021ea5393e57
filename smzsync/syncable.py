"""Generic strategies for merging one memory value across players."""

from __future__ import annotations

import enum
from typing import Callable, Optional, Protocol, Sequence

from smzsync.asm import Emitter


class MemoryKind(enum.Enum):
    """Which memory region a syncable value lives in."""

    SRAM = 0
    WRAM = 1


class ReadableMemory(Protocol):
    def bus_address(self, offs: int) -> int: ...

    def read_u8(self, offs: int) -> int: ...

    def read_u16(self, offs: int) -> int: ...


class SyncablePlayer(Protocol):
    name: str

    def readable_memory(self, kind: MemoryKind) -> ReadableMemory: ...


class SyncableGame(Protocol):
    def local_syncable_player(self) -> SyncablePlayer: ...

    def remote_syncable_players(self) -> Sequence[SyncablePlayer]: ...

    def push_notification(self, notification: str) -> None: ...


PlayerPredicate = Callable[[SyncablePlayer], bool]
Enabled = Callable[[], bool]


def player_predicate_identity(player: SyncablePlayer) -> bool:
    """Accept every player."""
    return True


class _PendingSync:
    """Shared bookkeeping: wait for a generated update to land, then notify."""

    _SIZE = 1

    def __init__(self, game: SyncableGame, offset: int, enabled: Enabled) -> None:
        self.game = game
        self.offset = offset
        self.memory_kind = MemoryKind.SRAM
        self.enabled = enabled
        self.pending_update = False
        self.updating_to = 0
        self.notification = ""

    def size(self) -> int:
        return self._SIZE

    def is_enabled(self) -> bool:
        return bool(self.enabled())

    def _read_local(self) -> int:
        memory = self.game.local_syncable_player().readable_memory(self.memory_kind)
        return memory.read_u8(self.offset)

    def _update_landed(self) -> bool:
        return self._read_local() == self.updating_to

    def can_update(self) -> bool:
        """Report whether a previously generated update has completed."""
        if not self.pending_update:
            return True
        if not self._update_landed():
            return False
        if self.notification:
            self.game.push_notification(self.notification)
            self.notification = ""
        self.pending_update = False
        return True


class _BitSync(_PendingSync):
    """OR together the bits every accepted player has set."""

    _BITS = 8
    _MASK = 0xFF

    def __init__(self, game, offset, enabled, names, on_updated) -> None:
        super().__init__(game, offset, enabled)
        self.sync_mask = self._MASK
        self.bit_names: Optional[list[str]] = names
        self.player_predicate: Optional[PlayerPredicate] = None
        self.generate_asm: Optional[Callable] = None
        self.on_updated: Optional[Callable] = on_updated

    def _read(self, player: SyncablePlayer) -> int:
        return player.readable_memory(self.memory_kind).read_u8(self.offset)

    def _describe(self, long_addr: int, new_bits: int) -> str:
        return f"u8 [${long_addr:06x}] |= 0b{new_bits:08b}"

    def _emit_default(self, asm: Emitter, new_bits: int) -> None:
        asm.lda_imm8_b(new_bits)

    def _accepts(self, player: SyncablePlayer) -> bool:
        return self.player_predicate is None or self.player_predicate(player)

    def generate_update(self, asm: Emitter) -> bool:
        """Emit code that sets bits other players have; return whether any was emitted."""
        game = self.game
        local = game.local_syncable_player()
        if not self._accepts(local):
            return False

        initial = self._read(local)
        received_from = [""] * self._BITS
        updated = initial
        for player in game.remote_syncable_players():
            if not self._accepts(player):
                continue
            value = self._read(player) & self.sync_mask
            fresh = value & ~updated & self._MASK
            for bit in range(self._BITS):
                if fresh >> bit & 1:
                    received_from[bit] = player.name
            updated |= value

        if updated == initial:
            return False

        self.pending_update = True
        self.updating_to = updated
        self.notification = ""

        long_addr = local.readable_memory(self.memory_kind).bus_address(self.offset)
        new_bits = updated & ~initial & self._MASK

        if self.bit_names is not None:
            received = [
                f"{name} from {received_from[bit]}"
                for bit, name in enumerate(self.bit_names[: self._BITS])
                if name and not initial >> bit & 1 and updated >> bit & 1
            ]
            if received:
                self.notification = "got " + ", ".join(received)
                asm.comment(self.notification + ":")
        if not self.notification:
            asm.comment(self._describe(long_addr, new_bits))

        if self.generate_asm is not None:
            self.generate_asm(self, asm, initial, updated, new_bits)
        else:
            self._emit_default(asm, new_bits)
            asm.ora_long(long_addr)
            asm.sta_long(long_addr)

        if self.on_updated is not None:
            self.on_updated(self, asm, initial, updated)

        return True


class SyncableBitU8(_BitSync):
    """An 8-bit value whose set bits are merged from every player."""

    def __init__(self, game, offset, enabled, names=None, on_updated=None) -> None:
        super().__init__(game, offset, enabled, names, on_updated)

    def size(self) -> int:
        return 1

    def is_enabled(self) -> bool:
        return bool(self.enabled())

    def can_update(self) -> bool:
        """Report whether a previously generated update has completed."""
        return super().can_update()

    def generate_update(self, asm: Emitter) -> bool:
        """Emit code that sets bits other players have; return whether any was emitted."""
        return super().generate_update(asm)

    def _update_landed(self) -> bool:
        memory = self.game.local_syncable_player().readable_memory(MemoryKind.SRAM)
        return memory.read_u8(self.offset) == self.updating_to


class SyncableBitU16(_BitSync):
    """A 16-bit value whose set bits are merged from every player."""

    _SIZE = 2
    _BITS = 16
    _MASK = 0xFFFF

    def __init__(self, game, offset, enabled, names=None, on_updated=None) -> None:
        super().__init__(game, offset, enabled, names, on_updated)
        self.player_predicate = player_predicate_identity

    def size(self) -> int:
        return 2

    def is_enabled(self) -> bool:
        return bool(self.enabled())

    def can_update(self) -> bool:
        """Report whether a previously generated update has completed."""
        return super().can_update()

    def generate_update(self, asm: Emitter) -> bool:
        """Emit code that sets bits other players have; return whether any was emitted."""
        return super().generate_update(asm)

    def _read_local(self) -> int:
        memory = self.game.local_syncable_player().readable_memory(self.memory_kind)
        return memory.read_u16(self.offset)

    def _read(self, player: SyncablePlayer) -> int:
        return player.readable_memory(self.memory_kind).read_u16(self.offset)

    def _describe(self, long_addr: int, new_bits: int) -> str:
        return f"u16[${long_addr:06x}] |= 0b{new_bits:016b}"

    def _emit_default(self, asm: Emitter, new_bits: int) -> None:
        asm.lda_imm16_w(new_bits)


class SyncableMaxU8(_PendingSync):
    """An 8-bit value that takes the highest value any player has."""

    def __init__(self, game, offset, enabled, names=None, on_updated=None) -> None:
        super().__init__(game, offset, enabled)
        self.abs_max = 255
        self.value_names: Optional[list[str]] = names
        self.player_predicate: Optional[PlayerPredicate] = None
        self.generate_asm: Optional[Callable] = None
        self.on_updated: Optional[Callable] = on_updated

    def size(self) -> int:
        return 1

    def is_enabled(self) -> bool:
        return bool(self.enabled())

    def can_update(self) -> bool:
        """Report whether a previously generated update has completed."""
        return super().can_update()

    def _accepts(self, player: SyncablePlayer) -> bool:
        return self.player_predicate is None or self.player_predicate(player)

    def generate_update(self, asm: Emitter) -> bool:
        """Emit code raising the local value to the remote maximum, if higher."""
        game = self.game
        local = game.local_syncable_player()
        if not self._accepts(local):
            return False

        local_memory = local.readable_memory(self.memory_kind)
        initial = local_memory.read_u8(self.offset)
        max_player, max_value = local, initial
        for player in game.remote_syncable_players():
            if not self._accepts(player):
                continue
            value = player.readable_memory(self.memory_kind).read_u8(self.offset)
            if value > self.abs_max:
                continue
            if value > max_value:
                max_player, max_value = player, value

        if max_value == initial:
            return False

        self.pending_update = True
        self.updating_to = max_value
        self.notification = ""
        if self.value_names is not None:
            i = max_value - 1
            if 0 <= i < len(self.value_names) and self.value_names[i]:
                self.notification = f"got {self.value_names[i]} from {max_player.name}"
                asm.comment(self.notification + ":")
        if not self.notification:
            asm.comment(f"sram[${self.offset:04x}] = ${max_value:02x}")

        if self.generate_asm is not None:
            self.generate_asm(self, asm, initial, max_value)
        else:
            asm.lda_imm8_b(max_value)
            asm.sta_long(local_memory.bus_address(self.offset))

        if self.on_updated is not None:
            self.on_updated(self, asm, initial, max_value)

        return True


class SyncableCustomU8(_PendingSync):
    """An 8-bit value whose update code is produced by a caller-supplied function."""

    def __init__(self, game, offset, enabled, custom_update) -> None:
        super().__init__(game, offset, enabled)
        self.custom_update: Callable[[SyncableCustomU8, Emitter], bool] = custom_update
        self.is_update_still_pending: Optional[Callable[[SyncableCustomU8], bool]] = None

    def size(self) -> int:
        return 1

    def is_enabled(self) -> bool:
        return bool(self.enabled())

    def can_update(self) -> bool:
        """Report whether a previously generated update has completed."""
        return super().can_update()

    def _update_landed(self) -> bool:
        if self.is_update_still_pending is not None:
            return not self.is_update_still_pending(self)
        return self._read_local() == self.updating_to

    def generate_update(self, asm: Emitter) -> bool:
        return bool(self.custom_update(self, asm))