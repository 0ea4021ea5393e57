"""Sync strategy for bottle slots: fill empty bottles from other players."""

from __future__ import annotations

from typing import Callable, Optional

from smzsync.asm import Emitter
from smzsync.syncable import MemoryKind, SyncableGame


class SyncableBottle:
    """A bottle slot that is only filled in while locally empty or holding a shroom."""

    def __init__(
        self,
        game: SyncableGame,
        offset: int,
        enabled: Callable[[], bool],
        names: Optional[list[str]] = None,
    ) -> None:
        self.game = game
        self.offset = offset
        self.enabled = enabled
        self.names = names
        self.pending_update = False
        self.updating_to = 0
        self.notification = ""

    def size(self) -> int:
        return 1

    def is_enabled(self) -> bool:
        return bool(self.enabled())

    def can_update(self) -> bool:
        if not self.pending_update:
            return True
        local = self.game.local_syncable_player()
        if local.readable_memory(MemoryKind.SRAM).read_u8(self.offset) != self.updating_to:
            return False
        if self.notification:
            self.game.push_notification(self.notification)
            self.notification = ""
        self.pending_update = False
        return True

    def generate_update(self, asm: Emitter) -> bool:
        game = self.game
        local = game.local_syncable_player()
        local_sram = local.readable_memory(MemoryKind.SRAM)
        initial = local_sram.read_u8(self.offset)
        if initial >= 2:
            # never replace existing bottle contents
            return False

        max_player, max_value = local, initial
        for player in game.remote_syncable_players():
            value = player.readable_memory(MemoryKind.SRAM).read_u8(self.offset)
            if value == 1:
                value = 0
            if value > max_value:
                max_player, max_value = player, value

        if max_value == initial:
            return False

        self.pending_update = True
        self.updating_to = max_value
        self.notification = ""
        if self.names is not None:
            i = max_value - 1
            if 0 <= i < len(self.names) and self.names[i]:
                self.notification = f"got {self.names[i]} from {max_player.name}"
                asm.comment(self.notification + ":")
        if not self.notification:
            asm.comment(f"got bottle value {max_value:#04x} from {max_player.name}:")

        asm.lda_imm8_b(max_value)
        asm.sta_long(local_sram.bus_address(self.offset))
        return True