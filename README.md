# smzsync

Building blocks for keeping the items and progress of several SMZ3 players in
step. `smzsync` compares each player's saved-game memory, works out what the
local player is missing, and assembles a short 65816 routine that writes the
missing state into the running game.

## Installation

```
pip install smzsync
```

For the test suite:

```
pip install "smzsync[test]"
pytest
```

## Modules

- `smzsync.asm`: `Emitter`, a small 65816 assembler. Machine code is
  appended to a `bytearray` (`code`) and, if one is given, a readable
  listing is written to an `io.StringIO` (`text`); either may be `None`.
  It tracks the accumulator and index register widths (`Flags`) set by
  `rep`/`sep` or `assume_rep`/`assume_sep`, and raises `RuntimeError` when
  an 8-bit immediate instruction is used in 16-bit mode, or the other way
  round. `clone` and `append` let you assemble a fragment on the side and
  keep it only if it fits.
- `smzsync.observable`: `Observable`, a list of subscriber callables that
  each receive the value passed to `publish`.
- `smzsync.syncable`: sync strategies over one memory location.
  `SyncableBitU8` and `SyncableBitU16` merge bit flags, `SyncableMaxU8`
  takes the highest value (ignoring values above `abs_max`), and
  `SyncableCustomU8` calls your own update function. `MemoryKind` selects
  SRAM or WRAM. Each strategy takes an `enabled` callable, reports through
  `can_update()` whether its previous update has landed, and writes the
  next update into an `Emitter` with `generate_update(emitter)`.
- `smzsync.player`: `Player` and its memory views (`SRAMShadow`, the
  0x500-byte copy of SRAM at `$7EF000`, and `WRAMReadable`, tracked
  `SyncableWRAM` values by offset), plus `Module` for the game's current
  mode.
- `smzsync.bottle`: `SyncableBottle`, which fills an empty bottle slot from
  other players without replacing what a bottle already holds.
- `smzsync.serde`: `Codec`, which decodes player packets into a `Player`
  (`deserialize`, returning `False` for stale frames and raising
  `SerdeError` on bad data) and encodes location, SRAM-range and WRAM
  messages; `Codec.should_update_players_list` is set when decoding changes
  what a players list shows. Also `MessageType`, `read_u24`, `write_u24`
  and the 64-bit FNV-1a `hash64`.
- `smzsync.names`: names of underworld rooms, overworld areas and dungeons
  (`underworld_name`, `overworld_name`, `dungeon_name`, "N/A" when unknown),
  and `player_view_model`, which builds a `PlayerViewModel` row for a player.

## Example

```python
import io

from smzsync.asm import Emitter

a = Emitter(bytearray(), io.StringIO())
a.assume_sep(0x30)          # 8-bit accumulator and index registers
a.lda_imm8_b(0x66)
a.ora_long(0x7EF379)
a.sta_long(0x7EF379)
print(a.code.hex())         # a9660f79f37e8f79f37e
print(a.text.getvalue())
```

A sync strategy needs a game object that provides
`local_syncable_player()`, `remote_syncable_players()` and
`push_notification(text)`; players need a `name` and
`readable_memory(kind)`, as `Player` has. Each round, call `can_update()`
and then `generate_update(emitter)`. The strategy records the notification
it will send, such as `"got Hookshot from alice"`, and pushes it to the game
once the local player's memory shows the new value.

## What it does not do

`smzsync` has no connection to a console or flash cartridge, no network
client or server, no game loop and no ROM patcher. It reads and writes
player state that you hand it and produces code bytes; getting memory from
the game, sending packets and uploading the generated routine are up to the
caller.