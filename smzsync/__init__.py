"""Item and progress synchronisation for SMZ3 multiplayer games."""

__version__ = "0.1.0"

__all__ = ["asm", "bottle", "names", "observable", "player", "serde", "syncable"]