import io

from smzsync.asm import Emitter
from smzsync.bottle import SyncableBottle
from smzsync.player import Player

NAMES = ["Shroom", "Empty Bottle", "Red Potion", "Green Potion", "Blue Potion", "Fairy", "Bee", "Good Bee"]
OFFSET = 0x35C


class FakeGame:
    def __init__(self, local, remotes):
        self.local = local
        self.remotes = remotes
        self.notifications = []

    def local_syncable_player(self):
        return self.local

    def remote_syncable_players(self):
        return list(self.remotes)

    def push_notification(self, notification):
        self.notifications.append(notification)


def setup(local_value, remote_value, names=NAMES):
    local = Player(index=0, name="local")
    remote = Player(index=1, name="remote")
    local.sram[OFFSET] = local_value
    remote.sram[OFFSET] = remote_value
    game = FakeGame(local, [remote])
    return game, local, SyncableBottle(game, OFFSET, lambda: True, names)


def make_asm():
    a = Emitter(bytearray(), io.StringIO())
    a.assume_sep(0x30)
    return a


def test_fills_empty_bottle():
    game, local, s = setup(0, 3)
    a = make_asm()
    assert s.generate_update(a) is True
    assert s.notification == "got Red Potion from remote"
    expected = Emitter(bytearray())
    expected.assume_sep(0x30)
    expected.lda_imm8_b(3)
    expected.sta_long(local.sram.bus_address(OFFSET))
    assert bytes(a.code) == bytes(expected.code)


def test_existing_contents_not_replaced():
    game, local, s = setup(2, 6)
    a = make_asm()
    assert s.generate_update(a) is False
    assert bytes(a.code) == b""


def test_shroom_is_ignored():
    game, local, s = setup(0, 1)
    assert s.generate_update(make_asm()) is False
    assert s.pending_update is False


def test_unnamed_value_comments_raw_value():
    game, local, s = setup(0, 9)
    a = make_asm()
    assert s.generate_update(a)
    assert s.notification == ""
    assert "got bottle value 0x09 from remote:" in a.text.getvalue()


def test_can_update_waits_for_write():
    game, local, s = setup(0, 6)
    assert s.can_update() is True
    assert s.generate_update(make_asm())
    assert s.can_update() is False
    local.sram[OFFSET] = s.updating_to
    assert s.can_update() is True
    assert game.notifications == ["got Fairy from remote"]


def test_size_and_enabled():
    game, local, s = setup(0, 0)
    assert s.size() == 1
    assert s.is_enabled() is True
    off = SyncableBottle(game, OFFSET, lambda: False, NAMES)
    assert off.is_enabled() is False