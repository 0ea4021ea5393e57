"""Human-readable names for locations, and the players-list view model."""

from __future__ import annotations

from dataclasses import dataclass

from smzsync.player import Player

NOT_AVAILABLE = "N/A"

# Indexed by dungeon number (WRAM $040C value halved).
DUNGEON_NAMES: tuple[str, ...] = (
    "Sewer Passage", "Hyrule Castle", "Eastern Palace", "Desert Palace",
    "Hyrule Castle 2", "Swamp Palace", "Dark Palace", "Misery Mire",
    "Skull Woods", "Ice Palace", "Tower of Hera", "Gargoyle's Domain",
    "Turtle Rock", "Ganon's Tower", "Extra Dungeon 1", "Extra Dungeon 2",
)

# Supertile names in room order, four per line; None marks an unnamed room.
_UNDERWORLD_BY_ROOM: tuple[str | None, ...] = (
    "Ganon", "HC, N Corridor", "HC, Switch", "Houlihan",
    "TR, Crysta-roller", "Empty Clone", "Swamp, Arrghus[Boss]", "Hera, Moldorm[Boss]",
    "Cave, Healing Fairy", "PoD", "PoD, Stalfos Trap", "PoD, Turtle",
    "GT, Entrance", "GT, Agahnim2[Boss]", "IP, Entrance", "Empty Clone",
    "Ganon Evacuation Route", "HC, Bombable Stock", "Sanctuary", "TR, Hokku-Bokku Key Room 2",
    "TR, Big Key", "TR", "Swamp, Swimming Treadmill", "Hera, Moldorm Fall",
    "Cave", "PoD, Dark Maze", "PoD, Big Chest", "PoD, Mimics",
    "GT, Ice Armos", "GT, Final Hallway", "IP, Bomb Floor", "IP, Big Key",
    "ATower, Agahnim[Boss]", "HC, Key-rat", "HC, Sewer Text Trigger", "TR, W Exit to Balcony",
    "TR, Big chest", "Empty Clone", "Swamp, Statue", "Hera, Big Chest",
    "Swamp, Entrance", "SW, Mothula[Boss]", "PoD, Big Hub", "PoD, Fairy",
    "Cave", "Empty Clone", "IP, Compass", "Cave, Kakariko Well HP",
    "ATower, Maiden Sacrifice Chamber", "Hera, Hardhat Beetles", "HC, Sewer Key Chest",
    "DP, Lanmolas[Boss]",
    "Swamp, Pre-Big Key", "Swamp, Big Key", "Swamp, Big Chest", "Swamp, Water Fill",
    "Swamp, Key Pot", "SW, Mothula Hole", "PoD, Bombable Floor", "PoD, Conveyor",
    "Hookshot Cave", "GT, Torch Room 2", "IP, Conveyor Hellway", "IP, Map Chest",
    "ATower, Final Bridge", "HC, First Dark", "HC, 6 Ropes", "DP, Moving Wall",
    "TT, Big Chest", "TT, Jail Cells", "Swamp, Compass Chest", "Empty Clone",
    "Empty Clone", "SW, Gibdo Torch Puzzle", "PoD, Entrance", "PoD, S Mimics",
    "GT, Mini-Helmasaur Conveyor", "GT, Moldorm", "IP, Bomb-Jump", "IP Clone Room, Fairy",
    "HC, W Corridor", "HC, Throne", "HC, East Corridor", "DP, Popos 2",
    "Swamp, Upstairs Pits", "Secret Passage", "SW, Key Pot", "SW, Big Key",
    "SW, Big Chest", "SW, Final Section Entrance", "PoD, Helmasaur King[Boss]", "GT, Spike Pit",
    "GT, Ganon-Ball Z", "GT, Gauntlet 1/2/3", "IP, Lonely Firebar", "IP, Spike Floor",
    "HC, W Entrance", "HC, Main Entrance", "HC, East Entrance", "DP, Final Section Entrance",
    "TT, W Attic", "TT, East Attic", "Swamp, Hidden Chest", "SW, Compass Chest",
    "SW, Key Chest", "Empty Clone", "PoD, Rupee", "GT, Mimics Rooms",
    "GT, Lanmolas", "GT, Gauntlet 4/5", "IP, Pengators", "Empty Clone",
    "HC, Pre Jail Cells", "HC, Boomerang Chest", "HC, Map Chest", "DP, Big Chest",
    "DP, Map Chest", "DP, Big Key Chest", "Swamp, Water Drain", "Hera, Entrance",
    "Empty Clone", "Empty Clone", "Empty Clone", "GT",
    "GT, Exploding Wall", "GT, Warp Maze", "IP, Bombable Floor", "IP,  Big Spike Traps",
    "HC, Jail Cell", "HC", "HC, Basement Chasm", "DP, W Entrance",
    "DP, Main Entrance", "DP, East Entrance", "Empty Clone", "Hera, Tile",
    "Empty Clone", "EP, Fairy", "Empty Clone", "GT, Spike Skip",
    "GT, Big Chest", "GT, Torches 2", "IP", "Empty Clone",
    "Mire, Vitreous[Boss]", "Mire, Final Switch", "Mire, Switches", "Mire, Floor Switch Puzzle",
    "Empty Clone", "GT, Final Collapsing Bridge", "GT, Torches 1", "Mire, Torch Puzzle",
    "Mire, Entrance", "EP, Eyegore Key", "Empty Clone", "GT, Warp Maze",
    "GT, Invisible Floor Maze", "GT, Invisible Floor", "IP, Big Chest", "IP",
    "Mire, Pre-Vitreous", "Mire, Fish", "Mire, Bridge Key Chest", "Mire",
    "TR, Trinexx[Boss]", "GT, Wizzrobes Rooms", "GT, Moldorm Fall", "Hera, Fairy",
    "EP, Stalfos Spawn", "EP, Big Chest", "EP, Map Chest", "TT, Key Pot",
    "TT, Blind The Thief[Boss]", "Empty Clone", "IP", "IP, Ice Bridge",
    "ATower, Circle of Pots", "Mire, Hourglass", "Mire, Slug", "Mire, Spike Key Chest",
    "TR, Pre-Trinexx", "TR, Dark Maze", "TR, Chain Chomps", "TR, Roller",
    "EP, Big Key", "EP, Lobby Cannonballs", "EP, Key Pot", "TT, Hellway",
    "TT, Conveyor Toilet", "Empty Clone", "IP, Block Puzzle", "IP Clone Room, Switch",
    "ATower, Dark Bridge", "Mire, Tile", "Mire, Big Hub", "Mire, Big Chest",
    "TR, Last Switch Puzzle", "TR, Laser Bridge", "TR", "TR, Torch Puzzle",
    "EP, Armos Knights[Boss]", "EP, Entrance", "??", "TT, NW Entrance",
    "TT, NE Entrance", "Empty Clone", "IP, Hole to Kholdstare", "Empty Clone",
    "ATower, Dark Maze", "Mire, Big Key", "Mire, Mire02", "Empty Clone",
    "Empty Clone", "TR, Laser Key", "TR, Entrance", "Empty Clone",
    "EP, Zeldagamer", "EP, Canonball", "EP", "TT, Main SW Entrance",
    "TT, SE Entrance", "Empty Clone", "IP, Kholdstare[Boss]", "Cave",
    "ATower, Entrance", "Cave, Lost Woods HP", "Cave, Lumberjack's Tree HP", "Cave, 1/2 Magic",
    "Cave, Old Man Cave", "Cave, Old Man Cave", "Cave", "Cave",
    "Cave", "Empty Clone", "Cave, Spectacle Rock HP", "Cave",
    "Empty Clone", "Cave", "Cave, Spiral Cave", "Cave, 5 Chests",
    "Cave, Old Man Starting Cave", "Cave, Old Man Starting Cave", "House", "House, Old Woman",
    "House, Angry Brothers", "House, Angry Brothers", "Empty Clone", "Empty Clone",
    "Cave", "Cave", "Cave", "Cave",
    "Empty Clone", "Cave", "Cave", "Cave",
    "Forest Chest Game", "House", "Sick Kid", "Kakariko Tavern",
    "Link's House", "Sahasrahla's Hut", "Brewery or Chest Game", "Library",
    "Chicken House", "Magic Shop", "Aginah's Cave", "Floodgate",
    "Mimic Cave", "Mire Shed", "Cave, Bird Guy", "House",
    "House", "Arrow Game", "Dark Sanctuary", "King's Tomb",
    "Waterfall Fairy", "Cave, Healing Fairy", "Pyramid Fairy", "Spike Cave",
    "Chest Game", "Blind's Hideout", "House, Dark Hedge Maze", "Cave 45 or Graveyard Cave",
    "C-Shaped House", "Blind's Hideout Basement", "Hype Cave", "Lumberjack House",
    "Ice Rod Cave", "Dwarves House", None, "Mini Moldorm Cave",
    "Bonk Rock Cave", "Desert Cave", "Checkerboard Cave", "Peg Cave",
)

UNDERWORLD_NAMES: dict[int, str] = {
    room: name for room, name in enumerate(_UNDERWORLD_BY_ROOM) if name is not None
}

_OVERWORLD_AREAS: tuple[tuple[int, str], ...] = (
    (0x00, "Lost Woods"), (0x02, "NE House"), (0x03, "Spectacle Rock"),
    (0x05, "Death Mountain East"), (0x07, "TR"), (0x0A, "Death Mountain Cave"),
    (0x0F, "Waterfall Near Zora's Domain"), (0x10, "Lost Woods Entrance"),
    (0x11, "Fortune Teller's House"), (0x12, "Teleport Lake"), (0x13, "Sanctuary"),
    (0x14, "Cemetary"), (0x15, "River Area"), (0x16, "Witch's Hut"),
    (0x17, "Another Waterfall"), (0x18, "Kakariko Village"), (0x1A, "Another Forest"),
    (0x1B, "HC"), (0x1D, "Bridge Near Castle"), (0x1E, "EP"),
    (0x22, "Blacksmiths' House"), (0x25, "Octorok Area"), (0x28, "Fencepost Maze"),
    (0x29, "Kakariko Library"), (0x2A, "Haunted Grove"), (0x2B, "Before Flute Area"),
    (0x2C, "Link's House"), (0x2D, "Bridge to HC"), (0x2E, "S of EP"),
    (0x2F, "Peg Circle"), (0x30, "Desert of Mystery"), (0x32, "Bluffs Near Desert"),
    (0x33, "Near the Swamp"), (0x34, "Great Swamp N"), (0x35, "Lake Hylia"),
    (0x37, "Ice Rod Cave"), (0x3A, "Sleeping Man Area"), (0x3B, "Great Swamp S"),
    (0x3C, "Great Swamp SE"), (0x3F, "Lake Hylia SE"), (0x40, "SW"),
    (0x42, "NE House"), (0x43, "GT"), (0x45, "Death Mountain East"),
    (0x47, "TR"), (0x4A, "Magic Cape Cave"), (0x4F, "Mysterious Pond"),
    (0x50, "Outside SW"), (0x51, "Fortune Teller's House"), (0x52, "Small Lake"),
    (0x53, "Dark Sanctuary"), (0x54, "Dark Graveyard"), (0x55, "Dark Waterway"),
    (0x56, "Dark Witch's Hut"), (0x57, "Dark Lake Hylia Shore"), (0x58, "TT"),
    (0x5A, "House I've Never Seen"), (0x5B, "Pyramid of Power"), (0x5D, "Broken Bridge"),
    (0x5E, "Hedge Maze"), (0x62, "Locked Chest House"), (0x65, "Octorok Area"),
    (0x68, "Shovel Game"), (0x69, "Arrow Game"), (0x6A, "Haunted Grove"),
    (0x6B, "Outside Haunted Grove"), (0x6C, "Dark Link's House"), (0x6D, "Peg Bridge"),
    (0x6E, "Outside Hedge Maze"), (0x6F, "Dark Peg Circle"), (0x70, "Mire"),
    (0x72, "Outside Mire"), (0x73, "Outside Dark Swamp"), (0x74, "Dark Swamp N"),
    (0x75, "Frozen Lake Hylia"), (0x77, "Black Ice Cave"), (0x7A, "Dark Sleeping Man"),
    (0x7B, "Swamp"), (0x7C, "Dark Swamp SE"), (0x7F, "Dark Waterfall"),
    (0x80, "Unknown 1, Master Sword Area"), (0x88, "Unknown 2"), (0x93, "Unknown 3"),
    (0x94, "Unknown 4, Master Sword Area"), (0x95, "Unknown 5, Zora's Domain"),
    (0x96, "Unknown 6"), (0x97, "Unknown 7"), (0x9C, "Unknown 8"), (0x9D, "Unknown 9"),
    (0x9E, "Unknown 10, Lost Woods Overlay"), (0x9F, "Unknown 11, Rain"),
)

OVERWORLD_NAMES: dict[int, str] = dict(_OVERWORLD_AREAS)


def underworld_name(room: int) -> str:
    """Name of an underworld supertile, or "N/A" if unknown."""
    return UNDERWORLD_NAMES.get(room, NOT_AVAILABLE)


def overworld_name(area: int) -> str:
    """Name of an overworld area, or "N/A" if unknown."""
    return OVERWORLD_NAMES.get(area, NOT_AVAILABLE)


def dungeon_name(dungeon: int) -> str:
    """Name of the dungeon for a WRAM $040C dungeon value (twice the dungeon number)."""
    number = (dungeon & 0xFFFF) >> 1
    if number < len(DUNGEON_NAMES):
        return DUNGEON_NAMES[number]
    return NOT_AVAILABLE


@dataclass
class PlayerViewModel:
    """A row of the players list shown to the user."""

    index: int
    team: int
    name: str
    color: int
    location: int
    overworld: str
    underworld: str
    dungeon_name: str


def player_view_model(player: Player) -> PlayerViewModel:
    """Build the players-list entry for ``player``."""
    name = player.name or f"player #{player.index:02x}"
    return PlayerViewModel(
        index=player.index,
        team=int(player.team),
        name=name,
        color=player.player_color,
        location=int(player.location),
        overworld=overworld_name(player.overworld_area),
        underworld=underworld_name(player.dungeon_room),
        dungeon_name=dungeon_name(player.dungeon),
    )