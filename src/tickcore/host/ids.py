"""Sound effect and block id tables shared with the host."""

from enum import IntEnum


class Sfx(IntEnum):
    """Sound effect ids. Ids the host does not know play as VOID."""

    VOID = 0
    JUMP = 1
    HOOK_FIRE = 2
    UNGH = 3
    STEP = 4
    STOMP = 5
    BOMB = 6
    POCK = 7
    TOCK = 8

    @classmethod
    def coerce(cls, value: int) -> "Sfx":
        try:
            return cls(int(value))
        except ValueError:
            return cls.VOID


class Block(IntEnum):
    """Block ids as stored in the world."""

    AIR = 0
    DIRT = 1
    GRASS = 2
    STONE = 3
    COAL = 4
    SPRUCE_LOG = 5
    SPRUCE_LEAVES = 6
    DRY_GRASS = 7
    ROOTS = 8
    OBSIDIAN = 9
    OAK_LOG = 10
    OAK_LEAVES = 11
    HEMATITE = 12
    MARBLE_BLOCK = 13
    MARBLE_PILLAR = 14
    MARBLE_BLOCKS = 15
    ACACIA_LEAVES = 16
    BOARDS = 17
    CRYSTALS = 18
    SAKURA_LEAVES = 19
    BIRCH_LOG = 20
    FLOWER_BUSH = 21
    DATE_BUSH = 22
