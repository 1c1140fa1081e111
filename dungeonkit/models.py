"""Shared constants, enumerations and record types for the game and its editors."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag

WINCX = 800
WINCY = 600

OBJ_NOEVENT = 0
OBJ_DEAD = 1

VK_MAX = 0xFF

TILECX = 130
TILECY = 68

TILEX = 20
TILEY = 30

MIN_STR = 64
MAX_STR = 256


class Gem(IntFlag):
    """Bit flags for collectable gems."""

    RUBY = 0x01
    DIAMOND = 0x02
    SAPPHIRE = 0x04


class TexType(IntEnum):
    """Kind of texture container: one image or a numbered sequence."""

    SINGLE = 0
    MULTI = 1


class ObjId(IntEnum):
    """Object categories used by the game."""

    PLAYER = 0
    BULLET = 1
    MONSTER = 2
    MOUSE = 3
    SHIELD = 4
    UI = 5


# Three floats of position, two floats of size, two option bytes, padded to 4.
_TILE_STRUCT = struct.Struct("<3f2f2B2x")
TILE_SIZE = _TILE_STRUCT.size


@dataclass
class Tile:
    """One isometric map tile: centre position, size, option and image index."""

    pos: tuple[float, float, float] = (0.0, 0.0, 0.0)
    size: tuple[float, float] = (float(TILECX), float(TILECY))
    option: int = 0
    draw_id: int = 0

    def pack(self) -> bytes:
        """Encode the tile as a fixed-size little-endian record."""
        try:
            return _TILE_STRUCT.pack(*self.pos, *self.size, self.option, self.draw_id)
        except struct.error as exc:
            raise ValueError(f"tile cannot be packed: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "Tile":
        """Decode a tile from a record produced by :meth:`pack`."""
        if len(data) != TILE_SIZE:
            raise ValueError(f"tile record must be {TILE_SIZE} bytes, got {len(data)}")
        x, y, z, width, height, option, draw_id = _TILE_STRUCT.unpack(data)
        return cls(pos=(x, y, z), size=(width, height), option=option, draw_id=draw_id)


@dataclass
class UnitData:
    """Combat statistics of a unit class."""

    job_name: str = ""
    max_hp: int = 0
    base_damage: int = 0
    speed: int = 0
    dodge: float = 0.0
    protection: int = 0
    accuracy_modifier: float = 0.0
    critical_hit_chance: float = 0.0
    virtue_chance: float = 0.0


@dataclass
class RoomEffect:
    """A conditional effect that applies inside a room."""

    effect_amount: int = 0
    effect_length: int = 0
    cond_amount: int = 0
    effect_time: str = ""
    active_cond: str = ""
    effect_target: str = ""
    effect: str = ""
    effect_name: str = ""


@dataclass
class Room:
    """A room: background image, enemy line-up and effects."""

    room_name: str = ""
    back_image_name: str = ""
    enemies: list[str] = field(default_factory=list)
    effects: list[RoomEffect] = field(default_factory=list)


@dataclass
class ImagePath:
    """Where an animated texture lives and how many frames it has."""

    obj_key: str = ""
    state_key: str = ""
    path: str = ""
    count: int = 0