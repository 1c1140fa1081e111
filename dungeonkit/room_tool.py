"""Room editor model: effects, enemy line-up, background, and the room file."""

from __future__ import annotations

import os
from typing import Sequence

from .models import Room, RoomEffect
from .serialization import BinaryReader, BinaryWriter, SerializationError, load, save
from .unit_tool import load_units

ENEMY_SLOTS = 4


def find_prefix(items: Sequence[str], prefix: str) -> int | None:
    """Index of the first item starting with ``prefix``, ignoring case.

    The search begins after the first item and wraps round to it last, as a
    list-box search started after index 0 does.
    """
    wanted = prefix.casefold()
    order = list(range(1, len(items))) + ([0] if items else [])
    return next((i for i in order if items[i].casefold().startswith(wanted)), None)


def _write_effect(writer: BinaryWriter, effect: RoomEffect) -> None:
    writer.write_int(effect.effect_amount)
    writer.write_int(effect.effect_length)
    writer.write_int(effect.cond_amount)
    writer.write_wstring(effect.effect_time)
    writer.write_wstring(effect.active_cond)
    writer.write_wstring(effect.effect_target)
    writer.write_wstring(effect.effect)
    writer.write_wstring(effect.effect_name)


def _read_effect(reader: BinaryReader) -> RoomEffect:
    return RoomEffect(
        effect_amount=reader.read_int(),
        effect_length=reader.read_int(),
        cond_amount=reader.read_int(),
        effect_time=reader.read_wstring(),
        active_cond=reader.read_wstring(),
        effect_target=reader.read_wstring(),
        effect=reader.read_wstring(),
        effect_name=reader.read_wstring(),
    )


def save_room(room: Room, path: str | os.PathLike[str]) -> None:
    """Write a room: names, enemy list and effect list, each list count-prefixed."""

    def write(writer: BinaryWriter) -> None:
        writer.write_wstring(room.room_name)
        writer.write_wstring(room.back_image_name)
        writer.write_int(len(room.enemies))
        for enemy in room.enemies:
            writer.write_wstring(enemy)
        writer.write_int(len(room.effects))
        for effect in room.effects:
            _write_effect(writer, effect)

    save(path, write)


def load_room(path: str | os.PathLike[str]) -> Room:
    """Read a room written by :func:`save_room`."""

    def read(reader: BinaryReader) -> Room:
        room = Room(room_name=reader.read_wstring(), back_image_name=reader.read_wstring())
        room.enemies = [reader.read_wstring() for _ in range(reader.read_int())]
        room.effects = [_read_effect(reader) for _ in range(reader.read_int())]
        return room

    return load(path, read)


class RoomEditor:
    """Editing state for one room."""

    def __init__(self) -> None:
        self.room_name = ""
        self.back_image = ""
        self.enemies: list[str] = [""] * ENEMY_SLOTS
        self.effects: dict[str, RoomEffect] = {}
        self.unit_names: list[str] = []

    def effect_names(self) -> list[str]:
        return sorted(self.effects)

    def add_effect(self, effect: RoomEffect) -> None:
        """Add an effect; an effect name already present is rejected."""
        if effect.effect_name in self.effects:
            raise ValueError(f"duplicated name {effect.effect_name!r}")
        self.effects[effect.effect_name] = effect

    def delete_effect(self, name: str) -> RoomEffect | None:
        """Remove and return the named effect, or ``None`` if it is absent."""
        return self.effects.pop(name, None)

    def find_effect(self, prefix: str) -> RoomEffect | None:
        """The effect whose name the list-box prefix search lands on."""
        names = self.effect_names()
        index = find_prefix(names, prefix)
        return None if index is None else self.effects[names[index]]

    def set_enemy(self, slot: int, name: str) -> None:
        """Put a unit name into enemy slot 0 to 3."""
        if not 0 <= slot < ENEMY_SLOTS:
            raise IndexError(f"enemy slot {slot} out of range")
        self.enemies[slot] = name

    def load_units(self, path: str | os.PathLike[str]) -> list[str]:
        """Replace the list of available units with the job names in a unit file."""
        self.unit_names = []
        self.unit_names = [unit.job_name for unit in load_units(path).values()]
        return list(self.unit_names)

    def find_unit(self, prefix: str) -> str | None:
        index = find_prefix(self.unit_names, prefix)
        return None if index is None else self.unit_names[index]

    def build_room(self) -> Room:
        """Snapshot of the edited room, effects in name order."""
        return Room(
            room_name=self.room_name,
            back_image_name=self.back_image,
            enemies=list(self.enemies),
            effects=[self.effects[name] for name in self.effect_names()],
        )

    def save(self, path: str | os.PathLike[str]) -> None:
        save_room(self.build_room(), path)

    def load(self, path: str | os.PathLike[str]) -> Room:
        """Load a room, merging its effects into the ones being edited."""
        room = load_room(path)
        if len(room.enemies) < ENEMY_SLOTS:
            raise SerializationError(
                f"room lists {len(room.enemies)} enemies, {ENEMY_SLOTS} needed"
            )
        self.room_name = room.room_name
        self.back_image = room.back_image_name
        self.enemies = list(room.enemies[:ENEMY_SLOTS])
        for effect in room.effects:
            self.effects[effect.effect_name] = effect
        return room