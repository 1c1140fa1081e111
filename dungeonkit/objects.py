"""Game objects and the manager that runs them group by group."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import ClassVar, Sequence

from .models import OBJ_DEAD

Vector3 = tuple[float, float, float]
Matrix = tuple[tuple[float, float, float, float], ...]

IDENTITY: Matrix = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


class ObjectGroup(IntEnum):
    """Object groups, updated and drawn in this order."""

    TERRAIN = 0
    PLAYER = 1
    EFFECT = 2
    UI = 3


def _vector(values: Sequence[float]) -> Vector3:
    if len(values) != 3:
        raise ValueError(f"expected three components, got {len(values)}")
    return (float(values[0]), float(values[1]), float(values[2]))


class GameObject(ABC):
    """Base of everything the object manager runs.

    ``scroll`` is the camera offset shared by every object.
    """

    scroll: ClassVar[list[float]] = [0.0, 0.0, 0.0]

    def __init__(self) -> None:
        self.pos: Vector3 = (0.0, 0.0, 0.0)
        self.direction: Vector3 = (0.0, 0.0, 0.0)
        self.look: Vector3 = (1.0, 0.0, 0.0)
        self.size: Vector3 = (0.0, 0.0, 0.0)
        self.world: Matrix = IDENTITY
        self.obj_key = ""
        self.state_key = ""

    def set_pos(self, pos: Sequence[float]) -> None:
        self.pos = _vector(pos)

    def set_dir(self, direction: Sequence[float]) -> None:
        """Store the direction as a unit vector; a zero vector stays zero."""
        x, y, z = _vector(direction)
        length = math.sqrt(x * x + y * y + z * z)
        self.direction = (x / length, y / length, z / length) if length else (0.0, 0.0, 0.0)

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the object for its first frame."""

    @abstractmethod
    def update(self) -> int:
        """Advance one frame; return ``OBJ_DEAD`` to be removed."""

    @abstractmethod
    def late_update(self) -> None:
        """Run after every object has updated."""

    @abstractmethod
    def render(self) -> None:
        """Draw the object."""

    @abstractmethod
    def release(self) -> None:
        """Free what the object holds."""


class ObjectManager:
    """Holds objects per group and drives their frame cycle."""

    def __init__(self) -> None:
        self._groups: dict[ObjectGroup, list[GameObject]] = {group: [] for group in ObjectGroup}

    def objects(self, group: ObjectGroup) -> list[GameObject]:
        """A copy of the objects in ``group``, in insertion order."""
        return list(self._groups[ObjectGroup(group)])

    @property
    def terrain(self) -> GameObject | None:
        terrain = self._groups[ObjectGroup.TERRAIN]
        return terrain[0] if terrain else None

    def add_object(self, group: ObjectGroup, obj: GameObject | None) -> None:
        """Add ``obj`` to ``group``; a missing object or unknown group is ignored."""
        if obj is None:
            return
        try:
            key = ObjectGroup(group)
        except ValueError:
            return
        self._groups[key].append(obj)

    def update(self) -> None:
        """Update every object, releasing and dropping those that report death."""
        for group in ObjectGroup:
            survivors: list[GameObject] = []
            for obj in self._groups[group]:
                if obj.update() == OBJ_DEAD:
                    obj.release()
                else:
                    survivors.append(obj)
            self._groups[group] = survivors

    def late_update(self) -> None:
        for group in ObjectGroup:
            for obj in self._groups[group]:
                obj.late_update()

    def render(self) -> None:
        for group in ObjectGroup:
            for obj in self._groups[group]:
                obj.render()

    def release(self) -> None:
        for group in ObjectGroup:
            for obj in self._groups[group]:
                obj.release()
            self._groups[group].clear()