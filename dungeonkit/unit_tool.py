"""Unit class catalogue edited by the unit tool, and its data file."""

from __future__ import annotations

import os
from typing import Mapping

from .models import UnitData
from .serialization import BinaryReader, BinaryWriter, load, save


def _write_unit(writer: BinaryWriter, key: str, unit: UnitData) -> None:
    writer.write_wstring(key)
    writer.write_float(unit.accuracy_modifier)
    writer.write_int(unit.base_damage)
    writer.write_float(unit.critical_hit_chance)
    writer.write_float(unit.dodge)
    writer.write_wstring(unit.job_name)
    writer.write_int(unit.max_hp)
    writer.write_int(unit.protection)
    writer.write_int(unit.speed)
    writer.write_float(unit.virtue_chance)


def _read_unit(reader: BinaryReader) -> tuple[str, UnitData]:
    key = reader.read_wstring()
    unit = UnitData()
    unit.accuracy_modifier = reader.read_float()
    unit.base_damage = reader.read_int()
    unit.critical_hit_chance = reader.read_float()
    unit.dodge = reader.read_float()
    unit.job_name = reader.read_wstring()
    unit.max_hp = reader.read_int()
    unit.protection = reader.read_int()
    unit.speed = reader.read_int()
    unit.virtue_chance = reader.read_float()
    return key, unit


def dump_units(units: Mapping[str, UnitData], path: str | os.PathLike[str]) -> None:
    """Write a count followed by one keyed record per unit, in mapping order."""

    def write(writer: BinaryWriter) -> None:
        writer.write_int(len(units))
        for key, unit in units.items():
            _write_unit(writer, key, unit)

    save(path, write)


def load_units(path: str | os.PathLike[str]) -> dict[str, UnitData]:
    """Read the units written by :func:`dump_units`, keyed as stored."""

    def read(reader: BinaryReader) -> dict[str, UnitData]:
        count = reader.read_int()
        units: dict[str, UnitData] = {}
        for _ in range(count):
            key, unit = _read_unit(reader)
            units[key] = unit
        return units

    return load(path, read)


class UnitCatalog:
    """Unit classes keyed by job name."""

    def __init__(self) -> None:
        self._units: dict[str, UnitData] = {}

    def __len__(self) -> int:
        return len(self._units)

    def __contains__(self, name: str) -> bool:
        return name in self._units

    def add(self, unit: UnitData) -> None:
        """Add a unit; a job name already present is rejected."""
        if unit.job_name in self._units:
            raise ValueError(f"duplicate name {unit.job_name!r}: add failed")
        self._units[unit.job_name] = unit

    def delete(self, name: str) -> UnitData | None:
        """Remove and return the named unit, or ``None`` if it is absent."""
        return self._units.pop(name, None)

    def find(self, name: str) -> UnitData | None:
        """The unit with exactly this name, or ``None``."""
        return self._units.get(name)

    def names(self) -> list[str]:
        """Job names in sorted order."""
        return sorted(self._units)

    def save(self, path: str | os.PathLike[str]) -> None:
        dump_units({name: self._units[name] for name in self.names()}, path)

    def load(self, path: str | os.PathLike[str]) -> None:
        """Replace the catalogue with the units stored in ``path``."""
        self._units.clear()
        self._units.update(load_units(path))