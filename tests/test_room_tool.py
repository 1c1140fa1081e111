import struct

import pytest

from dungeonkit.models import Room, RoomEffect, UnitData
from dungeonkit.room_tool import RoomEditor, find_prefix, load_room, save_room
from dungeonkit.serialization import SerializationError
from dungeonkit.unit_tool import dump_units


def _effect(name, amount=5):
    return RoomEffect(
        effect_amount=amount,
        effect_length=2,
        cond_amount=1,
        effect_time="RoundStart",
        active_cond="HpBelow",
        effect_target="Enemy",
        effect="Bleed",
        effect_name=name,
    )


def test_empty_room_bytes(tmp_path):
    path = tmp_path / "room.dat"
    save_room(Room(), path)
    assert path.read_bytes() == struct.pack("<iiii", 0, 0, 0, 0)


def test_room_round_trip(tmp_path):
    path = tmp_path / "room.dat"
    room = Room(
        room_name="Crypt",
        back_image_name="crypt.png",
        enemies=["Bone", "Rabble", "", "Cultist"],
        effects=[_effect("Gloom"), _effect("Miasma", 3)],
    )
    save_room(room, path)
    assert load_room(path) == room


def test_load_room_truncated_raises(tmp_path):
    path = tmp_path / "room.dat"
    save_room(Room(room_name="Crypt"), path)
    path.write_bytes(path.read_bytes()[:-3])
    with pytest.raises(SerializationError):
        load_room(path)


def test_find_prefix_starts_after_first_item():
    items = ["Abc", "Abd", "Xyz"]
    assert find_prefix(items, "ab") == 1
    assert find_prefix(items, "ABC") == 0
    assert find_prefix(items, "q") is None
    assert find_prefix([], "a") is None


def test_add_effect_rejects_duplicate():
    editor = RoomEditor()
    editor.add_effect(_effect("Gloom"))
    with pytest.raises(ValueError):
        editor.add_effect(_effect("Gloom", 9))
    assert editor.effects["Gloom"].effect_amount == 5


def test_delete_and_find_effect():
    editor = RoomEditor()
    editor.add_effect(_effect("Gloom"))
    editor.add_effect(_effect("Miasma"))
    assert editor.find_effect("mia").effect_name == "Miasma"
    assert editor.delete_effect("Miasma").effect_name == "Miasma"
    assert editor.find_effect("mia") is None
    assert editor.delete_effect("Miasma") is None


def test_set_enemy_slot_bounds():
    editor = RoomEditor()
    editor.set_enemy(3, "Cultist")
    assert editor.enemies[3] == "Cultist"
    with pytest.raises(IndexError):
        editor.set_enemy(4, "Cultist")


def test_build_room_orders_effects_by_name():
    editor = RoomEditor()
    editor.add_effect(_effect("Zeal"))
    editor.add_effect(_effect("Ague"))
    room = editor.build_room()
    assert [e.effect_name for e in room.effects] == ["Ague", "Zeal"]
    assert len(room.enemies) == 4


def test_editor_save_load_merges_effects(tmp_path):
    path = tmp_path / "room.dat"
    editor = RoomEditor()
    editor.back_image = "crypt.png"
    for slot, name in enumerate(["A", "B", "C", "D"]):
        editor.set_enemy(slot, name)
    editor.add_effect(_effect("Gloom"))
    editor.save(path)

    other = RoomEditor()
    other.add_effect(_effect("Ague"))
    other.load(path)
    assert other.back_image == "crypt.png"
    assert other.enemies == ["A", "B", "C", "D"]
    assert other.effect_names() == ["Ague", "Gloom"]


def test_load_rejects_short_enemy_list(tmp_path):
    path = tmp_path / "room.dat"
    save_room(Room(enemies=["A"]), path)
    editor = RoomEditor()
    with pytest.raises(SerializationError):
        editor.load(path)
    assert editor.enemies == ["", "", "", ""]


def test_load_units_and_find_unit(tmp_path):
    path = tmp_path / "units.dat"
    dump_units(
        {"Knight": UnitData(job_name="Knight"), "Vestal": UnitData(job_name="Vestal")},
        path,
    )
    editor = RoomEditor()
    assert editor.load_units(path) == ["Knight", "Vestal"]
    assert editor.find_unit("ves") == "Vestal"
    assert editor.find_unit("z") is None