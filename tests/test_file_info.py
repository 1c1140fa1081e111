import os

import pytest

from dungeonkit.file_info import (
    convert_relative_path,
    dir_file_count,
    dir_info_extraction,
    format_path_entry,
)
from dungeonkit.models import ImagePath


@pytest.fixture
def texture_tree(tmp_path):
    tile = tmp_path / "Texture" / "Terrain" / "Tile"
    tile.mkdir(parents=True)
    for index in range(3):
        (tile / f"Tile{index}.png").write_bytes(b"x")
    attack = tmp_path / "Texture" / "Effect" / "Attack"
    attack.mkdir(parents=True)
    for index in range(2):
        (attack / f"Attack{index}.png").write_bytes(b"x")
    return tmp_path


def test_convert_relative_path_with_start(tmp_path):
    target = tmp_path / "a" / "b.png"
    assert convert_relative_path(target, str(tmp_path)) == os.path.join("a", "b.png")


def test_convert_relative_path_uses_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "dir" / "file.png"
    assert convert_relative_path(str(target)) == os.path.join("dir", "file.png")


def test_dir_file_count_counts_files_and_folders(tmp_path):
    (tmp_path / "a.png").write_bytes(b"")
    (tmp_path / "b.png").write_bytes(b"")
    (tmp_path / "sub").mkdir()
    assert dir_file_count(tmp_path) == 3


def test_dir_file_count_empty(tmp_path):
    assert dir_file_count(tmp_path) == 0


def test_dir_file_count_missing_folder(tmp_path):
    with pytest.raises(FileNotFoundError):
        dir_file_count(tmp_path / "missing")


def test_dir_info_extraction(texture_tree, monkeypatch):
    monkeypatch.chdir(texture_tree)
    infos = dir_info_extraction(texture_tree / "Texture")
    by_state = {info.state_key: info for info in infos}
    assert set(by_state) == {"Tile", "Attack"}
    tile = by_state["Tile"]
    assert tile.obj_key == "Terrain"
    assert tile.count == 3
    assert tile.path == os.path.join("Texture", "Terrain", "Tile", "Tile%d.png")
    attack = by_state["Attack"]
    assert attack.obj_key == "Effect"
    assert attack.count == 2


def test_dir_info_extraction_one_entry_per_folder(texture_tree, monkeypatch):
    monkeypatch.chdir(texture_tree)
    infos = dir_info_extraction(texture_tree / "Texture" / "Terrain" / "Tile")
    assert len(infos) == 1


def test_dir_info_extraction_empty_folder(tmp_path):
    assert dir_info_extraction(tmp_path) == []


def test_format_path_entry():
    entry = ImagePath(obj_key="Terrain", state_key="Tile", path="p/Tile%d.png", count=36)
    assert format_path_entry(entry) == "Terrain|Tile|36|p/Tile%d.png"