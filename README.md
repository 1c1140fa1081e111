# dungeonkit

This package has the building blocks for an isometric dungeon role-playing game
and its editors. It covers the binary file formats, the diamond-tile map with
point picking, texture bookkeeping, a game object manager, and the data logic
behind the unit and room editors.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `dungeonkit.models` holds the shared constants: window size `WINCX` × `WINCY`,
  tile size `TILECX` × `TILECY`, map size `TILEX` × `TILEY`, and `OBJ_NOEVENT` /
  `OBJ_DEAD`. It also has the `TexType`, `ObjId` and `Gem` enums and the
  dataclasses `Tile`, `UnitData`, `RoomEffect`, `Room` and `ImagePath`.
  `Tile.pack()` and `Tile.unpack()` convert a tile to and from a fixed
  little-endian record of `TILE_SIZE` (24) bytes.
- `dungeonkit.serialization` has `BinaryWriter` and `BinaryReader`. They write
  and read little-endian 32-bit ints, floats, and wide strings. A wide string
  is a character count followed by UTF-16-LE code units.
  - `save(path, function)` creates the file and passes a writer to `function`.
  - `load(path, function)` opens the file and passes a reader to `function`.
  - Both return what `function` returns.
  - An empty path, a file that cannot be opened, or a short or malformed stream
    raises `SerializationError`.
  - `find_all_files(folder)` walks a folder breadth first and returns
    `(name, full path)` pairs.
- `dungeonkit.timer` has `TimeManager`, which measures the seconds between
  frames.
  - It reads `time.perf_counter_ns` by default. You can inject another clock
    and its frequency.
  - Call `initialize()` once. Then each `update()` call returns the seconds
    since the previous one.
- `dungeonkit.terrain` has `Terrain`, a list of tiles.
  - `initialize()` lays out the staggered 20 × 30 grid.
  - `picking()` (edge-line equations) and `picking_dot()` (edge normals) test
    whether a point lies inside a tile's diamond.
  - `get_tile_index()` returns the first tile hit, or `None`.
  - `tile_change()` marks the tile under a point as blocked and sets its image
    index.
  - `save()` and `load()` write and read map files.
  - `visible_indices(scroll)` lists the tiles that fall on screen.
  - Module functions: `read_tiles()`, `write_tiles()`, `update_scroll()` (edge
    scrolling at 300 px/s) and `parse_draw_id()` (the first run of digits in
    a name such as `Tile12`).
- `dungeonkit.textures` loads images with Pillow into `TextureInfo` records.
  - `SingleTexture` holds one image.
  - `MultiTexture` holds numbered frames per state key, loaded from a `%d` path
    pattern.
  - `TextureManager` registers either kind under an object key. Look a texture
    up with `get_texture(obj_key, state_key, count)`.
  - An unreadable image raises `TextureError`.
- `dungeonkit.file_info` has the following functions:
  - `dir_info_extraction(path)` scans a texture folder tree into `ImagePath`
    entries: object key, state key, `...%d.png` pattern and frame count.
  - `format_path_entry()` renders an entry as `obj|state|count|path`.
  - `convert_relative_path()` and `dir_file_count()` are helpers.
- `dungeonkit.objects` has the abstract `GameObject` and `ObjectManager`.
  - `ObjectManager` runs `update`, `late_update` and `render` group by group, in
    the order set by `ObjectGroup`.
  - An object whose `update()` returns `OBJ_DEAD` is released and removed.
- `dungeonkit.unit_tool` has `UnitCatalog`, with `add`, `delete`, `find`,
  `names`, `save` and `load`. A duplicate job name raises `ValueError`. The
  functions `dump_units()` and `load_units()` write and read unit files as a
  dict keyed by name.
- `dungeonkit.room_tool` has `RoomEditor`, which holds effects keyed by name and
  four enemy slots.
  - `find_effect()` and `find_unit()` do a case-insensitive prefix search.
  - `load_units()` fills the list of available unit names from a unit file.
  - `build_room()`, `save()` and `load()` turn the editor state into a `Room`
    and move it to and from a file.
  - The module functions are `save_room()`, `load_room()` and `find_prefix()`.

## Example

```python
from dungeonkit.models import UnitData
from dungeonkit.unit_tool import UnitCatalog, load_units

catalog = UnitCatalog()
catalog.add(UnitData(job_name="Crusader", max_hp=33, base_damage=6, speed=1,
                     dodge=5.0, protection=0, accuracy_modifier=85.0,
                     critical_hit_chance=3.0, virtue_chance=25.0))
catalog.save("units.dat")

for name, unit in load_units("units.dat").items():
    print(name, unit.max_hp)
```

```python
from dungeonkit.terrain import Terrain

terrain = Terrain()
terrain.initialize()
terrain.tile_change((130.0, 0.0, 0.0), 7)
terrain.save("Map.dat")
```

## What this package does not do

The package has no graphics device, no window, no drawing and no game loop or
scene switching. Textures are loaded into memory but never rendered.

The editors exist only as data models. There are no dialogs, list boxes, file
pickers or image previews. Callers pass file paths directly.

There is no command-line program.