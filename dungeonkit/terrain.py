"""Isometric tile map: layout, picking, scrolling and the tile data file."""

from __future__ import annotations

import os
import re
from typing import Iterable, Sequence

from .models import TILE_SIZE, TILECX, TILECY, TILEX, TILEY, WINCX, WINCY, Tile

DEFAULT_DRAW_ID = 3
SCROLL_SPEED = 300.0

_HALF_W = TILECX / 2.0
_HALF_H = TILECY / 2.0
_GRADIENT = _HALF_H / _HALF_W
_DIGITS = re.compile(r"[0-9]+")


def _trunc_div(a: int, b: int) -> int:
    """Integer division that rounds toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def read_tiles(path: str | os.PathLike[str]) -> list[Tile]:
    """Read every fixed-size tile record stored in ``path``."""
    with open(path, "rb") as stream:
        data = stream.read()
    if len(data) % TILE_SIZE:
        raise ValueError(
            f"{os.fspath(path)!r} ends with a partial tile record "
            f"({len(data) % TILE_SIZE} of {TILE_SIZE} bytes)"
        )
    return [Tile.unpack(data[start:start + TILE_SIZE]) for start in range(0, len(data), TILE_SIZE)]


def write_tiles(path: str | os.PathLike[str], tiles: Iterable[Tile]) -> None:
    """Create or truncate ``path`` and write the tiles as consecutive records."""
    with open(path, "wb") as stream:
        for tile in tiles:
            stream.write(tile.pack())


def update_scroll(
    scroll: Sequence[float], mouse: Sequence[float], time_delta: float
) -> tuple[float, ...]:
    """Return the scroll offset moved toward a mouse that left the window."""
    x, y = float(scroll[0]), float(scroll[1])
    step = SCROLL_SPEED * time_delta
    if mouse[0] < 0.0:
        x += step
    if mouse[0] > WINCX:
        x -= step
    if mouse[1] < 0.0:
        y += step
    if mouse[1] > WINCY:
        y -= step
    return (x, y, *(float(v) for v in scroll[2:]))


def parse_draw_id(name: str) -> int:
    """Extract the image index from a tile image name such as ``Tile12``.

    The first run of digits is used; a name with no digits gives 0.
    """
    match = _DIGITS.search(name)
    return int(match.group()) if match else 0


class Terrain:
    """The map's tiles and the operations the editor and the game run on them."""

    def __init__(self, tiles: Iterable[Tile] | None = None) -> None:
        self.tiles: list[Tile] = list(tiles) if tiles is not None else []

    def __len__(self) -> int:
        return len(self.tiles)

    def initialize(self) -> None:
        """Lay out a fresh staggered grid of default tiles."""
        self.tiles = [
            Tile(
                pos=(TILECX * col + (row % 2) * _HALF_W, _HALF_H * row, 0.0),
                size=(float(TILECX), float(TILECY)),
                option=0,
                draw_id=DEFAULT_DRAW_ID,
            )
            for row in range(TILEY)
            for col in range(TILEX)
        ]

    def _tile(self, index: int) -> Tile:
        if not 0 <= index < len(self.tiles):
            raise IndexError(f"tile index {index} out of range")
        return self.tiles[index]

    @staticmethod
    def _corners(tile: Tile) -> list[tuple[float, float]]:
        x, y = tile.pos[0], tile.pos[1]
        return [(x, y + _HALF_H), (x + _HALF_W, y), (x, y - _HALF_H), (x - _HALF_W, y)]

    def tile_change(self, pos: Sequence[float], draw_id: int) -> int | None:
        """Mark the tile under ``pos`` as blocked with a new image.

        Returns the changed tile's index, or ``None`` when no tile is hit.
        """
        if not 0 <= draw_id <= 0xFF:
            raise ValueError(f"draw id {draw_id} does not fit in a byte")
        index = self.get_tile_index(pos)
        if index is None:
            return None
        tile = self.tiles[index]
        tile.option = 1
        tile.draw_id = draw_id
        return index

    def get_tile_index(self, pos: Sequence[float]) -> int | None:
        """Index of the first tile containing ``pos``, or ``None``."""
        return next(
            (index for index in range(len(self.tiles)) if self.picking_dot(pos, index)),
            None,
        )

    def picking(self, pos: Sequence[float], index: int) -> bool:
        """Test ``pos`` against the four edge lines of a tile's diamond."""
        corners = self._corners(self._tile(index))
        gradients = (-_GRADIENT, _GRADIENT, -_GRADIENT, _GRADIENT)
        px, py = pos[0], pos[1]
        sides = [
            a * px + (cy - a * cx) - py
            for a, (cx, cy) in zip(gradients, corners)
        ]
        return sides[0] > 0 and sides[1] < 0 and sides[2] < 0 and sides[3] > 0

    def picking_dot(self, pos: Sequence[float], index: int) -> bool:
        """Test ``pos`` against a tile's diamond using edge normals."""
        corners = self._corners(self._tile(index))
        px, py = pos[0], pos[1]
        for (ax, ay), (bx, by) in zip(corners, corners[1:] + corners[:1]):
            normal_x, normal_y = -(by - ay), bx - ax
            # Only the sign of the dot product matters, so no normalising.
            if normal_x * (px - ax) + normal_y * (py - ay) > 0.0:
                return False
        return True

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the tiles to a map data file."""
        write_tiles(path, self.tiles)

    def load(self, path: str | os.PathLike[str]) -> None:
        """Replace the tiles with those read from a map data file."""
        self.tiles = read_tiles(path)

    def visible_indices(self, scroll: Sequence[float]) -> list[int]:
        """Indices of the tiles drawn on screen for the given scroll offset."""
        half_h = TILECY // 2
        cull_x = _trunc_div(int(-scroll[0]), TILECX)
        cull_y = _trunc_div(int(-scroll[1]), half_h)
        max_x = WINCX // TILECX
        max_y = WINCY // half_h
        return [
            index
            for row in range(cull_y, cull_y + max_y)
            for col in range(cull_x, cull_x + max_x)
            if 0 <= (index := row * TILEX + col) < len(self.tiles)
        ]