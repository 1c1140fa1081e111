"""File formats, an isometric tile map, textures, game objects and editor models for a dungeon role-playing game."""

__version__ = "0.1.0"