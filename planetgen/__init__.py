"""Procedural planet generation with terrain, climate, biomes and saving."""

__version__ = "0.3.1"