"""Biome kinds and the climate ranges in which each appears."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

_MIN_ALTITUDE = -15000.0
_MAX_ALTITUDE = 15000.0
_MIN_RAINFALL = 0.0
_MAX_RAINFALL = 13000.0
_MIN_TEMPERATURE = -35.0
_MAX_TEMPERATURE = 30.0

Color = Tuple[int, int, int]


class BiomeType(Enum):
    """The kinds of biome, in their canonical order."""

    IceCap = 0
    Ocean = 1
    Grassland = 2
    Forest = 3
    Taiga = 4
    Tundra = 5
    Desert = 6
    Rainforest = 7

    def __str__(self) -> str:
        return self.name

    @property
    def stats(self) -> BiomeStats:
        return biome_stats(self)


@dataclass(frozen=True)
class BiomeStats:
    """Display name, colour and climate bounds of a biome."""

    name: str
    color: Color
    min_altitude: float
    max_altitude: float
    min_rainfall: float
    max_rainfall: float
    min_temperature: float
    max_temperature: float


_STATS = {
    BiomeType.IceCap: BiomeStats(
        "Ice Cap", (255, 255, 255),
        _MIN_ALTITUDE, _MAX_ALTITUDE,
        _MIN_RAINFALL, _MAX_RAINFALL,
        _MIN_TEMPERATURE, -15.0,
    ),
    BiomeType.Ocean: BiomeStats(
        "Ocean", (28, 66, 84),
        _MIN_ALTITUDE, 0.0,
        _MIN_RAINFALL, _MAX_RAINFALL,
        -15.0, _MAX_TEMPERATURE,
    ),
    BiomeType.Grassland: BiomeStats(
        "Grassland", (167, 177, 84),
        0.0, _MAX_ALTITUDE,
        15.0, 1575.0,
        -5.0, _MAX_TEMPERATURE,
    ),
    BiomeType.Forest: BiomeStats(
        "Forest", (76, 132, 55),
        0.0, _MAX_ALTITUDE,
        1375.0, 2975.0,
        -5.0, _MAX_TEMPERATURE,
    ),
    BiomeType.Taiga: BiomeStats(
        "Taiga", (43, 63, 40),
        0.0, _MAX_ALTITUDE,
        475.0, _MAX_RAINFALL,
        -15.0, -0.0,
    ),
    BiomeType.Tundra: BiomeStats(
        "Tundra ", (139, 139, 128),
        0.0, _MAX_ALTITUDE,
        _MIN_RAINFALL, 725.0,
        -20.0, -0.0,
    ),
    BiomeType.Desert: BiomeStats(
        "Desert ", (253, 225, 171),
        0.0, _MAX_ALTITUDE,
        _MIN_RAINFALL, 275.0,
        -5.0, _MAX_TEMPERATURE,
    ),
    BiomeType.Rainforest: BiomeStats(
        "Rainforest", (59, 103, 43),
        0.0, _MAX_ALTITUDE,
        1775.0, _MAX_RAINFALL,
        -5.0, _MAX_TEMPERATURE,
    ),
}


def biome_stats(biome_type: BiomeType) -> BiomeStats:
    """Return the climate description of ``biome_type``."""
    try:
        return _STATS[biome_type]
    except KeyError:
        raise TypeError(f"not a biome type: {biome_type!r}") from None