"""The planet's terrain grid and queries about its cells."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from planetgen import perlin
from planetgen.biome import BiomeType
from planetgen.math_util import CartesianError, Vec2

_U32_MAX = 2**32 - 1
_F32_MIN = -3.4028234663852886e38


class WorldGenError(Exception):
    """Raised when world generation fails."""

    def __init__(self, error: CartesianError) -> None:
        self.error = error
        super().__init__(str(error))
        self.__cause__ = error


class CompassDirection(Enum):
    """The eight directions towards a cell's neighbours."""

    North = 0
    NorthEast = 1
    East = 2
    SouthEast = 3
    South = 4
    SouthWest = 5
    West = 6
    NorthWest = 7


@dataclass
class TerrainCell:
    """One cell of the terrain grid."""

    altitude: float = 0.0
    rainfall: float = 0.0
    temperature: float = 0.0
    x: int = 0
    y: int = 0
    local_iteration: int = 0
    biome_presences: List[Tuple[BiomeType, float]] = field(default_factory=list)

    def get_next_local_random_int(self, world: World) -> float:
        """Return the next noise value local to this cell and advance its counter."""
        seed = float(world.seed)
        x = seed + self.x
        y = seed + self.y
        z = seed + world.iteration + (self.local_iteration - 1)
        self.local_iteration += 1
        return perlin.perlin_value(x, y, z)


def _check_u32(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{name} must be within 0..{_U32_MAX}, got {value}")
    return value


class World:
    """A rectangular map of terrain cells wrapped around a sphere."""

    MAX_ALTITUDE = 15000.0
    MIN_ALTITUDE = -15000.0
    ALTITUDE_SPAN = MAX_ALTITUDE - MIN_ALTITUDE
    CONTINENT_MAX_SIZE_FACTOR = 8.7
    CONTINENT_MIN_SIZE_FACTOR = 5.7
    MAX_RAINFALL = 13000.0
    MIN_RAINFALL = 0.0
    RAINFALL_SPAN = MAX_RAINFALL - MIN_RAINFALL
    MAX_TEMPERATURE = 30.0
    MIN_TEMPERATURE = -35.0
    TEMPERATURE_SPAN = MAX_TEMPERATURE - MIN_TEMPERATURE
    NUM_CONTINENTS = 12
    RAINFALL_DRYNESS_FACTOR = 0.005
    RAINFALL_DRYNESS_OFFSET = RAINFALL_DRYNESS_FACTOR * MAX_RAINFALL
    TEMPERATURE_ALTITUDE_FACTOR = 2.05

    def __init__(
        self,
        width: int,
        height: int,
        seed: int,
        *,
        terrain: Optional[List[List[TerrainCell]]] = None,
        continent_offsets: Optional[Sequence[Vec2]] = None,
        continent_sizes: Optional[Sequence[Vec2]] = None,
        iteration: int = 0,
    ) -> None:
        self.width = _check_u32("width", width)
        self.height = _check_u32("height", height)
        self.seed = _check_u32("seed", seed)

        if terrain is None:
            terrain = [[TerrainCell() for _ in range(width)] for _ in range(height)]
        self.terrain = terrain
        for y, row in enumerate(self.terrain):
            for x, cell in enumerate(row):
                cell.x = x
                cell.y = y

        self.continent_offsets = self._continent_vectors("continent_offsets", continent_offsets)
        self.continent_sizes = self._continent_vectors("continent_sizes", continent_sizes)

        self.max_altitude = World.MIN_ALTITUDE
        self.min_altitude = World.MAX_ALTITUDE
        self.max_rainfall = World.MIN_RAINFALL
        self.min_rainfall = World.MAX_RAINFALL
        self.max_temperature = World.MIN_TEMPERATURE
        self.min_temperature = World.MAX_TEMPERATURE

        self.rng = random.Random(seed)
        if iteration < 0:
            raise ValueError(f"iteration must not be negative, got {iteration}")
        self.iteration = iteration

    @staticmethod
    def _continent_vectors(name: str, vectors: Optional[Sequence[Vec2]]) -> List[Vec2]:
        if vectors is None:
            return [Vec2() for _ in range(World.NUM_CONTINENTS)]
        vectors = list(vectors)
        if len(vectors) != World.NUM_CONTINENTS:
            raise ValueError(
                f"{name} must hold {World.NUM_CONTINENTS} vectors, got {len(vectors)}"
            )
        return vectors

    def __repr__(self) -> str:
        return (
            f"World(width={self.width}, height={self.height}, "
            f"seed={self.seed}, iteration={self.iteration})"
        )

    def _cells(self) -> Iterator[TerrainCell]:
        for row in self.terrain:
            yield from row

    def update_ranges(self) -> None:
        """Recompute the altitude, rainfall and temperature extremes from the terrain."""
        self.max_altitude = World.MIN_ALTITUDE
        self.min_altitude = World.MAX_ALTITUDE
        self.max_rainfall = World.MIN_RAINFALL
        self.min_rainfall = World.MAX_RAINFALL
        self.max_temperature = World.MIN_TEMPERATURE
        self.min_temperature = World.MAX_TEMPERATURE
        for cell in self._cells():
            self.max_altitude = max(self.max_altitude, cell.altitude)
            self.min_altitude = min(self.min_altitude, cell.altitude)
            self.max_rainfall = max(self.max_rainfall, cell.rainfall)
            self.min_rainfall = min(self.min_rainfall, cell.rainfall)
            self.max_temperature = max(self.max_temperature, cell.temperature)
            self.min_temperature = min(self.min_temperature, cell.temperature)

    def cell_neighbors(self, x: int, y: int) -> Dict[CompassDirection, TerrainCell]:
        """Return the cells around ``(x, y)``, wrapping east-west.

        Rows beyond the top and bottom edges have no neighbours.
        """
        width = self.width
        height = self.height
        west_x = (width + x - 1) % width
        east_x = (x + 1) % width

        north_edge = y >= height - 1
        south_edge = y == 0

        neighbors: Dict[CompassDirection, TerrainCell] = {}
        if not north_edge:
            above = self.terrain[y + 1]
            neighbors[CompassDirection.NorthWest] = above[west_x]
            neighbors[CompassDirection.North] = above[x]
            neighbors[CompassDirection.NorthEast] = above[east_x]

        row = self.terrain[y]
        neighbors[CompassDirection.West] = row[east_x]
        neighbors[CompassDirection.East] = row[west_x]

        if not south_edge:
            below = self.terrain[y - 1]
            neighbors[CompassDirection.SouthWest] = below[west_x]
            neighbors[CompassDirection.South] = below[x]
            neighbors[CompassDirection.SouthEast] = below[east_x]

        return neighbors

    def get_slant(self, cell: TerrainCell) -> float:
        """Return how much higher the western side of ``cell`` is than the eastern."""
        neighbors = self.cell_neighbors(cell.x, cell.y)

        west = [
            neighbors[d].altitude
            for d in (CompassDirection.West, CompassDirection.SouthWest, CompassDirection.South)
            if d in neighbors
        ]
        west_altitude = max([0.0, *west]) / len(west)

        east = [
            neighbors[d].altitude
            for d in (CompassDirection.East, CompassDirection.NorthEast, CompassDirection.North)
            if d in neighbors
        ]
        east_altitude = max([_F32_MIN, *east]) / len(east)

        return west_altitude - east_altitude

    _COAST_ORDER = (
        CompassDirection.West,
        CompassDirection.NorthWest,
        CompassDirection.North,
        CompassDirection.NorthEast,
        CompassDirection.East,
        CompassDirection.SouthEast,
        CompassDirection.South,
        CompassDirection.SouthWest,
    )

    def _ordered_neighbors(self, cell: TerrainCell) -> Iterator[TerrainCell]:
        neighbors = self.cell_neighbors(cell.x, cell.y)
        return (neighbors[d] for d in self._COAST_ORDER if d in neighbors)

    def is_cell_near_coastline(self, cell: TerrainCell) -> bool:
        """Whether ``cell`` is under water and touches land."""
        if cell.altitude >= 0.0:
            return False
        return any(n.altitude >= 0.0 for n in self._ordered_neighbors(cell))

    def is_cell_coastline(self, cell: TerrainCell) -> bool:
        """Whether ``cell`` is land and touches water."""
        if cell.altitude <= 0.0:
            return False
        return any(n.altitude <= 0.0 for n in self._ordered_neighbors(cell))