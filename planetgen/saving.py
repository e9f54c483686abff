"""Compact binary save format for worlds.

Integers are stored as little-endian base-128 varints, floats as 32-bit
little-endian values, sequences as a varint length followed by their items and
enum values as a varint variant index.  Fixed-size arrays carry no length.
"""

from __future__ import annotations

import struct
from typing import Any, Callable, Dict, List, Mapping, Sequence, TypeVar, Union

from planetgen.biome import BiomeType
from planetgen.math_util import Vec2
from planetgen.world import TerrainCell, World

T = TypeVar("T")

FIELD_NAMES = (
    "width",
    "height",
    "seed",
    "terrain",
    "continent_offsets",
    "continent_sizes",
    "iteration",
)

_BIOMES = tuple(BiomeType)
_BIOME_INDEX = {biome: index for index, biome in enumerate(_BIOMES)}
_U32_BITS = 32
_USIZE_BITS = 64


class SaveFormatError(ValueError):
    """Raised when a world cannot be encoded or a save cannot be decoded."""


class _Writer:
    def __init__(self) -> None:
        self._buffer = bytearray()

    def varint(self, value: int, bits: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveFormatError(f"expected an integer, got {value!r}")
        if not 0 <= value < 1 << bits:
            raise SaveFormatError(f"integer {value} does not fit in {bits} bits")
        while True:
            byte = value & 0x7F
            value >>= 7
            if value:
                self._buffer.append(byte | 0x80)
            else:
                self._buffer.append(byte)
                return

    def u32(self, value: int) -> None:
        self.varint(value, _U32_BITS)

    def usize(self, value: int) -> None:
        self.varint(value, _USIZE_BITS)

    def f32(self, value: float) -> None:
        try:
            self._buffer += struct.pack("<f", value)
        except (OverflowError, struct.error) as err:
            raise SaveFormatError(f"cannot store {value!r} as a 32-bit float") from err

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise SaveFormatError("unexpected end of data")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def varint(self, bits: int) -> int:
        value = 0
        for shift in range(0, bits + 6, 7):
            byte = self._take(1)[0]
            value |= (byte & 0x7F) << shift
            if not byte & 0x80:
                if value >= 1 << bits:
                    raise SaveFormatError(f"integer does not fit in {bits} bits")
                return value
        raise SaveFormatError("integer encoding is too long")

    def u32(self) -> int:
        return self.varint(_U32_BITS)

    def usize(self) -> int:
        return self.varint(_USIZE_BITS)

    def f32(self) -> float:
        return struct.unpack("<f", self._take(4))[0]

    def sequence(self, read_item: Callable[[_Reader], T]) -> List[T]:
        return [read_item(self) for _ in range(self.usize())]


def _write_cell(out: _Writer, cell: TerrainCell) -> None:
    out.f32(cell.altitude)
    out.f32(cell.rainfall)
    out.f32(cell.temperature)
    out.usize(cell.local_iteration)
    out.usize(len(cell.biome_presences))
    for biome, presence in cell.biome_presences:
        try:
            out.u32(_BIOME_INDEX[biome])
        except KeyError:
            raise SaveFormatError(f"not a biome type: {biome!r}") from None
        out.f32(presence)


def _write_vectors(out: _Writer, name: str, vectors: Sequence[Vec2]) -> None:
    if len(vectors) != World.NUM_CONTINENTS:
        raise SaveFormatError(
            f"{name} must hold {World.NUM_CONTINENTS} vectors, got {len(vectors)}"
        )
    for vector in vectors:
        out.f32(vector.x)
        out.f32(vector.y)


def serialize_world(world: World) -> bytes:
    """Encode ``world`` into save bytes.

    Derived values (coordinates, extremes, the random generator) are not stored.
    """
    out = _Writer()
    out.u32(world.width)
    out.u32(world.height)
    out.u32(world.seed)
    out.usize(len(world.terrain))
    for row in world.terrain:
        out.usize(len(row))
        for cell in row:
            _write_cell(out, cell)
    _write_vectors(out, "continent_offsets", world.continent_offsets)
    _write_vectors(out, "continent_sizes", world.continent_sizes)
    out.usize(world.iteration)
    return out.getvalue()


def _read_presence(reader: _Reader) -> tuple:
    index = reader.u32()
    if index >= len(_BIOMES):
        raise SaveFormatError(f"invalid biome variant index {index}")
    return _BIOMES[index], reader.f32()


def _read_cell(reader: _Reader) -> TerrainCell:
    altitude = reader.f32()
    rainfall = reader.f32()
    temperature = reader.f32()
    local_iteration = reader.usize()
    presences = reader.sequence(_read_presence)
    return TerrainCell(
        altitude=altitude,
        rainfall=rainfall,
        temperature=temperature,
        local_iteration=local_iteration,
        biome_presences=presences,
    )


def _read_row(reader: _Reader) -> List[TerrainCell]:
    return reader.sequence(_read_cell)


def _read_vectors(reader: _Reader) -> List[Vec2]:
    return [Vec2(reader.f32(), reader.f32()) for _ in range(World.NUM_CONTINENTS)]


def deserialize_world(data: bytes) -> World:
    """Decode save bytes into a world, recomputing its derived values.

    Raises SaveFormatError if the data is not a valid save.
    """
    reader = _Reader(data)
    width = reader.u32()
    height = reader.u32()
    seed = reader.u32()
    terrain = reader.sequence(_read_row)
    offsets = _read_vectors(reader)
    sizes = _read_vectors(reader)
    iteration = reader.usize()
    return world_from_fields([width, height, seed, terrain, offsets, sizes, iteration])


def world_to_fields(world: World) -> Dict[str, Any]:
    """Return the stored fields of ``world`` by name.

    The containers are copies; the terrain cells themselves are shared.
    """
    return {
        "width": world.width,
        "height": world.height,
        "seed": world.seed,
        "terrain": [list(row) for row in world.terrain],
        "continent_offsets": list(world.continent_offsets),
        "continent_sizes": list(world.continent_sizes),
        "iteration": world.iteration,
    }


def _values_from_mapping(fields: Mapping[str, Any]) -> List[Any]:
    unknown = [key for key in fields if key not in FIELD_NAMES]
    if unknown:
        raise SaveFormatError(
            f"unknown field `{unknown[0]}`, expected one of {', '.join(FIELD_NAMES)}"
        )
    values = []
    for name in FIELD_NAMES:
        if name not in fields:
            raise SaveFormatError(f"missing field `{name}`")
        values.append(fields[name])

    width, height, terrain = values[0], values[1], values[3]
    try:
        rows = list(terrain)
        covered = len(rows) >= height and all(len(row) >= width for row in rows[:height])
    except TypeError as err:
        raise SaveFormatError(f"invalid terrain: {err}") from err
    if not covered:
        raise SaveFormatError(f"terrain does not cover {width}x{height} cells")
    return values


def _values_from_sequence(fields: Sequence[Any]) -> List[Any]:
    values = list(fields)
    if len(values) < len(FIELD_NAMES):
        raise SaveFormatError(f"invalid length {len(values)}, expected struct World")
    return values[: len(FIELD_NAMES)]


def _vec2(value: Union[Vec2, Sequence[float]]) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(float(x), float(y))


def world_from_fields(fields: Union[Mapping[str, Any], Sequence[Any]]) -> World:
    """Build a world from its stored fields, given by name or in stored order.

    Cell coordinates, the climate extremes and the random generator are rebuilt.
    Raises SaveFormatError if a field is missing, unknown or invalid.
    """
    if isinstance(fields, Mapping):
        values = _values_from_mapping(fields)
    else:
        values = _values_from_sequence(fields)
    width, height, seed, terrain, offsets, sizes, iteration = values

    try:
        rows = [list(row) for row in terrain]
        for row in rows:
            for cell in row:
                if not isinstance(cell, TerrainCell):
                    raise SaveFormatError(f"not a terrain cell: {cell!r}")
        world = World(
            width,
            height,
            seed,
            terrain=rows,
            continent_offsets=[_vec2(v) for v in offsets],
            continent_sizes=[_vec2(v) for v in sizes],
            iteration=iteration,
        )
    except SaveFormatError:
        raise
    except (TypeError, ValueError) as err:
        raise SaveFormatError(str(err)) from err

    world.update_ranges()
    return world