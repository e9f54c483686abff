"""Procedural generation of a world's altitude, rainfall, temperature and biomes."""

from __future__ import annotations

import logging
import math
import random
from typing import Callable, Optional

from planetgen import perlin
from planetgen.biome import BiomeStats, BiomeType, biome_stats
from planetgen.math_util import (
    PI,
    TAU,
    CartesianError,
    Vec2,
    Vec3,
    cartesian_coordinates,
    mix_values,
    random_point_in_sphere,
    repeat,
)
from planetgen.world import TerrainCell, World, WorldGenError

ProgressCallback = Callable[[float, str], None]

_log = logging.getLogger(__name__)

_LONGITUDE_FACTOR = 15.0
_LATITUDE_FACTOR = 6.0
_OFFSET_RADIUS = 1000.0


def _report(progress: Optional[ProgressCallback], fraction: float, text: str) -> None:
    if progress is not None:
        progress(fraction, text)


def _uniform(rng: random.Random, low: float, high: float) -> float:
    """A sample from the half-open range ``[low, high)``."""
    return low + rng.random() * (high - low)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _random_offset(rng: random.Random) -> Vec3:
    return random_point_in_sphere(rng, _OFFSET_RADIUS)


def _noise(alpha: float, beta: float, radius: float, offset: Vec3) -> float:
    point = cartesian_coordinates(alpha, beta, radius)
    return perlin.perlin_value(point.x + offset.x, point.y + offset.y, point.z + offset.z)


def _shift(value: float) -> int:
    """Floor ``value`` to a non-negative offset, negative values becoming zero."""
    return max(0, math.floor(value))


def generate_world(world: World, progress: Optional[ProgressCallback] = None) -> None:
    """Fill every cell of ``world`` with terrain, climate and biomes.

    Raises WorldGenError if a cell lies outside the sphere's polar range.
    """
    try:
        _report(progress, 0.0, "Generating altitude")
        generate_altitude(world, progress)
        _report(progress, 0.0, "Generating rainfall")
        generate_rainfall(world, progress)
        _report(progress, 0.0, "Generating temperature")
        generate_temperature(world, progress)
    except CartesianError as err:
        raise WorldGenError(err) from err

    _report(progress, 0.0, "Generating biomes")
    generate_biomes(world, progress)


def generate_continents(world: World, progress: Optional[ProgressCallback] = None) -> None:
    """Place the continents' centres and sizes using the world's random generator."""
    _log.info("Generating continents")
    _report(progress, 0.0, "Generating continents")

    rng = world.rng
    width = float(world.width)
    height = float(world.height)
    low_lat = height / _LATITUDE_FACTOR
    high_lat = height * (_LATITUDE_FACTOR - 1.0) / _LATITUDE_FACTOR

    previous = Vec2(
        _uniform(rng, 0.0, width * (_LONGITUDE_FACTOR - 1.0) / _LONGITUDE_FACTOR),
        _uniform(rng, low_lat, high_lat),
    )
    count = World.NUM_CONTINENTS
    for i in range(count):
        _report(progress, i / count, f"Generating continents: {i}/{count}")

        width_offset = _uniform(rng, 0.0, 6.0)
        world.continent_offsets[i] = previous

        low_size = World.CONTINENT_MIN_SIZE_FACTOR + width_offset
        high_size = World.CONTINENT_MAX_SIZE_FACTOR + width_offset
        world.continent_sizes[i] = Vec2(
            _uniform(rng, low_size, high_size),
            _uniform(rng, low_size, high_size),
        )

        y_position = _uniform(rng, low_lat, high_lat)
        if i % 3 == 2:
            step = _uniform(
                rng, width * 4.0 / _LONGITUDE_FACTOR, width * 6.0 / _LONGITUDE_FACTOR
            )
        else:
            step = _uniform(rng, width / _LONGITUDE_FACTOR, width * 2.0 / _LONGITUDE_FACTOR)

        previous = Vec2(repeat(previous.x + step, width), y_position)
    _log.info("Done generating continents")


def _continent_distance(world: World, offset: Vec2, size: Vec2, x: int, y: int) -> float:
    beta_factor = math.sin(PI * y / world.height)
    width = float(world.width)

    distance_x = min(
        abs(offset.x - x),
        abs(width + offset.x - x),
        abs(offset.x - x - width),
    ) * beta_factor
    distance_y = abs(offset.y - y)

    return math.sqrt((distance_x * size.x) ** 2 + (distance_y * size.y) ** 2)


def continent_modifier(world: World, x: int, y: int) -> float:
    """Return how strongly the continents raise the land at ``(x, y)``, in ``[0, 1]``."""
    max_value = 0.0
    for offset, size in zip(world.continent_offsets, world.continent_sizes):
        distance = _continent_distance(world, offset, size, x, y)
        value = _clamp(1.0 - distance / world.width, 0.0, 1.0)

        other_value = value
        if value > max_value:
            other_value = max_value
            max_value = value

        value_mod = min(other_value * 2.0, 1.0)
        max_value = mix_values(max_value, other_value, value_mod)
    return max_value


def mountain_range_noise(noise: float, width_factor: float) -> float:
    """Turn noise in ``[0, 1]`` into ridges that peak around its midpoint."""
    noise = noise * 2.0 - 1.0
    value_1 = -math.exp(-((noise * width_factor + 1.0) ** 2))
    value_2 = math.exp(-((noise * width_factor - 1.0) ** 2))
    return (value_1 + value_2 + 1.0) / 2.0


def calculate_altitude(raw_altitude: float) -> float:
    """Map a raw value in ``[0, 1]`` onto the world's altitude range."""
    return World.MIN_ALTITUDE + raw_altitude * World.ALTITUDE_SPAN


def calculate_rainfall(raw_rainfall: float) -> float:
    """Map a raw value onto the rainfall range, clamped to ``[0, MAX_RAINFALL]``."""
    return _clamp(
        raw_rainfall * (World.RAINFALL_SPAN + World.RAINFALL_DRYNESS_OFFSET)
        + World.MIN_RAINFALL
        - World.RAINFALL_DRYNESS_OFFSET,
        0.0,
        World.MAX_RAINFALL,
    )


def calculate_temperature(raw_temperature: float) -> float:
    """Map a raw value onto the temperature range, clamped to its bounds."""
    return _clamp(
        raw_temperature * World.TEMPERATURE_SPAN + World.MIN_TEMPERATURE,
        World.MIN_TEMPERATURE,
        World.MAX_TEMPERATURE,
    )


def generate_altitude(world: World, progress: Optional[ProgressCallback] = None) -> None:
    """Place the continents and compute every cell's altitude.

    Raises CartesianError if the terrain has more rows than the world's height.
    """
    _log.info("Generating altitude")
    generate_continents(world, progress)

    rng = world.rng
    radii = (0.75, 0.75, 8.0, 8.0, 4.0, 8.0, 16.0, 64.0, 128.0, 1.5, 1.0)
    offsets = [_random_offset(rng) for _ in radii]
    layers = list(zip(radii, offsets))

    height = len(world.terrain)
    for y, row in enumerate(world.terrain):
        alpha = (y / world.height) * PI
        width = len(row)
        size = height * width
        for x, cell in enumerate(row):
            index = y * width + x
            _report(progress, index / size, f"Generating topography: {index}/{size}")

            beta = (x / world.width) * TAU
            (
                value_1,
                value_1b,
                value_2,
                value_2b,
                value_3,
                value_4,
                value_5,
                value_6,
                value_7,
                value_8,
                value_9,
            ) = (_noise(alpha, beta, radius, offset) for radius, offset in layers)
            value_8 = value_8 * 1.5 + 0.25

            value_a = continent_modifier(world, x, y)
            value_a = mix_values(value_a, value_3, 0.22 * value_8)
            value_a = mix_values(value_a, value_4, 0.15 * value_8)
            value_a = mix_values(value_a, value_5, 0.1 * value_8)
            value_a = mix_values(value_a, value_6, 0.03 * value_8)
            value_a = mix_values(value_a, value_7, 0.005 * value_8)

            value_c = mix_values(value_1, value_9, 0.5 * value_8)
            value_c = mix_values(value_c, value_2, 0.04 * value_8)
            value_c = mountain_range_noise(value_c, 25.0)

            value_cb = mix_values(value_1b, value_9, 0.5 * value_8)
            value_cb = mix_values(value_cb, value_2b, 0.04 * value_8)
            value_cb = mountain_range_noise(value_cb, 25.0)

            value_c = mix_values(value_c, value_cb, 0.5 * value_8)
            value_c = mix_values(value_c, value_3, 0.35 * value_8)
            value_c = mix_values(value_c, value_4, 0.075)
            value_c = mix_values(value_c, value_5, 0.05)
            value_c = mix_values(value_c, value_6, 0.02)
            value_c = mix_values(value_c, value_7, 0.01)

            value_b = mix_values(
                value_a,
                value_a * 0.02 + 0.49,
                value_a - max(0.0, 2.0 * value_c - 1.0),
            )
            value_d = mix_values(value_b, value_c, 0.225 * value_8)

            altitude = calculate_altitude(value_d)
            cell.altitude = altitude
            world.max_altitude = max(world.max_altitude, altitude)
            world.min_altitude = min(world.min_altitude, altitude)

            cell.x = x
            cell.y = y
    _log.info("Done generating altitude")


def generate_rainfall(world: World, progress: Optional[ProgressCallback] = None) -> None:
    """Compute every cell's rainfall from latitude, noise and the land upwind.

    Raises CartesianError if the terrain has more rows than the world's height.
    """
    _log.info("Generating rainfall")
    rng = world.rng
    offset_1 = _random_offset(rng)
    offset_2 = _random_offset(rng)
    offset_3 = _random_offset(rng)

    terrain = world.terrain
    height = len(terrain)
    for y, row in enumerate(terrain):
        alpha = (y / world.height) * PI
        width = len(row)
        size = width * height
        for x, cell in enumerate(row):
            index = y * width + x
            _report(progress, index / size, f"Generating rainfall: {index}/{size}")
            beta = (x / world.width) * TAU

            noise_1 = _noise(alpha, beta, 2.0, offset_1)
            noise_2 = _noise(alpha, beta, 1.0, offset_2) * 1.5 + 0.25
            noise_3 = _noise(alpha, beta, 16.0, offset_3)

            value_a = mix_values(noise_1, noise_3, 0.15)

            latitude_factor = alpha + (value_a * 2.0 - 1.0) * PI * 0.2
            latitude_modifier_1 = 1.5 * math.sin(latitude_factor) - 0.5
            latitude_modifier_2 = math.cos(latitude_factor)

            upwind_altitudes = [
                max(0.0, row[(width + x + _shift(latitude_modifier_2 * width / divisor)) % width].altitude)
                for divisor in (20.0, 15.0, 10.0, 5.0)
            ]
            offset_y = y + _shift(latitude_modifier_2 * height / 10.0)
            altitude_5 = max(0.0, terrain[offset_y][x].altitude)

            altitude_value = max(0.0, cell.altitude)
            altitude_modifier = (
                altitude_value
                - upwind_altitudes[0] * 0.7
                - upwind_altitudes[1] * 0.6
                - upwind_altitudes[2] * 0.5
                - upwind_altitudes[3] * 0.4
                - altitude_5 * 0.5
                + World.MAX_ALTITUDE * 0.18 * noise_2
                - altitude_value * 0.25
            ) / World.MAX_ALTITUDE

            rainfall_value = mix_values(latitude_modifier_1, altitude_modifier, 0.85)
            rainfall_value = mix_values(
                math.copysign(rainfall_value * rainfall_value, rainfall_value),
                rainfall_value,
                0.75,
            )
            rainfall = min(World.MAX_RAINFALL, calculate_rainfall(rainfall_value))

            cell.rainfall = rainfall
            world.max_rainfall = max(world.max_rainfall, rainfall)
            world.min_rainfall = min(world.min_rainfall, rainfall)
    _log.info("Done generating rainfall")


def generate_temperature(world: World, progress: Optional[ProgressCallback] = None) -> None:
    """Compute every cell's temperature from latitude, noise and altitude.

    Raises CartesianError if the terrain has more rows than the world's height.
    """
    _log.info("Generating temperature")
    rng = world.rng
    offset_1 = _random_offset(rng)
    offset_2 = _random_offset(rng)

    height = len(world.terrain)
    for y, row in enumerate(world.terrain):
        alpha = (y / world.height) * PI
        width = len(row)
        size = width * height
        for x, cell in enumerate(row):
            index = y * width + x
            _report(progress, index / size, f"Generating temperature: {index}/{size}")
            beta = (x / world.width) * TAU

            noise_1 = _noise(alpha, beta, 2.0, offset_1)
            noise_2 = _noise(alpha, beta, 16.0, offset_2)

            latitude_modifier = alpha * 0.9 + (noise_1 + noise_2) * 0.05 * PI
            altitude_factor = max(
                0.0,
                (cell.altitude / World.MAX_ALTITUDE) * World.TEMPERATURE_ALTITUDE_FACTOR,
            )
            temperature = calculate_temperature(math.sin(latitude_modifier) - altitude_factor)

            cell.temperature = temperature
            world.max_temperature = max(world.max_temperature, temperature)
            world.min_temperature = min(world.min_temperature, temperature)
    _log.info("Done generating temperature")


def generate_biomes(world: World, progress: Optional[ProgressCallback] = None) -> None:
    """Give every cell the share of each biome present in it, normalised to sum to one."""
    _log.info("Generating biomes")
    height = len(world.terrain)
    for y, row in enumerate(world.terrain):
        width = len(row)
        size = height * width
        for x, cell in enumerate(row):
            index = y * width + x
            _report(progress, index / size, f"Generating biomes: {index}/{size}")

            presences = [
                (biome_type, presence)
                for biome_type in BiomeType
                if (presence := biome_presence(cell, biome_stats(biome_type))) > 0.0
            ]
            total = sum(presence for _, presence in presences)
            cell.biome_presences = [
                (biome_type, presence / total) for biome_type, presence in presences
            ]
    _log.info("Done generating biomes")


def _range_presence(value: float, low: float, high: float) -> Optional[float]:
    diff = value - low
    if diff < 0.0:
        return None
    factor = diff / (high - low)
    if factor > 1.0:
        return None
    return 1.0 - factor if factor > 0.5 else factor


def biome_presence(cell: TerrainCell, biome: BiomeStats) -> float:
    """Return how well ``cell``'s climate fits ``biome``; zero when it falls outside it."""
    presence = 0.0
    for value, low, high in (
        (cell.altitude, biome.min_altitude, biome.max_altitude),
        (cell.rainfall, biome.min_rainfall, biome.max_rainfall),
        (cell.temperature, biome.min_temperature, biome.max_temperature),
    ):
        part = _range_presence(value, low, high)
        if part is None:
            return 0.0
        presence += part
    return presence