import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from planetgen.biome import BiomeType, biome_stats
from planetgen.generation import (
    biome_presence,
    calculate_altitude,
    calculate_rainfall,
    calculate_temperature,
    continent_modifier,
    generate_altitude,
    generate_biomes,
    generate_continents,
    generate_rainfall,
    generate_temperature,
    generate_world,
    mountain_range_noise,
)
from planetgen.math_util import CartesianError
from planetgen.world import TerrainCell, World, WorldGenError


def _generated(seed=7, width=16, height=8, progress=None):
    world = World(width, height, seed)
    generate_world(world, progress)
    return world


def _cells(world):
    return [cell for row in world.terrain for cell in row]


def test_calculate_altitude_bounds():
    assert calculate_altitude(0.0) == World.MIN_ALTITUDE
    assert calculate_altitude(1.0) == World.MAX_ALTITUDE
    assert calculate_altitude(0.5) == 0.0


def test_calculate_temperature_clamps():
    assert calculate_temperature(-1.0) == World.MIN_TEMPERATURE
    assert calculate_temperature(0.0) == World.MIN_TEMPERATURE
    assert calculate_temperature(5.0) == World.MAX_TEMPERATURE


def test_calculate_rainfall_clamps():
    assert calculate_rainfall(0.0) == 0.0
    assert calculate_rainfall(-3.0) == 0.0
    assert calculate_rainfall(10.0) == World.MAX_RAINFALL


@given(st.floats(min_value=-5.0, max_value=5.0))
def test_calculate_values_stay_in_range(raw):
    assert World.MIN_RAINFALL <= calculate_rainfall(raw) <= World.MAX_RAINFALL
    assert World.MIN_TEMPERATURE <= calculate_temperature(raw) <= World.MAX_TEMPERATURE


def test_mountain_range_noise_midpoint():
    assert mountain_range_noise(0.5, 25.0) == pytest.approx(0.5)


@given(st.floats(min_value=0.0, max_value=0.5))
def test_mountain_range_noise_is_antisymmetric(delta):
    total = mountain_range_noise(0.5 + delta, 25.0) + mountain_range_noise(0.5 - delta, 25.0)
    assert total == pytest.approx(1.0)


def test_biome_presence_outside_range_is_zero():
    ocean = biome_stats(BiomeType.Ocean)
    land = TerrainCell(altitude=100.0, rainfall=500.0, temperature=10.0)
    assert biome_presence(land, ocean) == 0.0
    too_dry = TerrainCell(altitude=100.0, rainfall=1.0, temperature=10.0)
    assert biome_presence(too_dry, biome_stats(BiomeType.Forest)) == 0.0


def test_biome_presence_peaks_at_centre():
    ocean = biome_stats(BiomeType.Ocean)
    centre = TerrainCell(
        altitude=(ocean.min_altitude + ocean.max_altitude) / 2,
        rainfall=(ocean.min_rainfall + ocean.max_rainfall) / 2,
        temperature=(ocean.min_temperature + ocean.max_temperature) / 2,
    )
    assert biome_presence(centre, ocean) == pytest.approx(1.5)


@given(
    st.floats(min_value=-15000.0, max_value=15000.0),
    st.floats(min_value=0.0, max_value=13000.0),
    st.floats(min_value=-35.0, max_value=30.0),
    st.sampled_from(list(BiomeType)),
)
def test_biome_presence_bounded(altitude, rainfall, temperature, biome_type):
    cell = TerrainCell(altitude=altitude, rainfall=rainfall, temperature=temperature)
    presence = biome_presence(cell, biome_stats(biome_type))
    assert 0.0 <= presence <= 1.5 + 1e-9


def test_generate_continents_ranges():
    world = World(60, 30, 3)
    generate_continents(world)
    for offset in world.continent_offsets:
        assert 0.0 <= offset.x <= world.width
        assert world.height / 6 <= offset.y < world.height * 5 / 6
    for size in world.continent_sizes:
        assert World.CONTINENT_MIN_SIZE_FACTOR <= size.x < World.CONTINENT_MAX_SIZE_FACTOR + 6.0
        assert World.CONTINENT_MIN_SIZE_FACTOR <= size.y < World.CONTINENT_MAX_SIZE_FACTOR + 6.0


def test_continent_modifier_in_unit_range():
    world = World(30, 15, 11)
    generate_continents(world)
    for y in range(world.height):
        for x in range(world.width):
            assert 0.0 <= continent_modifier(world, x, y) <= 1.0


def test_generation_is_deterministic():
    first = _generated(seed=42)
    second = _generated(seed=42)
    assert [c.altitude for c in _cells(first)] == [c.altitude for c in _cells(second)]
    assert [c.rainfall for c in _cells(first)] == [c.rainfall for c in _cells(second)]
    assert first.continent_offsets == second.continent_offsets


def test_generated_values_within_limits():
    world = _generated()
    for cell in _cells(world):
        assert World.MIN_RAINFALL <= cell.rainfall <= World.MAX_RAINFALL
        assert World.MIN_TEMPERATURE <= cell.temperature <= World.MAX_TEMPERATURE
        assert not math.isnan(cell.altitude)


def test_generated_ranges_match_cells():
    world = _generated(seed=5)
    cells = _cells(world)
    assert world.max_altitude == max(World.MIN_ALTITUDE, *(c.altitude for c in cells))
    assert world.min_altitude == min(World.MAX_ALTITUDE, *(c.altitude for c in cells))
    assert world.max_temperature == max(World.MIN_TEMPERATURE, *(c.temperature for c in cells))
    assert world.min_rainfall == min(World.MAX_RAINFALL, *(c.rainfall for c in cells))


def test_biome_presences_normalised():
    world = _generated(seed=9)
    for cell in _cells(world):
        if cell.biome_presences:
            assert sum(p for _, p in cell.biome_presences) == pytest.approx(1.0)
            assert all(p > 0.0 for _, p in cell.biome_presences)
            kinds = [b for b, _ in cell.biome_presences]
            assert kinds == sorted(kinds, key=lambda b: b.value)


def test_cell_coordinates_assigned():
    world = _generated()
    for y, row in enumerate(world.terrain):
        for x, cell in enumerate(row):
            assert (cell.x, cell.y) == (x, y)


def test_progress_reports_stages():
    messages = []
    _generated(progress=lambda fraction, text: messages.append((fraction, text)))
    texts = [text for _, text in messages]
    for stage in (
        "Generating altitude",
        "Generating rainfall",
        "Generating temperature",
        "Generating biomes",
    ):
        assert stage in texts
    assert texts.index("Generating altitude") < texts.index("Generating biomes")
    assert all(0.0 <= fraction < 1.0 for fraction, _ in messages)


def test_stages_can_run_separately():
    world = World(12, 6, 2)
    generate_altitude(world)
    generate_rainfall(world)
    generate_temperature(world)
    generate_biomes(world)
    assert any(cell.biome_presences for cell in _cells(world))
    assert world.min_altitude <= world.max_altitude


def test_too_many_rows_raises_world_gen_error():
    terrain = [[TerrainCell() for _ in range(4)] for _ in range(4)]
    world = World(4, 2, 1, terrain=terrain)
    with pytest.raises(WorldGenError) as info:
        generate_world(world)
    assert isinstance(info.value.error, CartesianError)


def test_altitude_stage_raises_cartesian_error():
    terrain = [[TerrainCell() for _ in range(4)] for _ in range(4)]
    world = World(4, 2, 1, terrain=terrain)
    with pytest.raises(CartesianError):
        generate_altitude(world)