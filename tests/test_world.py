import pytest
from hypothesis import given
from hypothesis import strategies as st

from planetgen.math_util import CartesianError, Vec2
from planetgen.world import CompassDirection, TerrainCell, World, WorldGenError


def _world(width=5, height=5, altitude=0.0):
    world = World(width, height, 7)
    for row in world.terrain:
        for cell in row:
            cell.altitude = altitude
    return world


def test_new_world_grid_shape_and_coordinates():
    world = World(4, 3, 1)
    assert len(world.terrain) == 3
    assert all(len(row) == 4 for row in world.terrain)
    assert world.terrain[2][3].x == 3
    assert world.terrain[2][3].y == 2
    assert len(world.continent_offsets) == World.NUM_CONTINENTS
    assert len(world.continent_sizes) == World.NUM_CONTINENTS
    assert world.iteration == 0


def test_new_world_ranges_start_inverted():
    world = World(2, 2, 1)
    assert world.max_altitude == World.MIN_ALTITUDE
    assert world.min_altitude == World.MAX_ALTITUDE
    assert world.max_rainfall == World.MIN_RAINFALL
    assert world.min_rainfall == World.MAX_RAINFALL
    assert world.max_temperature == World.MIN_TEMPERATURE
    assert world.min_temperature == World.MAX_TEMPERATURE


def test_rng_is_seeded_deterministically():
    rng_a = World(2, 2, 42).rng
    rng_b = World(2, 2, 42).rng
    rng_c = World(2, 2, 43).rng
    seq_a = [rng_a.random() for _ in range(5)]
    seq_b = [rng_b.random() for _ in range(5)]
    seq_c = [rng_c.random() for _ in range(5)]
    assert seq_a == seq_b
    assert seq_a != seq_c
    assert all(0.0 <= value < 1.0 for value in seq_a)


@pytest.mark.parametrize("width,height,seed", [(-1, 2, 0), (2, -1, 0), (2, 2, 2**32)])
def test_invalid_dimensions_raise(width, height, seed):
    with pytest.raises(ValueError):
        World(width, height, seed)


def test_wrong_number_of_continents_raises():
    with pytest.raises(ValueError):
        World(2, 2, 0, continent_offsets=[Vec2()])


def test_update_ranges_reflects_terrain():
    world = World(2, 2, 0)
    world.terrain[0][0].altitude = -500.0
    world.terrain[1][1].altitude = 700.0
    world.terrain[0][1].rainfall = 1200.0
    world.terrain[1][0].temperature = -10.0
    world.update_ranges()
    assert world.min_altitude == -500.0
    assert world.max_altitude == 700.0
    assert world.max_rainfall == 1200.0
    assert world.min_rainfall == 0.0
    assert world.min_temperature == -10.0
    assert world.max_temperature == 0.0


def test_neighbors_interior_has_eight():
    world = _world()
    neighbors = world.cell_neighbors(2, 2)
    assert set(neighbors) == set(CompassDirection)
    assert neighbors[CompassDirection.North] is world.terrain[3][2]
    assert neighbors[CompassDirection.South] is world.terrain[1][2]


def test_neighbors_west_and_east_follow_source_layout():
    world = _world()
    neighbors = world.cell_neighbors(2, 2)
    assert neighbors[CompassDirection.West] is world.terrain[2][3]
    assert neighbors[CompassDirection.East] is world.terrain[2][1]
    assert neighbors[CompassDirection.NorthWest] is world.terrain[3][1]
    assert neighbors[CompassDirection.SouthEast] is world.terrain[1][3]


def test_neighbors_wrap_horizontally():
    world = _world()
    neighbors = world.cell_neighbors(0, 2)
    assert neighbors[CompassDirection.East] is world.terrain[2][4]
    neighbors = world.cell_neighbors(4, 2)
    assert neighbors[CompassDirection.West] is world.terrain[2][0]


def test_neighbors_at_edges():
    world = _world()
    bottom = world.cell_neighbors(1, 0)
    assert CompassDirection.South not in bottom
    assert CompassDirection.SouthWest not in bottom
    assert CompassDirection.North in bottom
    top = world.cell_neighbors(1, 4)
    assert CompassDirection.North not in top
    assert CompassDirection.NorthEast not in top
    assert CompassDirection.South in top


@given(x=st.integers(0, 5), y=st.integers(0, 4))
def test_neighbor_count_invariant(x, y):
    world = World(6, 5, 3)
    neighbors = world.cell_neighbors(x, y)
    expected = 5 if y in (0, 4) else 8
    assert len(neighbors) == expected
    assert all(abs(n.y - y) <= 1 for n in neighbors.values())


def test_slant_flat_terrain_is_zero():
    world = _world(3, 3)
    assert world.get_slant(world.terrain[1][1]) == 0.0


def test_slant_higher_west_side():
    world = _world(3, 3)
    world.terrain[1][2].altitude = 300.0
    slant = world.get_slant(world.terrain[1][1])
    assert slant == pytest.approx(300.0 / 3)


def test_slant_higher_east_side_is_negative():
    world = _world(3, 3)
    world.terrain[1][0].altitude = 300.0
    assert world.get_slant(world.terrain[1][1]) < 0.0


def test_near_coastline():
    world = _world(3, 3, altitude=-100.0)
    center = world.terrain[1][1]
    assert not world.is_cell_near_coastline(center)
    world.terrain[2][0].altitude = 50.0
    assert world.is_cell_near_coastline(center)
    assert not world.is_cell_near_coastline(world.terrain[2][0])


def test_coastline():
    world = _world(3, 3, altitude=100.0)
    center = world.terrain[1][1]
    assert not world.is_cell_coastline(center)
    world.terrain[0][2].altitude = -20.0
    assert world.is_cell_coastline(center)
    assert not world.is_cell_coastline(world.terrain[0][2])


def test_local_random_advances_and_is_deterministic():
    world = World(3, 3, 11)
    a = TerrainCell(x=1, y=2)
    b = TerrainCell(x=1, y=2)
    first = a.get_next_local_random_int(world)
    assert a.local_iteration == 1
    assert b.get_next_local_random_int(world) == first
    a.get_next_local_random_int(world)
    assert a.local_iteration == 2
    assert -0.5 <= first <= 1.5


def test_world_gen_error_wraps_cartesian_error():
    inner = CartesianError(-1.0)
    err = WorldGenError(inner)
    assert str(err) == str(inner)
    assert err.__cause__ is inner
    assert err.error is inner