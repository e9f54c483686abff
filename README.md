# planetgen

Procedural generation of a spherical world laid out as a grid of terrain
cells. A generated world has continents, altitude, rainfall and
temperature, and every cell gets a weighted mix of biomes (ice cap, ocean,
grassland, forest, taiga, tundra, desert, rainforest).

Generation is deterministic: the same width, height and seed give the same
world.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Generating a world

```python
from planetgen.world import World
from planetgen.generation import generate_world

world = World(80, 40, 1234)

def progress(fraction, text):
    print(f"{fraction:5.1%} {text}")

generate_world(world, progress)

cell = world.terrain[20][40]
print(cell.altitude, cell.rainfall, cell.temperature)
for biome, presence in cell.biome_presences:
    print(biome, presence)
```

`World(width, height, seed)` builds an empty grid; `terrain` is a list of
rows, each a list of `TerrainCell`. The progress callback is optional and
receives a fraction between 0 and 1 and a short description of the current
step. Steps run in this order: continents and altitude, rainfall,
temperature, biomes. `generate_world` raises `WorldGenError` if the terrain
has more rows than the world's height.

The single steps are available on their own in `planetgen.generation`
(`generate_continents`, `generate_altitude`, `generate_rainfall`,
`generate_temperature`, `generate_biomes`), as are the helpers they use
(`continent_modifier`, `mountain_range_noise`, `calculate_altitude`,
`calculate_rainfall`, `calculate_temperature`, `biome_presence`).

After generation the world holds the observed extremes in `min_altitude`,
`max_altitude`, `min_rainfall`, `max_rainfall`, `min_temperature` and
`max_temperature`. Call `World.update_ranges()` to recompute them after
editing cells by hand.

## Looking at cells

```python
from planetgen.world import CompassDirection

neighbors = world.cell_neighbors(10, 5)
north = neighbors.get(CompassDirection.North)

world.is_cell_coastline(cell)       # land cell with a neighbour at or below sea level
world.is_cell_near_coastline(cell)  # water cell with a neighbour at or above sea level
world.get_slant(cell)
```

`cell_neighbors` returns a dict keyed by `CompassDirection`. Neighbours wrap
around horizontally; the first and last rows have no neighbours beyond the
edge. `TerrainCell.get_next_local_random_int(world)` returns a noise value
for the cell and advances its `local_iteration` counter.

## Biomes

```python
from planetgen.biome import BiomeType, biome_stats

stats = biome_stats(BiomeType.Forest)
print(stats.name, stats.color, stats.min_rainfall, stats.max_rainfall)
```

`BiomeType.Forest.stats` gives the same `BiomeStats`.

## Saving and loading

`WorldManager` keeps the current world in its `world` attribute and saves it
to or loads it from a file:

```python
from planetgen.world_manager import WorldManager

manager = WorldManager()
manager.world = world
manager.save_world("my_world.sav")

other = WorldManager()
other.load_world("my_world.sav")
```

`save_world` raises `SaveError` when there is no world, it cannot be encoded
or the file cannot be written; `load_world` raises `LoadError` when the file
cannot be read or is not a valid save. Each error carries a `kind` and the
underlying `error`. Cell coordinates and value extremes are rebuilt from the
terrain on load.

For bytes in memory, use `planetgen.saving.serialize_world` and
`deserialize_world`; a malformed save raises `SaveFormatError`.
`world_to_fields` and `world_from_fields` convert between a world and its
stored fields (by name or in stored order).

`WorldManager.new_world_async(seed, progress)` generates a new world on a
background thread and returns a `concurrent.futures.Future` whose result is
the world (or which raises `WorldGenError`). The size defaults to 400×200 and
can be changed with the `new_world_width` and `new_world_height` arguments of
`WorldManager`. Without a seed a random one is used. The new world does not
replace the manager's current one.

## Other pieces

- `planetgen.perlin`: `perlin_value(x, y, z)` gradient noise scaled to about
  0..1, and `permutation_value(x, y, z)`.
- `planetgen.math_util`: `Vec2`, `Vec3`, `cartesian_coordinates`,
  `random_point_in_sphere`, `mix_values`, `repeat`.
- `planetgen.human_group`: `HumanGroup`, an id and a population.

## What it does not do

This is a library only. It has no command-line program, and it does not draw
or display worlds: colours in `BiomeStats` are plain RGB tuples for your own
rendering. Human groups are a data record only; nothing simulates them.