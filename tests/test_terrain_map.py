import pytest

from rover_sim.terrain import TerrainMap


def test_dimensions(sample_terrain):
    assert sample_terrain.width == 3
    assert sample_terrain.height == 2
    assert sample_terrain.cell_count == 6


def test_cell_at_uses_x_as_column(sample_terrain):
    assert sample_terrain.cell_at(2, 0) == "Se"
    assert sample_terrain.cell_at(0, 1) == "W"


def test_cell_at_out_of_bounds(sample_terrain):
    with pytest.raises(IndexError):
        sample_terrain.cell_at(3, 0)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_off_map_is_obstacle(sample_terrain, x, y):
    assert not sample_terrain.in_bounds(x, y)
    assert sample_terrain.is_obstacle(x, y)


def test_obstacle_cell(sample_terrain):
    assert sample_terrain.is_obstacle(2, 1)
    assert not sample_terrain.is_obstacle(1, 1)


def test_terrain_types_in_first_appearance_order(sample_terrain):
    assert sample_terrain.terrain_types() == ["Fe", "Se", "W", "Si"]


def test_locations_of_row_major(sample_terrain):
    assert sample_terrain.locations_of("Fe") == [(0, 0), (1, 0)]
    assert sample_terrain.locations_of("Zn") == []


def test_caller_mutation_does_not_leak(sample_grid):
    terrain = TerrainMap(sample_grid)
    sample_grid[0][0] = "Obs"
    assert terrain.cell_at(0, 0) == "Fe"


def test_reachable_from_stops_at_obstacles():
    terrain = TerrainMap([
        ["Fe", "Obs", "Se"],
        ["Fe", "Obs", "Se"],
    ])
    assert terrain.reachable_from(0, 0) == {(0, 0), (0, 1)}
    assert terrain.reachable_from(2, 1) == {(2, 0), (2, 1)}


def test_reachable_from_obstacle_is_empty(sample_terrain):
    assert sample_terrain.reachable_from(2, 1) == set()
