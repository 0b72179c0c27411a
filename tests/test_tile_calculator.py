#!/usr/bin/env python3
"""
Tests for TileCalculator utility
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import itertools
import types

import pytest
from zxy_tiles.models.tile_server import TileAddress, BoundingBox
from zxy_tiles.utils.tile_calculator import TileCalculator


class TestTileCalculator:
    """Test cases for TileCalculator class"""

    def test_enumeration_is_complete_and_unique(self):
        """Every tile of every zoom appears exactly once"""
        tiles = list(TileCalculator.iter_tiles(0, 3))

        assert len(tiles) == sum(4 ** z for z in range(0, 4))
        assert len(set(tiles)) == len(tiles)
        assert all(isinstance(t, TileAddress) for t in tiles)

    def test_enumeration_order(self):
        """Addresses come out in ascending (zoom, x, y) order"""
        keys = [(t.zoom, t.x, t.y) for t in TileCalculator.iter_tiles(1, 3)]

        assert keys == sorted(keys)
        assert keys[:5] == [(1, 0, 0), (1, 0, 1), (1, 1, 0), (1, 1, 1), (2, 0, 0)]

    def test_single_zoom_level(self):
        tiles = list(TileCalculator.iter_tiles(2, 2))

        assert len(tiles) == 16
        assert {t.zoom for t in tiles} == {2}

    def test_offsets_apply_to_every_zoom(self):
        tiles = list(TileCalculator.iter_tiles(2, 3, start_x=2, start_y=1))

        assert all(t.x >= 2 and t.y >= 1 for t in tiles)
        # zoom 2: 2 * 3, zoom 3: 6 * 7
        assert len(tiles) == 6 + 42

    def test_offset_past_grid_edge_yields_nothing(self):
        """start_x equal to 2^zoom leaves that zoom empty without error"""
        assert list(TileCalculator.iter_tiles(1, 1, start_x=2)) == []
        assert list(TileCalculator.iter_tiles(0, 0, start_y=1)) == []

        tiles = list(TileCalculator.iter_tiles(1, 2, start_x=2))
        assert {t.zoom for t in tiles} == {2}
        assert len(tiles) == 2 * 4

    def test_enumeration_is_lazy(self):
        """Zoom 30 would be ~10^18 tiles; only the requested ones are produced"""
        tiles = TileCalculator.iter_tiles(30, 30)

        assert isinstance(tiles, types.GeneratorType)
        first = list(itertools.islice(tiles, 3))
        assert first == [TileAddress(30, 0, 0), TileAddress(30, 0, 1), TileAddress(30, 0, 2)]

    @pytest.mark.parametrize("start_zoom,end_zoom,start_x,start_y", [
        (0, 4, 0, 0),
        (2, 5, 3, 1),
        (1, 3, 4, 0),
        (3, 3, 7, 7),
    ])
    def test_calculate_tile_count_matches_enumeration(self, start_zoom, end_zoom, start_x, start_y):
        expected = sum(1 for _ in TileCalculator.iter_tiles(start_zoom, end_zoom, start_x, start_y))

        assert TileCalculator.calculate_tile_count(start_zoom, end_zoom, start_x, start_y) == expected

    def test_calculate_tile_count_high_zoom(self):
        assert TileCalculator.calculate_tile_count(20, 20) == 4 ** 20

    def test_tile_bounds_zoom_one(self):
        """Quadrants of the world at zoom 1"""
        assert TileCalculator.tile_bounds(1, 0, 0) == BoundingBox(north=90, south=0, west=-180, east=0)
        assert TileCalculator.tile_bounds(1, 1, 1) == BoundingBox(north=0, south=-90, west=0, east=180)

    def test_tile_bounds_zoom_zero_covers_world(self):
        assert TileCalculator.tile_bounds(0, 0, 0) == BoundingBox(north=90, south=-90, west=-180, east=180)

    def test_tile_bounds_fractional(self):
        bounds = TileCalculator.tile_bounds(3, 5, 2)

        assert bounds.north == pytest.approx(45.0)
        assert bounds.south == pytest.approx(22.5)
        assert bounds.west == pytest.approx(45.0)
        assert bounds.east == pytest.approx(90.0)


if __name__ == "__main__":
    pytest.main([__file__])
