from typing import Iterator

from zxy_tiles.models.tile_server import TileAddress, BoundingBox


class TileCalculator:
    """Utility class for tile coordinate calculations"""

    @staticmethod
    def tiles_per_axis(zoom: int) -> int:
        """Number of tiles along one axis at the given zoom level"""
        return 2 ** zoom

    @staticmethod
    def iter_tiles(start_zoom: int, end_zoom: int, start_x: int = 0,
                   start_y: int = 0) -> Iterator[TileAddress]:
        """Yield every tile address from start_zoom to end_zoom (inclusive).

        Order is zoom, then x, then y, all ascending. The x/y offsets apply
        to every zoom level; a level where an offset is past the grid edge
        yields nothing. The sequence is produced lazily since high zoom
        levels hold trillions of tiles.
        """
        for zoom in range(start_zoom, end_zoom + 1):
            n = TileCalculator.tiles_per_axis(zoom)
            for x in range(start_x, n):
                for y in range(start_y, n):
                    yield TileAddress(zoom, x, y)

    @staticmethod
    def tile_bounds(zoom: int, x: int, y: int) -> BoundingBox:
        """Return the equirectangular bounds of a tile.

        The grid spans 360 degrees of longitude and 180 degrees of latitude,
        split evenly into 2^zoom steps per axis, with y growing southward.
        """
        n = TileCalculator.tiles_per_axis(zoom)
        lon_step = 360.0 / n
        lat_step = 180.0 / n
        lon = x * lon_step - 180.0
        lat = 90.0 - y * lat_step
        return BoundingBox(north=lat, south=lat - lat_step, west=lon, east=lon + lon_step)

    @staticmethod
    def calculate_tile_count(start_zoom: int, end_zoom: int, start_x: int = 0,
                             start_y: int = 0) -> int:
        """Calculate total number of tiles without enumerating them"""
        total = 0
        for zoom in range(start_zoom, end_zoom + 1):
            n = TileCalculator.tiles_per_axis(zoom)
            total += max(0, n - start_x) * max(0, n - start_y)
        return total
