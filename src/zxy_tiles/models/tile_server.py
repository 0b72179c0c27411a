from dataclasses import dataclass, field
from typing import Dict, Optional


def format_coordinate(value: float) -> str:
    """Shortest round-trip decimal, without a trailing '.0' on whole degrees"""
    text = repr(float(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text


@dataclass(frozen=True)
class TileAddress:
    """A single (zoom, x, y) cell of the tile grid"""
    zoom: int
    x: int
    y: int


@dataclass(frozen=True)
class BoundingBox:
    """Geographic rectangle covered by a tile (degrees)"""
    north: float
    south: float
    west: float
    east: float

    def to_url_param(self) -> str:
        """Render as (north,south,west,east)"""
        values = (self.north, self.south, self.west, self.east)
        return "(" + ",".join(format_coordinate(v) for v in values) + ")"


@dataclass(frozen=True)
class TileRequest:
    """Concrete request for one tile: where to fetch it and where to save it"""
    url: str
    destination_path: str
    address: TileAddress


@dataclass
class TileServer:
    """Data model for a templated tile server URL"""
    url: str
    tile_width: int = 256
    tile_height: int = 256
    headers: Dict[str, str] = field(default_factory=dict)

    def get_tile_url(self, zoom: int, x: int, y: int) -> str:
        """Generate tile URL for given coordinates.

        Tokens are replaced literally; any other brace text is left alone.
        """
        url = (self.url
               .replace('{x}', str(x))
               .replace('{y}', str(y))
               .replace('{z}', str(zoom)))

        if '{bounds}' in url:
            # tile_calculator imports this module
            from zxy_tiles.utils.tile_calculator import TileCalculator
            url = url.replace('{bounds}', TileCalculator.tile_bounds(zoom, x, y).to_url_param())

        url = url.replace('{w}', str(self.tile_width))
        url = url.replace('{h}', str(self.tile_height))
        return url

    def get_headers(self) -> Dict[str, str]:
        """Get request headers"""
        return self.headers.copy()


@dataclass
class DownloadConfig:
    """Data model for download configuration"""
    url: str
    end_zoom: int
    output_dir: str = '.'
    start_zoom: int = 0
    x: int = 0
    y: int = 0
    tile_width: int = 256
    tile_height: int = 256
    concurrent_requests: int = 1
    timeout: Optional[float] = None
    verify_tls: bool = False
    dry_run: bool = False
    log_level: str = 'INFO'
    headers: Dict[str, str] = field(default_factory=dict)

    def create_server(self) -> TileServer:
        return TileServer(url=self.url, tile_width=self.tile_width, tile_height=self.tile_height,
                          headers=dict(self.headers))


@dataclass
class FetchResult:
    """Outcome counters of a fetch run"""
    completed: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.failed
