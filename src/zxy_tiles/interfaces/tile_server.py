from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from zxy_tiles.models.tile_server import TileAddress, TileRequest


class ITileRequestRenderer(ABC):
    """Interface for turning tile addresses into concrete requests"""

    @abstractmethod
    def render(self, address: TileAddress) -> TileRequest:
        """Build the URL and destination path for a tile"""
        pass


class ITileDownloader(ABC):
    """Interface for tile downloader implementations"""

    @abstractmethod
    def download_tile(self, request: TileRequest) -> int:
        """Download a single tile, returning the number of bytes saved.

        Raises DownloadError (or a subclass) on failure.
        """
        pass


class IConfigLoader(ABC):
    """Interface for configuration loading"""

    @abstractmethod
    def load_config(self, config_path: Optional[str]) -> Dict[str, Any]:
        """Load configuration from file"""
        pass

    @abstractmethod
    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration"""
        pass
