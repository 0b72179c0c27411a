import argparse
import logging
from typing import List, Optional

from zxy_tiles.core.bounded_fetcher import BoundedTileFetcher
from zxy_tiles.infrastructure.logging import LoggingManager
from zxy_tiles.interfaces.tile_server import ITileDownloader
from zxy_tiles.models.tile_server import DownloadConfig, FetchResult
from zxy_tiles.services.config_service import ConfigService
from zxy_tiles.services.tile_download_service import TileDownloadService
from zxy_tiles.services.tile_request_renderer import TileRequestRenderer
from zxy_tiles.utils.tile_calculator import TileCalculator

logger = logging.getLogger(__name__)


class TileDownloadManager:
    """Main manager class for tile downloading operations"""

    def __init__(self, config: DownloadConfig, downloader: Optional[ITileDownloader] = None):
        self.config = config
        self.server = config.create_server()
        self.renderer = TileRequestRenderer(self.server, config.output_dir)
        self.downloader = downloader or TileDownloadService(
            timeout=config.timeout,
            verify_tls=config.verify_tls,
            headers=self.server.get_headers()
        )
        self.fetcher = BoundedTileFetcher(self.renderer, self.downloader, config.output_dir)

    def count_tiles(self) -> int:
        """Number of tiles the configured range covers"""
        c = self.config
        return TileCalculator.calculate_tile_count(c.start_zoom, c.end_zoom, c.x, c.y)

    def run(self) -> FetchResult:
        """Download every tile in the configured range"""
        c = self.config
        total = self.count_tiles()

        print(f"=== Downloading {c.url} ===")
        print(f"Zoom Levels: {c.start_zoom} to {c.end_zoom}")
        print(f"Start Offset: x={c.x}, y={c.y}")
        print(f"Output Directory: {c.output_dir}")
        print(f"Concurrent Requests: {c.concurrent_requests}")
        print(f"Total tiles: {total}")
        print()

        if c.dry_run:
            print("Dry run, nothing downloaded.")
            return FetchResult()

        if not c.verify_tls:
            logger.debug("TLS certificate verification is disabled")

        addresses = TileCalculator.iter_tiles(c.start_zoom, c.end_zoom, c.x, c.y)
        result = self.fetcher.run(addresses, c.concurrent_requests)

        print(f"\nSuccessfully downloaded {result.completed} tiles")
        if result.failed:
            print(f"Failed to download {result.failed} tiles")
        return result

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        """Command-line options; unset options fall back to --config, then defaults"""
        parser = argparse.ArgumentParser(
            prog='zxy-tiles',
            description='Download raster map tiles from a templated URL into <output-dir>/<z>/<x>/<y>.png.',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=(
                'Examples:\n\n'
                '1) OpenStreetMap style XYZ server, zoom 0 to 4:\n'
                '   zxy-tiles -u "https://tile.example.org/{z}/{x}/{y}.png" -e 4 -o tiles\n\n'
                '2) WMS server with bounding boxes and tile size:\n'
                '   zxy-tiles -u "https://wms.example.org/?bbox={bounds}&width={w}&height={h}" -s 2 -e 6 -c 8\n\n'
                '3) Count tiles without downloading:\n'
                '   zxy-tiles -u "https://tile.example.org/{z}/{x}/{y}.png" -e 12 --dry-run\n\n'
                'Notes:\n'
                '- Placeholders: {z} {x} {y} {bounds} {w} {h}. {bounds} renders (north,south,west,east).\n'
                '- TLS certificates are NOT verified unless --verify-tls is given.\n'
                '- Failed tiles are reported but do not change the exit status.'
            )
        )
        parser.add_argument('-u', '--url', help='URL template, e.g. http://maps/{z}/{x}/{y}.png')
        parser.add_argument('-o', '--output-dir', help='Tiles are saved here in directories z/x/y (default: .)')
        parser.add_argument('-s', '--start-zoom', type=int, help='Start zoom level, inclusive (default: 0)')
        parser.add_argument('-e', '--end-zoom', type=int, help='End zoom level, inclusive (required)')
        parser.add_argument('-x', '--x', type=int, help='Initial x value (default: 0)')
        parser.add_argument('-y', '--y', type=int, help='Initial y value (default: 0)')
        parser.add_argument('--tile-width', type=int, help='Value substituted for {w} (default: 256)')
        parser.add_argument('--tile-height', type=int, help='Value substituted for {h} (default: 256)')
        parser.add_argument('-c', '--concurrent-requests', '--concurrent-threads', dest='concurrent_requests',
                            type=int, help='Maximum number of simultaneous downloads (default: 1)')
        parser.add_argument('--timeout', type=float, help='Per-request timeout in seconds (default: none)')
        parser.add_argument('--verify-tls', action='store_true', default=None,
                            help='Verify server TLS certificates')
        parser.add_argument('--dry-run', action='store_true', default=None,
                            help='Print the number of tiles and exit')
        parser.add_argument('--config', help='JSON file providing defaults for any of the options above')
        parser.add_argument('--log-level', help='Logging level, e.g. DEBUG, INFO, WARNING (default: INFO)')
        return parser

    @classmethod
    def from_command_line(cls, argv: Optional[List[str]] = None,
                          downloader: Optional[ITileDownloader] = None) -> 'TileDownloadManager':
        """Parse arguments, set up logging and build a manager"""
        args = cls.build_parser().parse_args(argv)

        config_service = ConfigService()
        file_config = config_service.load_config(args.config)

        LoggingManager.setup_logging(file_config, args.log_level or file_config.get('log_level'))

        overrides = vars(args).copy()
        overrides.pop('config')
        config = config_service.build_download_config(file_config, overrides)
        logger.debug("Using configuration: %s", config)

        return cls(config, downloader=downloader)
