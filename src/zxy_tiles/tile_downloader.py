#!/usr/bin/env python3
"""
Tile Downloader - Main Entry Point
Downloads a z/x/y tile pyramid from a templated URL
"""

import sys
import logging
from typing import List, Optional

from zxy_tiles.core.tile_download_manager import TileDownloadManager
from zxy_tiles.exceptions.tile_downloader_exceptions import TileDownloaderException


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the tile downloader application.

    Returns 0 once a run finishes, even when some tiles failed.
    """
    try:
        manager = TileDownloadManager.from_command_line(argv)
        logging.getLogger(__name__).info("Starting tile download")
        manager.run()
        return 0

    except KeyboardInterrupt:
        print("\nDownload interrupted by user.")
        return 1
    except TileDownloaderException as e:
        print(f"\nError: {e}")
        return 1
    except Exception as e:
        logging.getLogger(__name__).exception("Unexpected error")
        print(f"\nUnexpected error: {e}")
        print("Please check your configuration and try again.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
