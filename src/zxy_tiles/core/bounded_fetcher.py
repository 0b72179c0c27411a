import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, Optional, Tuple

from zxy_tiles.interfaces.tile_server import ITileDownloader, ITileRequestRenderer
from zxy_tiles.models.tile_server import TileAddress, TileRequest, FetchResult
from zxy_tiles.utils.file_utils import FileUtils
from zxy_tiles.exceptions.tile_downloader_exceptions import DownloadError, FileSystemError

logger = logging.getLogger(__name__)


class BoundedTileFetcher:
    """Downloads tiles concurrently without exceeding a fixed number of in-flight fetches.

    The dispatch loop holds a permit for every submitted task and blocks
    once all permits are taken, so the address iterable is consumed only
    as fast as slots free up. Nothing beyond the in-flight tasks is kept
    in memory.
    """

    def __init__(self, renderer: ITileRequestRenderer, downloader: ITileDownloader,
                 output_dir: str = '.', progress_interval: int = 1000):
        self.renderer = renderer
        self.downloader = downloader
        self.output_dir = output_dir
        self.progress_interval = progress_interval

    def run(self, addresses: Iterable[TileAddress], concurrency_limit: int) -> FetchResult:
        """Fetch every address and return once all dispatched tasks are done.

        Per-tile failures are logged and counted. A directory that cannot be
        created aborts dispatch; tasks already running still finish before
        the FileSystemError is raised.
        """
        if concurrency_limit < 1:
            raise ValueError(f"concurrency_limit must be at least 1, got {concurrency_limit}")

        result = FetchResult()
        lock = threading.Lock()
        slots = threading.BoundedSemaphore(concurrency_limit)
        last_directory: Optional[Tuple[int, int]] = None

        def on_done(future: Future, request: TileRequest) -> None:
            try:
                error = future.exception()
                if error is None:
                    succeeded = True
                elif isinstance(error, DownloadError):
                    logger.warning("Failed to save %s: %s", request.url, error)
                    succeeded = False
                else:
                    logger.error("Unexpected error saving %s", request.url,
                                 exc_info=(type(error), error, error.__traceback__))
                    succeeded = False

                with lock:
                    if succeeded:
                        result.completed += 1
                    else:
                        result.failed += 1
                    done, failed = result.total, result.failed
                if self.progress_interval and done % self.progress_interval == 0:
                    logger.info("Processed %d tiles (%d failed)", done, failed)
            finally:
                slots.release()

        with ThreadPoolExecutor(max_workers=concurrency_limit) as executor:
            for address in addresses:
                key = (address.zoom, address.x)
                if key != last_directory:
                    self._ensure_directory(address)
                    last_directory = key

                request = self.renderer.render(address)

                slots.acquire()
                try:
                    future = executor.submit(self.downloader.download_tile, request)
                except BaseException:
                    slots.release()
                    raise
                future.add_done_callback(lambda f, r=request: on_done(f, r))

        logger.info("Fetch finished: %d saved, %d failed", result.completed, result.failed)
        return result

    def _ensure_directory(self, address: TileAddress) -> None:
        directory = FileUtils.get_tile_directory(self.output_dir, address.zoom, address.x)
        try:
            FileUtils.ensure_directory_exists(directory)
        except OSError as e:
            raise FileSystemError(f"Cannot create directory {directory}: {e}", path=directory) from e
