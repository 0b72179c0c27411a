import logging
import threading
from typing import Optional

import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.exceptions import InsecureRequestWarning

from zxy_tiles.interfaces.tile_server import ITileDownloader
from zxy_tiles.models.tile_server import TileRequest
from zxy_tiles.utils.file_utils import FileUtils
from zxy_tiles.exceptions.tile_downloader_exceptions import (
    TransportError, HTTPStatusError, EmptyBodyError, FileSystemError
)

logger = logging.getLogger(__name__)


class TileDownloadService(ITileDownloader):
    """Fetches one tile over HTTP and streams it to disk.

    Sessions are kept per worker thread, each holding a single pooled
    connection per host. TLS certificates are not verified unless
    verify_tls is set, so self-signed tile servers can be mirrored.
    """

    def __init__(self, timeout: Optional[float] = None, verify_tls: bool = False,
                 headers: Optional[dict] = None, chunk_size: int = 64 * 1024):
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.headers = headers or {}
        self.chunk_size = chunk_size
        self._local = threading.local()

        if not verify_tls:
            urllib3.disable_warnings(InsecureRequestWarning)

    def create_session(self) -> requests.Session:
        """Create session for downloads; no retries are configured"""
        session = requests.Session()

        adapter = HTTPAdapter(
            max_retries=0,
            pool_connections=1,
            pool_maxsize=1
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.verify = self.verify_tls
        session.headers.update(self.headers)

        return session

    def get_session(self) -> requests.Session:
        """Session owned by the calling thread"""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self.create_session()
            self._local.session = session
        return session

    def download_tile(self, request: TileRequest) -> int:
        """Download a single tile, returning the number of bytes written"""
        url = request.url
        path = request.destination_path

        try:
            response = self.get_session().get(url, timeout=self.timeout, stream=True)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        try:
            try:
                response.raise_for_status()
            except requests.HTTPError as e:
                raise HTTPStatusError(f"HTTP {response.status_code} for {url}", url=url,
                                      status_code=response.status_code) from e

            try:
                written = self._save_body(response, url, path)
            except requests.RequestException as e:
                raise TransportError(f"Reading body of {url} failed: {e}", url=url) from e
        finally:
            response.close()

        # Zero bytes counts as a failed fetch, even on a 2xx answer
        if written == 0:
            FileUtils.remove_file(path)
            raise EmptyBodyError(f"Empty content received from {url}", url=url)

        logger.debug("Saved %s to %s (%d bytes)", url, path, written)
        return written

    def _save_body(self, response: requests.Response, url: str, path: str) -> int:
        try:
            f = open(path, 'wb')
        except OSError as e:
            raise FileSystemError(f"Cannot create {path}: {e}", url=url, path=path) from e

        written = 0
        try:
            with f:
                for chunk in response.iter_content(chunk_size=self.chunk_size):
                    if not chunk:
                        continue
                    try:
                        f.write(chunk)
                    except OSError as e:
                        raise FileSystemError(f"Cannot write {path}: {e}", url=url, path=path) from e
                    written += len(chunk)
        except (requests.RequestException, FileSystemError):
            # A truncated tile must not be left at its final path
            FileUtils.remove_file(path)
            raise
        return written
