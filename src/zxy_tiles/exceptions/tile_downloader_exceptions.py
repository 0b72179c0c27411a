from typing import Optional


class TileDownloaderException(Exception):
    """Base exception for tile downloader"""
    pass


class ConfigurationError(TileDownloaderException):
    """Configuration related errors"""
    pass


class ValidationError(ConfigurationError):
    """Validation related errors"""
    pass


class DownloadError(TileDownloaderException):
    """Download related errors, scoped to a single tile"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TransportError(DownloadError):
    """Connection, DNS, TLS or timeout failure"""
    pass


class HTTPStatusError(DownloadError):
    """Server answered with a non-success status"""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message, url)
        self.status_code = status_code


class EmptyBodyError(DownloadError):
    """Response produced zero bytes on disk"""
    pass


class FileSystemError(DownloadError):
    """Directory or tile file could not be created"""

    def __init__(self, message: str, url: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message, url)
        self.path = path
