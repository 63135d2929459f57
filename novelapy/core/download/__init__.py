"""Safe image downloads."""
from .downloader import SafeDownloader, DATA_URI_PATTERN

__all__ = [
    'SafeDownloader',
    'DATA_URI_PATTERN',
]
