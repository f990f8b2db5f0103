"""
m3u_cleaner - remove dead and duplicate links from M3U playlists.

Parses an extended M3U file, drops repeated URLs, probes every remaining
link with a single HTTP HEAD request (bounded concurrency), and rewrites the
playlist with only the working links, in their original order.
"""

from .config import CleanerConfig
from .errors import (
    CleanerError,
    ConfigError,
    InputNotFound,
    InputUnreadable,
    OutputWriteError,
)
from .cleaner import clean_playlist

__version__ = "1.0.0"

__all__ = [
    "CleanerConfig",
    "CleanerError",
    "ConfigError",
    "InputNotFound",
    "InputUnreadable",
    "OutputWriteError",
    "clean_playlist",
]
