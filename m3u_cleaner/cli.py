import argparse
import sys

from . import __version__
from .cleaner import clean_playlist, progress_printer
from .config import (
    DEFAULT_CONCURRENCY,
    DEFAULT_ENGINE,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ENGINES,
    CleanerConfig,
)
from .errors import CleanerError
from .log import get_logger, setup_logging

log = get_logger(__name__)


def build_parser():
    p = argparse.ArgumentParser(
        prog="m3u-clean",
        description="Validate an M3U playlist in parallel, removing non-working and duplicate links.",
    )
    p.add_argument("-i", "--input", required=True, help="Path to the input M3U playlist file")
    p.add_argument("-o", "--output", default=None,
                   help="Where to save the cleaned playlist (default: overwrite the input)")
    p.add_argument("-t", "--throttle", type=int, default=DEFAULT_CONCURRENCY,
                   help=f"Maximum number of links checked simultaneously (default {DEFAULT_CONCURRENCY})")
    p.add_argument("-s", "--timeout", type=float, default=DEFAULT_TIMEOUT,
                   help=f"Timeout for each request in seconds (default {DEFAULT_TIMEOUT:g})")
    p.add_argument("-u", "--user-agent", default=DEFAULT_USER_AGENT,
                   help=f"User-Agent for requests (default '{DEFAULT_USER_AGENT}')")
    p.add_argument("-k", "--keep-server-errors", action="store_true",
                   help="Keep links that return HTTP server errors (500-599)")
    p.add_argument("--ignore-case", action="store_true",
                   help="Treat URLs differing only in letter case as duplicates")
    p.add_argument("--max-redirects", type=int, default=DEFAULT_MAX_REDIRECTS,
                   help=f"Redirects followed before a link counts as broken (default {DEFAULT_MAX_REDIRECTS})")
    p.add_argument("--engine", choices=ENGINES, default=DEFAULT_ENGINE,
                   help=f"Probe with a thread pool or with asyncio (default {DEFAULT_ENGINE})")
    p.add_argument("--rejects", default=None, help="Also save the removed links to this M3U file")
    p.add_argument("--dry-run", action="store_true", help="Check links and report, but write nothing")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every link's result")
    p.add_argument("--version", action="version", version=f"m3u-clean {__version__}")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = CleanerConfig(
            input_path=args.input,
            output_path=args.output,
            concurrency=args.throttle,
            timeout=args.timeout,
            user_agent=args.user_agent,
            keep_server_errors=args.keep_server_errors,
            ignore_case=args.ignore_case,
            max_redirects=args.max_redirects,
            engine=args.engine,
            rejects_path=args.rejects,
            dry_run=args.dry_run,
        )
        clean_playlist(config, on_progress=progress_printer())
    except CleanerError as e:
        log.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        log.error("[!] Interrupted by user, playlist left unchanged.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
