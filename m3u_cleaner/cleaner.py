"""
Runs the three phases: parse, probe, assemble and save.
"""

from typing import Callable, Optional

from termcolor import colored

from . import aprobe, probe
from .assembler import assemble, atomic_write, render_rejects
from .config import CleanerConfig
from .log import banner, get_logger
from .models import Summary
from .parser import parse_file

log = get_logger(__name__)


def progress_printer(step=10) -> Callable:
    """Log probe progress every ``step`` percent."""
    last = {"pct": 0}

    def show(done, total, _result):
        pct = done * 100 // total
        bucket = pct - pct % step
        if bucket > last["pct"] or done == total:
            last["pct"] = bucket
            log.info(f"      Progress: {done}/{total} ({done / total * 100:.1f}%)")

    return show


def clean_playlist(config: CleanerConfig, on_progress: Optional[Callable] = None) -> Summary:
    """
    Clean ``config.input_path`` and write the result to ``config.target_path``.

    Raises InputNotFound / InputUnreadable before anything is probed, and
    OutputWriteError if the cleaned playlist cannot be saved. Dead links only
    show up in the returned counts.
    """
    log.info(banner("--- Phase 1: Parsing playlist and identifying unique links... ---"))
    document, duplicates, _ = parse_file(config.input_path, ignore_case=config.ignore_case)
    unique = len(document.records)
    log.info(f"Found {unique} unique links to check.")
    log.info(f"Skipped {duplicates} duplicate links during parsing.")

    if document.is_empty:
        log.warning(f"No links found in '{config.input_path}', nothing to check.")
        results = []
    else:
        log.info(banner(f"\n--- Phase 2: Checking {unique} unique links in parallel "
                        f"(Throttle: {config.concurrency}, engine: {config.engine})... ---"))
        engine = aprobe if config.engine == "async" else probe
        results = engine.probe_all(
            document.records,
            concurrency=config.concurrency,
            timeout=config.timeout,
            user_agent=config.user_agent,
            keep_server_errors=config.keep_server_errors,
            max_redirects=config.max_redirects,
            on_result=on_progress,
        )

    working = sum(1 for r in results if r.is_working)
    non_working = len(results) - working

    log.info(banner("\n--- Phase 3: Assembling and saving the cleaned playlist... ---"))
    target = config.target_path
    if config.dry_run:
        log.info("Dry run: no files written.")
    else:
        # rejects first: the playlist is only replaced once nothing else can fail
        if config.rejects_path is not None:
            atomic_write(config.rejects_path, render_rejects(results, document.header))
        atomic_write(target, assemble(results, document.header))

    summary = Summary(
        unique=unique,
        duplicates=duplicates,
        working=working,
        non_working=non_working,
        output_path=target,
        rejects_path=config.rejects_path,
        written=not config.dry_run,
    )
    report(summary)
    return summary


def report(summary: Summary):
    log.info("\n--- Summary ---")
    log.info(colored(f"Total unique links checked: {summary.unique}", "yellow"))
    log.info(colored(f"Working links found: {summary.working}", "green"))
    log.info(colored(f"Non-working links removed: {summary.non_working}", "red"))
    log.info(colored(f"Duplicate links skipped: {summary.duplicates}", "dark_grey"))
    if summary.written:
        log.info(colored(f"Cleaned playlist saved to: '{summary.output_path}'", "green"))
        if summary.rejects_path is not None:
            log.info(colored(f"Rejected links saved to: '{summary.rejects_path}'", "dark_grey"))
