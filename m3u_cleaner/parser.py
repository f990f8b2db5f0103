"""
Playlist parsing.

One linear pass over the lines. An ``#EXTINF`` line is held in a single
pending slot and attaches to the URL line that immediately follows it; any
other line clears the slot. Only the first occurrence of a URL is kept.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .errors import InputNotFound, InputUnreadable
from .models import HEADER, LinkRecord, PlaylistDocument


RE_URL = re.compile(r"https?://\S+")
RE_HEADER = re.compile(re.escape(HEADER) + r"(?:\s|$)")


def is_url(line: str) -> bool:
    return RE_URL.match(line) is not None


def read_playlist(path) -> List[str]:
    path = Path(path)
    if not path.exists():
        raise InputNotFound(path)
    if not path.is_file():
        raise InputUnreadable(path, "not a regular file")
    try:
        text = path.read_text(encoding="utf-8-sig", errors="ignore")
    except OSError as e:
        raise InputUnreadable(path, e.strerror or str(e)) from e
    return text.splitlines()


def parse_lines(lines: Iterable[str], ignore_case: bool = False) -> Tuple[PlaylistDocument, int, int]:
    """
    Returns (document, duplicate_count, url_lines).
    url_lines counts every URL line seen, duplicates included.
    """
    header = None
    records: List[LinkRecord] = []
    seen = set()
    duplicates = 0
    url_lines = 0
    pending: Optional[str] = None
    first = True

    for raw in lines:
        line = raw.strip()
        if not line:
            continue

        if first:
            first = False
            if RE_HEADER.match(line):
                header = line
                continue

        if line.startswith("#EXTINF"):
            pending = line
            continue

        if is_url(line):
            url_lines += 1
            key = line.lower() if ignore_case else line
            if key in seen:
                duplicates += 1
            else:
                seen.add(key)
                records.append(LinkRecord(url=line, extinf=pending, original_index=len(records)))

        # anything else (other directives, comments, junk) breaks the EXTINF pairing
        pending = None

    return PlaylistDocument(header=header, records=tuple(records)), duplicates, url_lines


def parse_file(path, ignore_case: bool = False) -> Tuple[PlaylistDocument, int, int]:
    return parse_lines(read_playlist(path), ignore_case=ignore_case)
