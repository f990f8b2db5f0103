from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

HEADER = "#EXTM3U"
TRANSPORT_FAILURE = 0   # status recorded when no HTTP response arrived (curl's 000)


@dataclass(frozen=True)
class LinkRecord:
    url: str
    extinf: Optional[str]
    original_index: int

    def lines(self):
        if self.extinf:
            return [self.extinf, self.url]
        return [self.url]


@dataclass(frozen=True)
class PlaylistDocument:
    header: Optional[str]
    records: Tuple[LinkRecord, ...]

    @property
    def has_header(self) -> bool:
        return self.header is not None

    @property
    def is_empty(self) -> bool:
        return not self.records


@dataclass(frozen=True)
class ProbeResult:
    record: LinkRecord
    is_working: bool
    status_code: int
    error_detail: Optional[str] = None

    @property
    def transport_failed(self) -> bool:
        return self.status_code == TRANSPORT_FAILURE


@dataclass(frozen=True)
class Summary:
    unique: int
    duplicates: int
    working: int
    non_working: int
    output_path: Path
    rejects_path: Optional[Path] = None
    written: bool = True
