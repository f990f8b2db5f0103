import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import OutputWriteError
from .models import LinkRecord, ProbeResult


def working_records(results: Iterable[ProbeResult]) -> List[LinkRecord]:
    """Working links, back in their original order."""
    return sorted((r.record for r in results if r.is_working), key=lambda rec: rec.original_index)


def rejected_records(results: Iterable[ProbeResult]) -> List[LinkRecord]:
    return sorted((r.record for r in results if not r.is_working), key=lambda rec: rec.original_index)


def render(records: Iterable[LinkRecord], header: Optional[str] = None) -> str:
    lines = [header] if header is not None else []
    for record in records:
        lines.extend(record.lines())
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def assemble(results: Iterable[ProbeResult], header: Optional[str] = None) -> str:
    return render(working_records(results), header)


def render_rejects(results: Iterable[ProbeResult], header: Optional[str] = None) -> str:
    return render(rejected_records(results), header)


def atomic_write(path, text: str):
    """
    Write text next to path in a temporary file, then rename it over path.
    The existing file is left untouched if anything fails.
    """
    path = Path(path)
    dir_ = path.parent
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile("w", dir=dir_, prefix=f".{path.name}.", suffix=".tmp",
                                         delete=False, encoding="utf-8", newline="\n") as tmp:
            tmp_name = tmp.name
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(path, e.strerror or str(e)) from e
    except BaseException:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
