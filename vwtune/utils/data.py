from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List


def load_records(path: str | os.PathLike, skip_blank: bool = True) -> List[str]:
    """
    Read a newline delimited dataset into a list of records.

    Args:
        path: local text file, one vw example per line
        skip_blank: drop empty lines (vw treats them as example separators)

    Returns:
        records in file order, without trailing newlines
    """
    with open(path, "r", encoding="utf-8") as f:
        records = [line.rstrip("\r\n") for line in f]
    if skip_blank:
        records = [r for r in records if r.strip()]
    return records


def write_records(path: str | os.PathLike, records: Iterable[str]) -> int:
    """Write records one per line; return how many were written."""
    n = 0
    with open(Path(path), "w", encoding="utf-8") as f:
        for record in records:
            f.write(record.rstrip("\r\n"))
            f.write("\n")
            n += 1
    return n
