from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def remove_quietly(path: str | os.PathLike) -> None:
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as exc:
        logger.warning(f"Could not remove {path}: {exc}")


@contextlib.contextmanager
def scoped_temp_file(
    prefix: str, suffix: str = "", directory: str | os.PathLike | None = None
) -> Iterator[Path]:
    """Reserve a unique file path and remove the file on every exit path."""
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=directory)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        remove_quietly(path)


def model_file(fold: int, directory: str | os.PathLike | None = None):
    """Scoped model file for one fold's train/test pair."""
    return scoped_temp_file(prefix=f"model-fold-{fold}-", suffix=".vw", directory=directory)
