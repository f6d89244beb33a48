"""Line sources feeding the loader: in-memory collections or files."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import IO, ContextManager, Iterable, Iterator, List, Optional, Protocol, Union

PathLike = Union[str, Path]


class FileSystem(Protocol):
    """Anything able to open a named path for text reading."""

    def open(self, path: PathLike, mode: str = "r") -> ContextManager[IO[str]]: ...


class LocalFileSystem:
    """File system backed by the local disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def open(self, path: PathLike, mode: str = "r") -> ContextManager[IO[str]]:
        path = Path(path)
        if "r" in mode and not path.exists():
            raise FileNotFoundError(f"Data file not found at {path}.")
        return path.open(mode, encoding=self.encoding)


def _clean(line: str) -> Optional[str]:
    line = line.rstrip("\r\n")
    return line if line.strip() else None


def iter_rows(rows: Iterable[str]) -> Iterator[str]:
    """Yield rows without line terminators, skipping blank lines."""

    for row in rows:
        cleaned = _clean(row)
        if cleaned is not None:
            yield cleaned


@contextmanager
def open_lines(path: PathLike, fs: Optional[FileSystem] = None) -> Iterator[Iterator[str]]:
    """Scoped line-by-line reader; the file is closed on exit or error."""

    fs = fs or LocalFileSystem()
    with fs.open(path, "r") as fh:
        yield iter_rows(fh)


def read_lines(path: PathLike, fs: Optional[FileSystem] = None) -> List[str]:
    with open_lines(path, fs) as lines:
        return list(lines)
