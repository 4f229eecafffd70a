"""The set of files in an opened save folder and its packed size."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

ENTRY_HEADER_SIZE = 512
PAGE_SIZE = 1024


@dataclass(frozen=True)
class VirtualFile:
    """A file of the opened folder."""

    name: str
    file_path: Path
    size: int


def calc_size(size: int) -> int:
    """Round a size up to the next whole page."""
    return (size + PAGE_SIZE - 1) & -PAGE_SIZE


def calculate_size(files: Iterable[VirtualFile]) -> int:
    """Size of a PSU holding the files, reading each size from disk."""
    total = sum(
        ENTRY_HEADER_SIZE + calc_size(os.stat(file.file_path).st_size) for file in files
    )
    return ENTRY_HEADER_SIZE * 3 + total


class Files:
    """An ordered list of files together with their calculated PSU size."""

    def __init__(self, files: Iterable[VirtualFile] = ()) -> None:
        self._files: list[VirtualFile] = list(files)
        self._size = 0

    @classmethod
    def from_files(cls, files: Iterable[VirtualFile]) -> Files:
        """Build the list, compute its size and sort it by name."""
        result = cls(files)
        result._recalculate()
        result._files.sort(key=lambda file: file.name)
        return result

    def add_file(self, file_path: str | os.PathLike) -> None:
        """Append a file from disk and update the calculated size."""
        path = Path(file_path)
        if not path.name:
            raise ValueError(f"invalid file name: {str(path)!r}")
        size = path.stat().st_size
        self._files.append(VirtualFile(path.name, path, size))
        self._recalculate()

    def _recalculate(self) -> None:
        self._size = calculate_size(self._files)

    def calculated_size(self) -> int:
        """The PSU size computed at the last change."""
        return self._size

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[VirtualFile]:
        return iter(self._files)

    def __getitem__(self, index: int) -> VirtualFile:
        return self._files[index]


def read_folder(folder: str | os.PathLike) -> Files:
    """List the regular files directly inside a folder, sorted by name."""
    with os.scandir(folder) as entries:
        files = [
            VirtualFile(entry.name, Path(entry.path), Path(entry.path).stat().st_size)
            for entry in entries
            if entry.is_file(follow_symlinks=False)
        ]
    return Files.from_files(files)