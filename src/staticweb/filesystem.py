"""Read-only file system seam for the file server.

A ``FileSystem`` is anything with ``open(name) -> File``. ``Dir`` serves
a real directory and keeps every name inside it; ``ListingFileSystem``
wraps another file system and, when listing is disabled, hands out
``NoListFile`` handles whose ``readdir()`` is always empty.

All methods here block. The file server calls them from a worker thread.
"""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FileInfo:
    """What the file server needs to know about one file or directory."""

    name: str
    size: int
    mtime: float
    is_dir: bool

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> FileInfo:
        import stat as stat_module

        return cls(
            name=name,
            size=st.st_size,
            mtime=st.st_mtime,
            is_dir=stat_module.S_ISDIR(st.st_mode),
        )


@runtime_checkable
class File(Protocol):
    """An open file or directory handle."""

    def stat(self) -> FileInfo: ...
    def read(self, size: int = -1) -> bytes: ...
    def seek(self, offset: int, whence: int = 0) -> int: ...
    def readdir(self) -> list[FileInfo]: ...
    def close(self) -> None: ...


@runtime_checkable
class FileSystem(Protocol):
    """Opens files by slash-separated name, rooted at ``/``."""

    def open(self, name: str) -> File: ...


class OSFile:
    """A ``File`` backed by a real path.

    Regular files get a binary handle; directories only support
    ``stat()`` and ``readdir()``.
    """

    __slots__ = ("_handle", "_info", "_path")

    def __init__(self, path: Path) -> None:
        self._path = path
        self._info = FileInfo.from_stat(path.name, path.stat())
        self._handle: BinaryIO | None = None
        if not self._info.is_dir:
            self._handle = path.open("rb")

    def __enter__(self) -> OSFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def stat(self) -> FileInfo:
        return self._info

    def read(self, size: int = -1) -> bytes:
        if self._handle is None:
            raise IsADirectoryError(str(self._path))
        return self._handle.read(size)

    def seek(self, offset: int, whence: int = 0) -> int:
        if self._handle is None:
            raise IsADirectoryError(str(self._path))
        return self._handle.seek(offset, whence)

    def readdir(self) -> list[FileInfo]:
        if not self._info.is_dir:
            raise NotADirectoryError(str(self._path))
        entries: list[FileInfo] = []
        with os.scandir(self._path) as it:
            for entry in it:
                try:
                    entries.append(FileInfo.from_stat(entry.name, entry.stat()))
                except FileNotFoundError:
                    # Removed between scandir() and stat()
                    continue
        return entries

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


class Dir:
    """A ``FileSystem`` over one directory of the host file system.

    Names are cleaned as URL paths before they touch the disk, and the
    final path, after symlink resolution, must stay inside the root:
    anything else is a ``PermissionError``.
    """

    __slots__ = ("_resolved", "root")

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)
        self._resolved = self.root.resolve()

    def __repr__(self) -> str:
        return f"Dir({str(self.root)!r})"

    def open(self, name: str) -> OSFile:
        if "\x00" in name:
            raise FileNotFoundError(name)
        if os.sep != "/" and os.sep in name:
            raise FileNotFoundError(name)
        relative = posixpath.normpath("/" + name).lstrip("/")
        path = self.root / relative if relative else self.root
        if not path.resolve().is_relative_to(self._resolved):
            raise PermissionError(f"{name!r} resolves outside {str(self.root)!r}")
        return OSFile(path)


class NoListFile:
    """A ``File`` that refuses to enumerate its entries.

    ``readdir()`` always returns an empty list and never raises, so the
    file server renders an empty listing. Every other call goes to the
    wrapped file unchanged.
    """

    __slots__ = ("file",)

    def __init__(self, file: File) -> None:
        self.file = file

    def __enter__(self) -> NoListFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def stat(self) -> FileInfo:
        return self.file.stat()

    def read(self, size: int = -1) -> bytes:
        return self.file.read(size)

    def seek(self, offset: int, whence: int = 0) -> int:
        return self.file.seek(offset, whence)

    def readdir(self) -> list[FileInfo]:
        return []

    def close(self) -> None:
        self.file.close()


class ListingFileSystem:
    """Wraps a ``FileSystem`` and optionally suppresses directory listings.

    The listing mode is fixed at construction. Open errors from the
    wrapped file system propagate unchanged.
    """

    __slots__ = ("filesystem", "list_directories")

    def __init__(self, filesystem: FileSystem, *, list_directories: bool = False) -> None:
        self.filesystem = filesystem
        self.list_directories = list_directories

    def open(self, name: str) -> File:
        file = self.filesystem.open(name)
        if not self.list_directories:
            return NoListFile(file)
        return file
